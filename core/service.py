"""
지출 정산 서비스

채팅 어댑터가 호출하는 코어 진입점.
LedgerStore(기록)와 정산 엔진(계산)을 연결.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from core.ledger.money import to_decimal
from core.ledger.store import LedgerStore
from core.settlement.engine import compute_balances
from core.settlement.engine import settle as settle_snapshot
from core.settlement.types import SettlementReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpenseConfirmation:
    """지출 기록 확인

    Attributes:
        name: 참여자 표시 이름
        amount: 이번에 기록된 금액
        running_total: 해당 참여자의 누적 지출
    """

    name: str
    amount: Decimal
    running_total: Decimal


class ExpenseService:
    """지출 정산 서비스

    사용 예시:
    ```python
    service = ExpenseService()

    service.touch_participant(chat_id, user_id, "alice")
    confirmation = service.record_expense(chat_id, user_id, "alice", "1500")

    report = service.settle(chat_id)
    service.reset(chat_id)
    ```

    Args:
        store: Ledger 저장소 (None이면 새로 생성)
    """

    def __init__(self, store: LedgerStore | None = None):
        self.store = store if store is not None else LedgerStore()

    def touch_participant(self, group_key: int, participant_id: int, name: str) -> None:
        """참여자 이름 등록/갱신 (모든 수신 메시지에서 호출)"""
        self.store.record_name(group_key, participant_id, name)

    def record_expense(
        self,
        group_key: int,
        participant_id: int,
        name: str,
        amount_text: str,
    ) -> ExpenseConfirmation:
        """지출 기록

        Args:
            group_key: 그룹(채팅) 키
            participant_id: 참여자 ID
            name: 표시 이름
            amount_text: 사용자가 입력한 금액 문자열

        Returns:
            ExpenseConfirmation

        Raises:
            InvalidAmountError: 유효하지 않은 금액
        """
        entry, total_minor = self.store.append_and_total(
            group_key, participant_id, name, amount_text
        )

        logger.info(
            "지출 기록",
            extra={
                "group_key": group_key,
                "participant_id": participant_id,
                "amount_minor": entry.amount_minor,
            },
        )

        return ExpenseConfirmation(
            name=name,
            amount=entry.amount,
            running_total=to_decimal(total_minor),
        )

    def settle(self, group_key: int) -> SettlementReport:
        """정산 계산

        호출 시점의 스냅샷으로 계산하므로 결과는 캐시하지 않음.

        Raises:
            NoDataError: 지출 기록이 없는 경우
        """
        report = settle_snapshot(self.store.snapshot(group_key))

        logger.info(
            "정산 요청",
            extra={
                "group_key": group_key,
                "status": report.status.value,
                "transfers": len(report.transfers),
            },
        )
        return report

    def balances(self, group_key: int) -> dict[int, Decimal]:
        """참여자별 잔액 조회 (양수 = 받을 돈, 음수 = 낼 돈)

        Raises:
            NoDataError: 지출 기록이 없는 경우
        """
        return compute_balances(self.store.snapshot(group_key))

    def reset(self, group_key: int) -> None:
        """그룹 데이터 전체 삭제"""
        self.store.reset(group_key)
