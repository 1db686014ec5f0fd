"""
Ledger 저장소

그룹(채팅) 키 → Ledger 매핑을 메모리에 보관.
잠금 규칙은 저장소 내부에서만 관리하며 호출자는 lock을 보지 않음.

잠금 규칙:
- registry lock: 키 → slot 매핑 보호 (생성/삭제)
- slot lock: 해당 그룹 Ledger 보호 (append/name upsert/snapshot)
- 획득 순서는 항상 registry → slot
- reset된 slot은 retired로 표시되며, 이를 잡은 writer는 새 slot으로 재시도
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, TypeVar

from core.ledger.money import parse_amount
from core.ledger.types import Entry, Ledger, LedgerSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Slot:
    """Ledger + 그룹 단위 lock"""

    ledger: Ledger
    lock: threading.Lock = field(default_factory=threading.Lock)
    retired: bool = False


class LedgerStore:
    """Ledger 저장소

    그룹별 Ledger를 lazy 생성하고, 그룹 단위 lock으로 변경을 직렬화.
    서로 다른 그룹의 작업은 registry 조회 구간 외에는 서로 막지 않음.

    사용 예시:
    ```python
    store = LedgerStore()

    store.record_name(chat_id, user_id, "alice")
    store.append_expense(chat_id, user_id, "alice", "1500")

    snapshot = store.snapshot(chat_id)
    store.reset(chat_id)
    ```
    """

    def __init__(self) -> None:
        self._slots: dict[int, _Slot] = {}
        self._registry_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # 내부
    # -------------------------------------------------------------------------

    def _get_or_create_slot(self, group_key: int) -> _Slot:
        with self._registry_lock:
            slot = self._slots.get(group_key)
            if slot is None:
                slot = _Slot(ledger=Ledger(group_key=group_key))
                self._slots[group_key] = slot
                logger.debug(f"Ledger 생성: group={group_key}")
            return slot

    def _with_ledger(self, group_key: int, fn: Callable[[Ledger], T]) -> T:
        """그룹 lock을 잡은 상태로 fn(ledger) 실행

        slot을 얻은 직후 다른 작업이 reset하면 retired slot을 버리고 재시도.
        """
        while True:
            slot = self._get_or_create_slot(group_key)
            with slot.lock:
                if slot.retired:
                    continue
                return fn(slot.ledger)

    # -------------------------------------------------------------------------
    # 공개 API
    # -------------------------------------------------------------------------

    def get_or_create(self, group_key: int) -> Ledger:
        """그룹 Ledger 반환 (없으면 생성)

        반환된 Ledger는 reset 전까지 같은 객체.
        변경은 저장소 메서드를 통해서만 수행해야 함.
        """
        return self._get_or_create_slot(group_key).ledger

    def record_name(self, group_key: int, participant_id: int, name: str) -> None:
        """참여자 표시 이름 upsert (멱등)"""

        def _upsert(ledger: Ledger) -> None:
            ledger.names[participant_id] = name

        self._with_ledger(group_key, _upsert)

    def append_expense(
        self,
        group_key: int,
        participant_id: int,
        name: str,
        amount: str | int | float | Decimal,
    ) -> Entry:
        """지출 기록 추가

        이름 매핑도 함께 갱신하여 Entry의 참여자가 항상 이름을 갖도록 보장.

        Args:
            group_key: 그룹(채팅) 키
            participant_id: 참여자 ID
            name: 표시 이름
            amount: 금액 (문자열/숫자)

        Returns:
            추가된 Entry

        Raises:
            InvalidAmountError: 숫자 아님, 0 이하, 무한대/NaN
        """
        # 검증은 lock 밖에서 (실패 시 Ledger를 만들지 않음)
        amount_minor = parse_amount(amount)
        entry = Entry(participant_id=participant_id, name=name, amount_minor=amount_minor)

        def _append(ledger: Ledger) -> None:
            ledger.names[participant_id] = name
            ledger.entries.append(entry)

        self._with_ledger(group_key, _append)
        return entry

    def append_and_total(
        self,
        group_key: int,
        participant_id: int,
        name: str,
        amount: str | int | float | Decimal,
    ) -> tuple[Entry, int]:
        """지출 추가 + 해당 참여자 누적 합계(최소 단위)를 원자적으로 반환"""
        amount_minor = parse_amount(amount)
        entry = Entry(participant_id=participant_id, name=name, amount_minor=amount_minor)

        def _append(ledger: Ledger) -> int:
            ledger.names[participant_id] = name
            ledger.entries.append(entry)
            return _sum_for(ledger, participant_id)

        return entry, self._with_ledger(group_key, _append)

    def participant_total(self, group_key: int, participant_id: int) -> int:
        """참여자 지출 합계 (최소 단위)"""
        return self._with_ledger(group_key, lambda ledger: _sum_for(ledger, participant_id))

    def snapshot(self, group_key: int) -> LedgerSnapshot:
        """일관된 스냅샷 (lock 하에서 복사)"""
        return self._with_ledger(group_key, lambda ledger: ledger.snapshot())

    def reset(self, group_key: int) -> bool:
        """그룹 Ledger 삭제

        내용을 비우는 것이 아니라 매핑에서 제거하여 메모리를 회수.
        이후 접근 시 빈 Ledger가 새로 생성됨.

        Returns:
            삭제할 Ledger가 있었는지 여부
        """
        with self._registry_lock:
            slot = self._slots.pop(group_key, None)
            if slot is None:
                return False
            # 진행 중인 append가 끝날 때까지 대기 후 retired 표시
            with slot.lock:
                slot.retired = True

        logger.info(f"Ledger 삭제: group={group_key}")
        return True

    def __contains__(self, group_key: object) -> bool:
        with self._registry_lock:
            return group_key in self._slots

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._slots)


def _sum_for(ledger: Ledger, participant_id: int) -> int:
    return sum(e.amount_minor for e in ledger.entries if e.participant_id == participant_id)
