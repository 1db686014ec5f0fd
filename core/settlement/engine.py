"""
정산 엔진

Ledger 스냅샷으로부터 참여자별 잔액을 계산하고,
모든 잔액을 0으로 만드는 이체 목록을 Greedy 매칭으로 생성.

금액 표현:
    잔액은 정수 scaled 단위로 계산 (1 scaled = 1 / headcount cent).
        scaled[p] = paid[p] * headcount - total
    = (paid[p] - total / headcount) * headcount  (cents)
    나눗셈이 없어 누적 오차가 없고, 합계는 정확히 0.
    Decimal 변환은 출력 시점에만 수행.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Mapping

from core.constants import Money
from core.ledger.money import scaled_to_decimal, to_decimal
from core.ledger.types import LedgerSnapshot, NoDataError
from core.settlement.types import SettlementReport, Transfer
from core.types import ReportStatus

logger = logging.getLogger(__name__)


# 허용 오차 (표시 단위 기준)
EPSILON = Decimal("0.01")


@dataclass
class _Position:
    """채무자/채권자 (잔여 금액은 scaled 단위, 항상 양수)"""

    participant_id: int
    remaining: int


@dataclass(frozen=True)
class _Tally:
    """지출 집계 결과"""

    paid: dict[int, int]  # 참여자 → 지출 합계 (cents, 최초 등장 순서)
    total: int  # 그룹 총 지출 (cents)

    @property
    def headcount(self) -> int:
        return len(self.paid)


def _tally(snapshot: LedgerSnapshot) -> _Tally:
    """총액 및 참여자별 지출 합계"""
    paid: dict[int, int] = {}
    total = 0
    for entry in snapshot.entries:
        total += entry.amount_minor
        paid[entry.participant_id] = paid.get(entry.participant_id, 0) + entry.amount_minor
    return _Tally(paid=paid, total=total)


def _scaled_balances(tally: _Tally) -> dict[int, int]:
    """scaled 잔액 (양수 = 받을 돈, 음수 = 낼 돈)"""
    n = tally.headcount
    return {pid: amount * n - tally.total for pid, amount in tally.paid.items()}


def compute_balances(snapshot: LedgerSnapshot) -> dict[int, Decimal]:
    """참여자별 잔액 (지출 합계 - 1인당 분담액)

    지출 기록이 있는 참여자만 포함 (이름만 등록된 참여자는 제외).

    Args:
        snapshot: Ledger 스냅샷

    Returns:
        참여자 ID → 잔액 (Decimal, 소수점 2자리)

    Raises:
        NoDataError: 지출 기록이 없는 경우
    """
    if snapshot.is_empty:
        raise NoDataError(snapshot.group_key)

    tally = _tally(snapshot)
    return {
        pid: scaled_to_decimal(scaled, tally.headcount)
        for pid, scaled in _scaled_balances(tally).items()
    }


def _partition(balances: dict[int, int], epsilon: int) -> tuple[list[_Position], list[_Position]]:
    """채무자/채권자 분류 후 결정적 순서로 정렬

    정렬 기준: 금액 내림차순 → 참여자 ID 오름차순
    """
    debtors: list[_Position] = []
    creditors: list[_Position] = []

    for pid, scaled in balances.items():
        if scaled < -epsilon:
            debtors.append(_Position(pid, -scaled))
        elif scaled > epsilon:
            creditors.append(_Position(pid, scaled))

    def sort_key(p: _Position) -> tuple[int, int]:
        return (-p.remaining, p.participant_id)

    debtors.sort(key=sort_key)
    creditors.sort(key=sort_key)
    return debtors, creditors


def _match(
    debtors: list[_Position],
    creditors: list[_Position],
    epsilon: int,
) -> list[tuple[int, int, int]]:
    """Greedy 2-커서 매칭

    Returns:
        (채무자 ID, 채권자 ID, scaled 금액) 목록
    """
    matches: list[tuple[int, int, int]] = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        d = debtors[i]
        c = creditors[j]
        amount = min(d.remaining, c.remaining)
        d.remaining -= amount
        c.remaining -= amount
        matches.append((d.participant_id, c.participant_id, amount))

        if d.remaining < epsilon:
            i += 1
        if c.remaining < epsilon:
            j += 1
    return matches


def _settle(
    group_key: int,
    tally: _Tally,
    display_name: Callable[[int], str],
) -> SettlementReport:
    n = tally.headcount
    total = to_decimal(tally.total)
    per_head = scaled_to_decimal(tally.total, n)

    # 1명이면 항상 잔액 0
    if n == 1:
        return SettlementReport(
            status=ReportStatus.SETTLED,
            total=total,
            per_head=per_head,
            headcount=n,
        )

    # 허용 오차 1 cent → scaled 단위로 n
    epsilon = int(EPSILON * Money.MINOR_UNITS_PER_UNIT) * n
    debtors, creditors = _partition(_scaled_balances(tally), epsilon)

    if not debtors and not creditors:
        return SettlementReport(
            status=ReportStatus.SETTLED,
            total=total,
            per_head=per_head,
            headcount=n,
        )

    transfers = tuple(
        Transfer(
            from_id=debtor_id,
            from_name=display_name(debtor_id),
            to_id=creditor_id,
            to_name=display_name(creditor_id),
            amount=scaled_to_decimal(scaled, n),
        )
        for debtor_id, creditor_id, scaled in _match(debtors, creditors, epsilon)
    )

    logger.debug(
        "정산 계산 완료",
        extra={
            "group_key": group_key,
            "headcount": n,
            "transfers": len(transfers),
        },
    )

    return SettlementReport(
        status=ReportStatus.TRANSFERS,
        transfers=transfers,
        total=total,
        per_head=per_head,
        headcount=n,
    )


def settle(snapshot: LedgerSnapshot) -> SettlementReport:
    """정산 실행

    지출 기록이 있는 참여자만 분담 인원에 포함.

    Args:
        snapshot: Ledger 스냅샷

    Returns:
        SettlementReport (SETTLED 또는 TRANSFERS)

    Raises:
        NoDataError: 지출 기록이 없는 경우 (나눗셈 전에 확인)
    """
    if snapshot.is_empty:
        raise NoDataError(snapshot.group_key)

    paid = _tally(snapshot).paid
    names = {pid: snapshot.display_name(pid) for pid in paid}
    return settle_totals(paid, names, group_key=snapshot.group_key)


def settle_totals(
    paid: Mapping[int, int],
    names: Mapping[int, str] | None = None,
    group_key: int = 0,
) -> SettlementReport:
    """참여자별 지출 합계(cents)로 정산

    paid에 있는 모든 참여자가 분담 인원 (합계 0 포함).
    settle()은 Ledger에서 집계한 합계로 이 함수를 호출하므로 0인 참여자가 없음.

    Args:
        paid: 참여자 ID → 지출 합계 (cents, 0 이상)
        names: 참여자 ID → 표시 이름
        group_key: 로그용 그룹 키

    Raises:
        NoDataError: 참여자가 없는 경우
        ValueError: 음수 합계가 있는 경우
    """
    if not paid:
        raise NoDataError(group_key)
    if any(amount < 0 for amount in paid.values()):
        raise ValueError("지출 합계는 0 이상이어야 합니다")

    names = names or {}
    tally = _Tally(paid=dict(paid), total=sum(paid.values()))
    return _settle(group_key, tally, lambda pid: names.get(pid) or str(pid))
