"""
Ledger 타입 정의

Entry / Ledger / LedgerSnapshot 데이터 구조와 Ledger 예외 정의.
금액은 정수 최소 단위(cents)로 저장.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from core.constants import Money


class LedgerError(Exception):
    """Ledger 예외 베이스"""

    pass


class InvalidAmountError(LedgerError):
    """유효하지 않은 금액 (숫자 아님, 0 이하, 무한대/NaN)

    Attributes:
        raw: 사용자가 입력한 원본 값
    """

    def __init__(self, raw: str):
        super().__init__(f"유효하지 않은 금액: {raw!r}")
        self.raw = raw


class NoDataError(LedgerError):
    """정산할 지출 기록이 없음"""

    def __init__(self, group_key: int | str):
        super().__init__(f"지출 기록 없음: group={group_key}")
        self.group_key = group_key


@dataclass(frozen=True)
class Entry:
    """지출 기록 (불변)

    Attributes:
        participant_id: 지출한 참여자 ID
        name: 기록 시점의 표시 이름 (출력 편의용 비정규화)
        amount_minor: 금액 (최소 단위, 양수)
    """

    participant_id: int
    name: str
    amount_minor: int

    @property
    def amount(self) -> Decimal:
        """금액 (Decimal, 소수점 2자리)"""
        return (Decimal(self.amount_minor) / Money.MINOR_UNITS_PER_UNIT).quantize(
            Decimal("0.01")
        )


@dataclass
class Ledger:
    """그룹(채팅) 단위 장부

    entries는 reset 전까지 append-only.
    names는 지출 여부와 무관하게 모든 상호작용에서 갱신.
    """

    group_key: int
    entries: list[Entry] = field(default_factory=list)
    names: dict[int, str] = field(default_factory=dict)

    def snapshot(self) -> "LedgerSnapshot":
        """현재 상태의 불변 복사본"""
        return LedgerSnapshot(
            group_key=self.group_key,
            entries=tuple(self.entries),
            names=dict(self.names),
        )


@dataclass(frozen=True)
class LedgerSnapshot:
    """Ledger 불변 스냅샷 (정산 계산 입력)"""

    group_key: int
    entries: tuple[Entry, ...]
    names: dict[int, str]

    @property
    def is_empty(self) -> bool:
        """지출 기록 없음 여부"""
        return not self.entries

    def display_name(self, participant_id: int) -> str:
        """참여자 표시 이름

        name 매핑 → Entry의 비정규화 이름 → ID 순으로 fallback
        """
        name = self.names.get(participant_id)
        if name:
            return name
        for entry in reversed(self.entries):
            if entry.participant_id == participant_id and entry.name:
                return entry.name
        return str(participant_id)
