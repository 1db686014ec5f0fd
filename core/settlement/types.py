"""
정산 타입 정의

Transfer / SettlementReport 등 정산 엔진 출력 구조.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from core.types import ReportStatus


@dataclass(frozen=True)
class Transfer:
    """이체 지시 (채무자 → 채권자)

    Attributes:
        from_id: 보내는 참여자 ID (채무자)
        from_name: 보내는 참여자 표시 이름
        to_id: 받는 참여자 ID (채권자)
        to_name: 받는 참여자 표시 이름
        amount: 금액 (소수점 2자리 반올림)
    """

    from_id: int
    from_name: str
    to_id: int
    to_name: str
    amount: Decimal


@dataclass(frozen=True)
class SettlementReport:
    """정산 결과

    status가 SETTLED면 transfers는 비어 있음.

    Attributes:
        status: 정산 상태
        transfers: 이체 목록 (발생 순서)
        total: 그룹 총 지출
        per_head: 1인당 분담액 (소수점 2자리 반올림)
        headcount: 분담 인원 (지출 기록이 있는 참여자 수)
    """

    status: ReportStatus
    transfers: tuple[Transfer, ...] = field(default_factory=tuple)
    total: Decimal = Decimal("0.00")
    per_head: Decimal = Decimal("0.00")
    headcount: int = 0

    @property
    def is_settled(self) -> bool:
        """이미 균등한지 여부"""
        return self.status == ReportStatus.SETTLED
