"""
응답 메시지 렌더링 테스트
"""

from decimal import Decimal

from bot.command import messages
from core.service import ExpenseConfirmation
from core.settlement.types import SettlementReport, Transfer
from core.types import ReportStatus


class TestRenderConfirmation:
    """render_confirmation() 테스트"""

    def test_format(self) -> None:
        """소수점 2자리 고정"""
        text = messages.render_confirmation(
            ExpenseConfirmation(name="alice", amount=Decimal("12.5"), running_total=Decimal("100"))
        )

        assert text == "✅ 추가됨: alice 님이 12.50 지출, 누적: 100.00"


class TestRenderReport:
    """render_report() 테스트"""

    def test_settled(self) -> None:
        """SETTLED → 완료 안내"""
        report = SettlementReport(status=ReportStatus.SETTLED, total=Decimal("10.00"))

        assert messages.render_report(report) == messages.ALREADY_SETTLED

    def test_transfers_one_per_line(self) -> None:
        """이체 한 줄에 하나, 엔진 순서 유지"""
        report = SettlementReport(
            status=ReportStatus.TRANSFERS,
            transfers=(
                Transfer(3, "Carol", 1, "Alice", Decimal("40")),
                Transfer(2, "Bob", 1, "Alice", Decimal("10")),
            ),
            total=Decimal("120"),
            per_head=Decimal("40"),
            headcount=3,
        )

        lines = messages.render_report(report).split("\n")

        assert lines[0] == "🧮 정산 결과:"
        assert lines[1] == "총 지출 120.00 / 3명 = 1인당 40.00"
        assert lines[2] == ""
        assert lines[3:] == ["Carol → Alice: 40.00", "Bob → Alice: 10.00"]
