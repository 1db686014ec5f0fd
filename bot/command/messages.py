"""
사용자 응답 메시지

정산 결과 등 코어 출력 → 채팅 텍스트 렌더링.
"""

from core.ledger.money import format_amount
from core.service import ExpenseConfirmation
from core.settlement.types import SettlementReport


HELP = (
    "안녕하세요! 공동 지출 정산 봇입니다.\n\n"
    "사용법:\n"
    "/add <금액> - 내가 결제한 금액 추가\n"
    "/calc - 누가 누구에게 얼마를 보내야 하는지 계산\n"
    "/reset - 모든 기록 삭제"
)

ADD_USAGE = "사용법: /add 1500"
INVALID_AMOUNT = "금액은 0보다 큰 숫자여야 합니다."
NO_DATA = "기록된 지출이 없습니다. /add 로 지출을 추가하세요."
ALREADY_SETTLED = "모든 지출이 이미 균등합니다! 🎉"
RESET_DONE = "모든 기록이 삭제되었습니다."
UNKNOWN_COMMAND = "알 수 없는 명령어입니다. /start 를 입력하세요."


def render_confirmation(confirmation: ExpenseConfirmation) -> str:
    """지출 기록 확인 메시지"""
    return (
        f"✅ 추가됨: {confirmation.name} 님이 {format_amount(confirmation.amount)} 지출, "
        f"누적: {format_amount(confirmation.running_total)}"
    )


def render_report(report: SettlementReport) -> str:
    """정산 결과 메시지

    SETTLED면 균등 안내, 아니면 이체 목록 (한 줄에 하나).
    """
    if report.is_settled:
        return ALREADY_SETTLED

    lines = [
        "🧮 정산 결과:",
        f"총 지출 {format_amount(report.total)} / {report.headcount}명 "
        f"= 1인당 {format_amount(report.per_head)}",
        "",
    ]
    lines.extend(
        f"{t.from_name} → {t.to_name}: {format_amount(t.amount)}"
        for t in report.transfers
    )
    return "\n".join(lines)
