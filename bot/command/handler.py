"""
Command Handler

수신 메시지를 명령어별로 라우팅하여 ExpenseService 호출 후 응답 텍스트 생성.
코어 예외(InvalidAmountError, NoDataError)는 여기서 사용자 안내 문구로 변환.
"""

import logging

from adapters.telegram.models import Message
from bot.command import messages
from bot.command.parser import ParsedCommand, parse_command
from core.ledger.types import InvalidAmountError, NoDataError
from core.service import ExpenseService
from core.types import BotCommand

logger = logging.getLogger(__name__)


class CommandHandler:
    """Command 핸들러

    Args:
        service: 지출 정산 서비스

    사용 예시:
    ```python
    handler = CommandHandler(ExpenseService())

    reply = handler.handle(message)
    if reply is not None:
        await messenger.send_message(message.chat.id, reply)
    ```
    """

    def __init__(self, service: ExpenseService):
        self.service = service

        # 통계
        self._handled_count = 0
        self._rejected_count = 0  # 잘못된 금액 / 데이터 없음

    def handle(self, message: Message) -> str | None:
        """메시지 처리

        모든 메시지에서 참여자 이름을 먼저 갱신한 뒤 명령어 실행.

        Returns:
            응답 텍스트, 빈 메시지면 None
        """
        chat_id = message.chat.id
        user = message.from_user
        name = user.display_name

        self.service.touch_participant(chat_id, user.id, name)

        if not message.text.strip():
            return None

        self._handled_count += 1
        command = parse_command(message.text)
        if command is None:
            return messages.UNKNOWN_COMMAND

        try:
            return self._dispatch(command, chat_id, user.id, name)
        except InvalidAmountError as e:
            self._rejected_count += 1
            logger.info(f"잘못된 금액: chat={chat_id}, raw={e.raw!r}")
            return messages.INVALID_AMOUNT
        except NoDataError:
            self._rejected_count += 1
            return messages.NO_DATA

    def _dispatch(self, command: ParsedCommand, chat_id: int, user_id: int, name: str) -> str:
        if command.name == BotCommand.START.value:
            return messages.HELP

        if command.name == BotCommand.ADD.value:
            if command.first_arg is None:
                return messages.ADD_USAGE
            confirmation = self.service.record_expense(chat_id, user_id, name, command.first_arg)
            return messages.render_confirmation(confirmation)

        if command.name in (BotCommand.CALC.value, BotCommand.SETTLE.value):
            return messages.render_report(self.service.settle(chat_id))

        if command.name == BotCommand.RESET.value:
            self.service.reset(chat_id)
            return messages.RESET_DONE

        return messages.UNKNOWN_COMMAND

    def get_stats(self) -> dict[str, int]:
        """처리 통계"""
        return {
            "handled": self._handled_count,
            "rejected": self._rejected_count,
        }
