"""
Mock 메신저

테스트용 Mock Messenger.
IMessenger Protocol 준수.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from adapters.telegram.models import Chat, Message, Update, User


@dataclass
class SentMessage:
    """전송 기록"""

    chat_id: int
    text: str
    timestamp: datetime
    sent: bool


class MockMessenger:
    """Mock 메신저

    IMessenger Protocol 구현.
    큐에 넣어둔 update를 get_updates로 돌려주고,
    전송된 모든 메시지를 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    messenger = MockMessenger()
    messenger.push_text(chat_id=1, user_id=10, username="alice", text="/add 100")

    updates = await messenger.get_updates(offset=0)
    await messenger.send_message(1, "✅")

    assert messenger.last_message.text == "✅"
    ```
    """

    def __init__(self, should_fail: bool = False, poll_delay: float = 0.0):
        """
        Args:
            should_fail: True면 모든 전송 실패 (에러 시나리오 테스트용)
            poll_delay: 대기 update가 없을 때 long polling 대기 시간 (초)
        """
        self.should_fail = should_fail
        self.poll_delay = poll_delay
        self.messages: list[SentMessage] = []
        self.closed = False
        self._pending: list[Update] = []
        self._next_update_id = 1
        self._next_message_id = 1
        self.offsets: list[int] = []

    async def get_me(self) -> dict[str, Any]:
        """봇 정보 조회"""
        return {"id": 1, "is_bot": True, "username": "mock_bot"}

    async def get_updates(self, offset: int = 0, timeout: int = 30) -> list[Update]:
        """offset 이상의 update 반환 (offset 미만은 확인된 것으로 보고 폐기)"""
        self.offsets.append(offset)
        self._pending = [u for u in self._pending if u.update_id >= offset]
        if not self._pending:
            # long polling 대기 흉내 (이벤트 루프 양보)
            await asyncio.sleep(self.poll_delay)
        return list(self._pending)

    async def send_message(self, chat_id: int, text: str) -> bool:
        """메시지 전송"""
        self.messages.append(
            SentMessage(
                chat_id=chat_id,
                text=text,
                timestamp=datetime.now(timezone.utc),
                sent=not self.should_fail,
            )
        )
        return not self.should_fail

    async def close(self) -> None:
        """연결 정리"""
        self.closed = True

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def push_update(self, update: Update) -> None:
        """수신 대기 update 추가"""
        self._pending.append(update)
        self._next_update_id = max(self._next_update_id, update.update_id + 1)

    def push_text(
        self,
        chat_id: int,
        user_id: int,
        text: str,
        username: str = "",
        first_name: str = "",
    ) -> Update:
        """텍스트 메시지 update 생성 후 추가"""
        update = Update(
            update_id=self._next_update_id,
            message=Message(
                message_id=self._next_message_id,
                from_user=User(id=user_id, username=username, first_name=first_name),
                chat=Chat(id=chat_id),
                text=text,
            ),
        )
        self._next_message_id += 1
        self.push_update(update)
        return update

    def clear(self) -> None:
        """전송 기록 초기화"""
        self.messages.clear()

    def messages_for(self, chat_id: int) -> list[SentMessage]:
        """특정 대화방으로 전송된 메시지"""
        return [m for m in self.messages if m.chat_id == chat_id]

    @property
    def last_message(self) -> SentMessage | None:
        """마지막 전송 메시지"""
        return self.messages[-1] if self.messages else None

    @property
    def pending_count(self) -> int:
        """수신 대기 update 수"""
        return len(self._pending)
