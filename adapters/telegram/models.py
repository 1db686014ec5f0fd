"""
Telegram API 응답 -> 모델 변환

getUpdates 응답을 불변 데이터클래스로 변환.
봇이 사용하지 않는 필드는 버림.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    """메시지 발신자

    Attributes:
        id: Telegram 사용자 ID
        username: @username (없을 수 있음)
        first_name: 이름
    """

    id: int
    username: str = ""
    first_name: str = ""

    @property
    def display_name(self) -> str:
        """표시 이름 (username → first_name → ID 순)"""
        return self.username or self.first_name or str(self.id)


@dataclass(frozen=True)
class Chat:
    """대화방 (개인/그룹)"""

    id: int


@dataclass(frozen=True)
class Message:
    """수신 메시지"""

    message_id: int
    from_user: User
    chat: Chat
    text: str = ""


@dataclass(frozen=True)
class Update:
    """getUpdates 항목

    message가 없는 update (편집, 콜백 등)도 offset 계산을 위해 유지.
    """

    update_id: int
    message: Message | None = None


def parse_user(data: dict[str, Any]) -> User:
    """Telegram User 객체 -> User 모델

    {"id": 111, "is_bot": false, "first_name": "Alice", "username": "alice"}
    """
    return User(
        id=int(data["id"]),
        username=data.get("username") or "",
        first_name=data.get("first_name") or "",
    )


def parse_message(data: dict[str, Any]) -> Message | None:
    """Telegram Message 객체 -> Message 모델

    발신자가 없는 메시지 (채널 게시물 등)는 None.
    """
    from_data = data.get("from")
    if not from_data:
        return None

    return Message(
        message_id=int(data["message_id"]),
        from_user=parse_user(from_data),
        chat=Chat(id=int(data["chat"]["id"])),
        text=data.get("text") or "",
    )


def parse_update(data: dict[str, Any]) -> Update:
    """Telegram Update 객체 -> Update 모델

    getUpdates 응답 항목 예시:
    {
        "update_id": 10001,
        "message": {
            "message_id": 5,
            "from": {"id": 111, "is_bot": false, "first_name": "Alice", "username": "alice"},
            "chat": {"id": -100123, "type": "group", "title": "Trip"},
            "date": 1700000000,
            "text": "/add 1500"
        }
    }
    """
    message_data = data.get("message")
    return Update(
        update_id=int(data["update_id"]),
        message=parse_message(message_data) if message_data else None,
    )
