"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from adapters.telegram.models import Update


@runtime_checkable
class IMessenger(Protocol):
    """채팅 메신저 인터페이스

    update 수신 (long polling) 및 메시지 전송.
    """

    async def get_me(self) -> dict[str, Any]:
        """봇 정보 조회 (토큰 검증)"""
        ...

    async def get_updates(self, offset: int = 0, timeout: int = 30) -> list["Update"]:
        """새 update 조회

        Args:
            offset: 마지막으로 처리한 update_id + 1
            timeout: long polling 대기 시간 (초)

        Returns:
            Update 목록
        """
        ...

    async def send_message(self, chat_id: int, text: str) -> bool:
        """메시지 전송

        Args:
            chat_id: 대화방 ID
            text: 메시지 본문

        Returns:
            전송 성공 여부
        """
        ...

    async def close(self) -> None:
        """연결 정리"""
        ...
