"""
Protocol 인터페이스 테스트

Protocol 타입 검증 및 구현 확인.
"""

from adapters.interfaces import IMessenger
from adapters.mock.messenger import MockMessenger
from adapters.telegram.client import TelegramClient


class TestIMessenger:
    """IMessenger Protocol 테스트"""

    def test_mock_messenger_implements_protocol(self) -> None:
        """Mock 메신저가 Protocol을 구현하는지 확인"""
        assert isinstance(MockMessenger(), IMessenger)

    def test_telegram_client_implements_protocol(self) -> None:
        """Telegram 클라이언트가 Protocol을 구현하는지 확인"""
        assert isinstance(TelegramClient(token="1:x"), IMessenger)

    def test_protocol_has_required_methods(self) -> None:
        """Protocol에 필수 메서드가 정의되어 있는지 확인"""
        for method in ("get_me", "get_updates", "send_message", "close"):
            assert hasattr(IMessenger, method), f"Missing method: {method}"

    def test_plain_object_does_not_implement(self) -> None:
        """메서드가 없는 객체는 Protocol 불일치"""
        assert not isinstance(object(), IMessenger)
