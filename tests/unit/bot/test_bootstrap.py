"""
Bot Bootstrap 테스트

BotEngine 조립, 토큰 검증, 종료 처리 및 main() 실패 경로.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from adapters.mock.messenger import MockMessenger
from adapters.telegram.client import TelegramApiError
from bot import bootstrap
from bot.bootstrap import BotEngine
from core.config.loader import BotConfig, SecretsLoadError
from core.service import ExpenseService


CONFIG = BotConfig(poll_timeout_sec=0, poll_interval_sec=0.01, max_concurrency=2)


class TestBotEngineInit:
    """BotEngine 조립 테스트"""

    def test_wires_components(self, messenger: MockMessenger) -> None:
        """설정값이 Poller에 전달됨"""
        engine = BotEngine(messenger=messenger, config=CONFIG)

        assert isinstance(engine.service, ExpenseService)
        assert engine.handler.service is engine.service
        assert engine.poller.messenger is messenger
        assert engine.poller.poll_timeout_sec == 0
        assert engine.poller.max_concurrency == 2

    def test_shared_service(self, messenger: MockMessenger, service: ExpenseService) -> None:
        """서비스 주입"""
        engine = BotEngine(messenger=messenger, config=CONFIG, service=service)

        assert engine.service is service


class TestBotEngineRun:
    """BotEngine 실행 테스트"""

    @pytest.mark.asyncio
    async def test_verify(self, messenger: MockMessenger) -> None:
        """getMe → username"""
        engine = BotEngine(messenger=messenger, config=CONFIG)

        assert await engine.verify() == "mock_bot"

    @pytest.mark.asyncio
    async def test_verify_failure_propagates(self) -> None:
        """토큰 오류 전파"""
        messenger = MockMessenger()
        messenger.get_me = AsyncMock(side_effect=TelegramApiError("Unauthorized", 401))  # type: ignore[method-assign]
        engine = BotEngine(messenger=messenger, config=CONFIG)

        with pytest.raises(TelegramApiError):
            await engine.verify()

    @pytest.mark.asyncio
    async def test_run_until_shutdown(self) -> None:
        """shutdown_event 설정 시 정리 후 종료"""
        messenger = MockMessenger(poll_delay=0.01)
        engine = BotEngine(messenger=messenger, config=CONFIG)
        shutdown_event = asyncio.Event()

        run_task = asyncio.create_task(engine.run(shutdown_event))
        messenger.push_text(-1, 11, "/start")

        for _ in range(200):
            if messenger.messages:
                break
            await asyncio.sleep(0.01)

        shutdown_event.set()
        await asyncio.wait_for(run_task, timeout=2.0)

        assert len(messenger.messages) == 1
        assert messenger.closed is True
        assert not engine.poller.is_running

    @pytest.mark.asyncio
    async def test_poller_crash_propagates(self) -> None:
        """Poller가 예외로 종료되면 전파 후 정리"""
        messenger = MockMessenger()
        engine = BotEngine(messenger=messenger, config=CONFIG)
        engine.poller.run = AsyncMock(side_effect=RuntimeError("crash"))  # type: ignore[method-assign]

        with pytest.raises(RuntimeError, match="crash"):
            await engine.run(asyncio.Event())

        assert messenger.closed is True


class TestMain:
    """main() 실패 경로 테스트"""

    @pytest.mark.asyncio
    async def test_settings_failure_exits(self) -> None:
        """설정 로드 실패 → exit(1)"""
        with patch.object(bootstrap, "setup_logging"), patch.object(
            bootstrap, "get_settings", side_effect=SecretsLoadError("no token")
        ):
            with pytest.raises(SystemExit) as exc_info:
                await bootstrap.main()

        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_verify_failure_exits(self) -> None:
        """토큰 검증 실패 → 클라이언트 정리 후 exit(1)"""
        messenger = MockMessenger()
        messenger.get_me = AsyncMock(side_effect=TelegramApiError("Unauthorized", 401))  # type: ignore[method-assign]

        settings = type("FakeSettings", (), {"bot_token": "1:x", "bot": CONFIG})()

        with patch.object(bootstrap, "setup_logging"), patch.object(
            bootstrap, "get_settings", return_value=settings
        ), patch.object(bootstrap, "TelegramClient", return_value=messenger):
            with pytest.raises(SystemExit) as exc_info:
                await bootstrap.main()

        assert exc_info.value.code == 1
        assert messenger.closed is True
