"""
Bot Bootstrap

설정 로드, 의존성 주입, 메인 루프 관리.

흐름:
- 로깅 초기화
- secrets.yaml / TELEGRAM_BOT_TOKEN 로드
- getMe로 토큰 검증
- Update Poller 실행 (SIGINT/SIGTERM 시 정리 후 종료)
"""

import asyncio
import logging
import signal
import sys

from adapters.interfaces import IMessenger
from adapters.telegram.client import TelegramClient
from bot.command.handler import CommandHandler
from bot.poller.updates import UpdatePoller
from core.config.loader import BotConfig, Settings, get_settings
from core.constants import Defaults
from core.logging import setup_logging
from core.service import ExpenseService

logger = logging.getLogger("bot")


class BotEngine:
    """Bot 엔진

    컴포넌트를 조립하고 Poller 생명주기 관리.

    Args:
        messenger: 메신저 클라이언트
        config: Bot 동작 설정
        service: 지출 정산 서비스 (None이면 새로 생성)
    """

    def __init__(
        self,
        messenger: IMessenger,
        config: BotConfig,
        service: ExpenseService | None = None,
    ):
        self.messenger = messenger
        self.config = config
        self.service = service if service is not None else ExpenseService()
        self.handler = CommandHandler(self.service)
        self.poller = UpdatePoller(
            messenger=messenger,
            handler=self.handler,
            poll_timeout_sec=config.poll_timeout_sec,
            poll_interval_sec=config.poll_interval_sec,
            max_concurrency=config.max_concurrency,
        )

    async def verify(self) -> str:
        """토큰 검증 (getMe)

        Returns:
            봇 username

        Raises:
            TelegramApiError / httpx.HTTPError: 토큰이 잘못되었거나 연결 실패
        """
        me = await self.messenger.get_me()
        username = me.get("username", "")
        logger.info(f"Bot 인증 완료: @{username}")
        return username

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """shutdown_event가 설정될 때까지 Poller 실행"""
        poll_task = asyncio.create_task(self.poller.run())
        stop_task = asyncio.create_task(shutdown_event.wait())

        try:
            done, _ = await asyncio.wait(
                {poll_task, stop_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if poll_task in done:
                # 예외로 종료된 경우 전파
                poll_task.result()
        finally:
            await self.stop()
            for task in (poll_task, stop_task):
                if not task.done():
                    task.cancel()
            await asyncio.gather(poll_task, stop_task, return_exceptions=True)

    async def stop(self) -> None:
        """Poller 정지 및 연결 정리"""
        await self.poller.stop()
        await self.messenger.close()
        logger.info("Bot 엔진 정지", extra=self.handler.get_stats())


def _install_signal_handlers(shutdown_event: asyncio.Event) -> None:
    """SIGINT/SIGTERM → shutdown_event (Windows는 KeyboardInterrupt로 처리)"""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except (NotImplementedError, RuntimeError):
            pass


async def main() -> None:
    """Bot 메인 함수"""
    setup_logging("bot")

    logger.info("=" * 60)
    logger.info(f"{Defaults.BOT_NAME} 시작")
    logger.info("=" * 60)

    # 1. 설정 로드
    try:
        settings: Settings = get_settings()
    except Exception as e:
        logger.error(f"설정 로드 실패: {e}")
        sys.exit(1)

    # 2. 엔진 생성 및 토큰 검증
    client = TelegramClient(token=settings.bot_token)
    engine = BotEngine(messenger=client, config=settings.bot)

    try:
        await engine.verify()
    except Exception as e:
        logger.error(f"Bot 토큰 검증 실패: {e}")
        await client.close()
        sys.exit(1)

    # 3. 종료 이벤트 설정
    shutdown_event = asyncio.Event()
    _install_signal_handlers(shutdown_event)

    logger.info("Bot 메인 루프 시작 (종료: Ctrl+C)")

    try:
        await engine.run(shutdown_event)
    except asyncio.CancelledError:
        logger.info("메인 루프 취소됨")

    logger.info("=" * 60)
    logger.info(f"{Defaults.BOT_NAME} 정상 종료")
    logger.info("=" * 60)


def run() -> None:
    """콘솔 스크립트 진입점"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Ctrl+C 감지")
