"""
Update Poller

getUpdates long polling으로 메시지를 수신하고,
update마다 비동기 Task로 CommandHandler를 실행하여 응답 전송.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from adapters.interfaces import IMessenger
from adapters.telegram.client import TelegramApiError
from adapters.telegram.models import Update
from bot.command.handler import CommandHandler
from core.constants import Defaults

logger = logging.getLogger(__name__)


class UpdatePoller:
    """Update Poller

    - offset: 마지막으로 받은 update_id + 1 (Telegram이 이전 update를 확인 처리)
    - 동시 처리 수는 semaphore로 제한 (가득 차면 다음 폴링을 대기)
    - 수신 실패 시 poll_interval_sec 후 재시도
    - 핸들러 예외는 로그만 남기고 루프는 계속

    Args:
        messenger: 메신저 클라이언트
        handler: Command 핸들러
        poll_timeout_sec: getUpdates long polling 대기 시간
        poll_interval_sec: 수신 실패 후 재시도 간격
        max_concurrency: 동시에 처리할 update 수

    사용 예시:
    ```python
    poller = UpdatePoller(messenger=client, handler=handler)

    task = asyncio.create_task(poller.run())
    ...
    await poller.stop()
    ```
    """

    def __init__(
        self,
        messenger: IMessenger,
        handler: CommandHandler,
        poll_timeout_sec: int = Defaults.POLL_TIMEOUT_SEC,
        poll_interval_sec: float = Defaults.POLL_INTERVAL_SEC,
        max_concurrency: int = Defaults.MAX_CONCURRENCY,
    ):
        self.messenger = messenger
        self.handler = handler
        self.poll_timeout_sec = poll_timeout_sec
        self.poll_interval_sec = poll_interval_sec
        self.max_concurrency = max_concurrency

        self._offset = 0
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._tasks: set[asyncio.Task[None]] = set()
        self._stop_event = asyncio.Event()

        # 통계
        self._poll_count = 0
        self._error_count = 0
        self._dispatched_count = 0
        self._failed_count = 0
        self._last_poll_time: datetime | None = None

    @property
    def offset(self) -> int:
        """다음 getUpdates offset"""
        return self._offset

    @property
    def is_running(self) -> bool:
        """실행 중 여부"""
        return not self._stop_event.is_set()

    async def run(self) -> None:
        """메인 루프 (stop() 호출 시 종료)"""
        logger.info(
            "Update Poller 시작",
            extra={
                "poll_timeout_sec": self.poll_timeout_sec,
                "max_concurrency": self.max_concurrency,
            },
        )

        while not self._stop_event.is_set():
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except (httpx.HTTPError, TelegramApiError) as e:
                self._error_count += 1
                logger.warning(f"update 수신 실패: {e}")
                await self._sleep(self.poll_interval_sec)
            except Exception as e:
                self._error_count += 1
                logger.error(f"update 수신 중 예외: {e}", exc_info=True)
                await self._sleep(self.poll_interval_sec)

        logger.info("Update Poller 종료")

    async def poll_once(self) -> int:
        """update 1회 수신 및 dispatch

        Returns:
            dispatch한 update 수
        """
        updates = await self.messenger.get_updates(
            offset=self._offset,
            timeout=self.poll_timeout_sec,
        )
        self._poll_count += 1
        self._last_poll_time = datetime.now(timezone.utc)

        dispatched = 0
        for update in updates:
            self._offset = max(self._offset, update.update_id + 1)
            if update.message is None:
                continue
            await self._dispatch(update)
            dispatched += 1

        return dispatched

    async def _dispatch(self, update: Update) -> None:
        """update 처리 Task 생성 (동시 처리 한도 도달 시 대기)"""
        await self._semaphore.acquire()
        task = asyncio.create_task(self._process(update))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._dispatched_count += 1

    async def _process(self, update: Update) -> None:
        """update 1건 처리: 핸들러 실행 → 응답 전송"""
        message = update.message
        assert message is not None

        try:
            reply = self.handler.handle(message)
            if reply is not None:
                await self.messenger.send_message(message.chat.id, reply)
        except Exception as e:
            self._failed_count += 1
            logger.error(
                f"update 처리 실패: {e}",
                extra={"update_id": update.update_id, "chat_id": message.chat.id},
                exc_info=True,
            )
        finally:
            self._semaphore.release()

    async def _sleep(self, seconds: float) -> None:
        """stop() 시 즉시 깨어나는 대기"""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    async def drain(self) -> None:
        """진행 중인 처리 Task 완료 대기"""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def stop(self) -> None:
        """Poller 정지 (진행 중인 Task는 완료까지 대기)"""
        self._stop_event.set()
        await self.drain()
        logger.info("Update Poller 정지", extra=self.get_stats())

    def get_stats(self) -> dict[str, Any]:
        """통계 조회"""
        return {
            "offset": self._offset,
            "poll_count": self._poll_count,
            "error_count": self._error_count,
            "dispatched_count": self._dispatched_count,
            "failed_count": self._failed_count,
            "in_flight": len(self._tasks),
            "last_poll_time": self._last_poll_time.isoformat() if self._last_poll_time else None,
        }
