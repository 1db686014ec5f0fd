"""
Telegram Bot API 클라이언트

httpx 비동기 클라이언트로 Bot API 호출.
IMessenger Protocol 준수.
"""

import logging
from typing import Any

import httpx

from adapters.telegram.models import Update, parse_update
from core.constants import Defaults, TelegramEndpoints

logger = logging.getLogger(__name__)


class TelegramApiError(Exception):
    """Telegram API 에러 (ok=false 또는 HTTP 에러 상태)"""

    def __init__(self, message: str, error_code: int | None = None):
        super().__init__(message)
        self.error_code = error_code


class TelegramClient:
    """Telegram Bot API 클라이언트

    IMessenger Protocol 구현.

    사용 예시:
    ```python
    async with TelegramClient(token="123:ABC") as client:
        me = await client.get_me()
        updates = await client.get_updates(offset=0, timeout=30)
        await client.send_message(chat_id, "안녕하세요")
    ```
    """

    def __init__(
        self,
        token: str,
        base_url: str = TelegramEndpoints.API_URL,
        timeout: float = Defaults.HTTP_TIMEOUT_SEC,
    ):
        """
        Args:
            token: Bot 토큰 (BotFather 발급)
            base_url: API 베이스 URL
            timeout: HTTP 요청 타임아웃 (초, long polling 대기 시간은 별도 가산)
        """
        if not token:
            raise ValueError("token은 필수입니다")

        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # httpx 비동기 클라이언트 (재사용)
        self._client: httpx.AsyncClient | None = None

    def _method_url(self, method: str) -> str:
        return f"{self.base_url}/bot{self.token}/{method}"

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _call(
        self,
        method: str,
        payload: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Bot API 메서드 호출

        Args:
            method: API 메서드 (getMe, getUpdates, sendMessage)
            payload: JSON 본문
            timeout: 요청 타임아웃 오버라이드

        Returns:
            응답의 result 필드

        Raises:
            TelegramApiError: ok=false 또는 JSON이 아닌 응답
            httpx.HTTPError: 전송 계층 에러
        """
        client = await self._get_client()
        response = await client.post(
            self._method_url(method),
            json=payload or {},
            timeout=timeout if timeout is not None else self.timeout,
        )

        try:
            body = response.json()
        except ValueError as e:
            raise TelegramApiError(
                f"{method} 응답 파싱 실패: status={response.status_code}",
                error_code=response.status_code,
            ) from e

        if not body.get("ok"):
            raise TelegramApiError(
                f"{method} 실패: {body.get('description', response.text)}",
                error_code=body.get("error_code", response.status_code),
            )

        return body.get("result")

    async def get_me(self) -> dict[str, Any]:
        """토큰 검증용 봇 정보 조회"""
        return await self._call("getMe")

    async def get_updates(self, offset: int = 0, timeout: int = Defaults.POLL_TIMEOUT_SEC) -> list[Update]:
        """새 update 조회 (long polling)

        Args:
            offset: 마지막으로 처리한 update_id + 1
            timeout: 서버 측 대기 시간 (초)

        Returns:
            Update 목록 (update_id 오름차순)
        """
        result = await self._call(
            "getUpdates",
            {"offset": offset, "timeout": timeout, "allowed_updates": ["message"]},
            timeout=self.timeout + timeout,
        )
        return [parse_update(item) for item in result or []]

    async def send_message(self, chat_id: int, text: str) -> bool:
        """메시지 전송

        MAX_MESSAGE_LENGTH를 넘는 본문은 줄 단위로 나누어 순서대로 전송.
        전송 실패는 로그만 남기고 False 반환 (재전송은 하지 않음, 남은 조각도 전송하지 않음).

        Returns:
            전체 전송 성공 여부
        """
        chunks = split_text(text, TelegramEndpoints.MAX_MESSAGE_LENGTH)
        try:
            for chunk in chunks:
                await self._call("sendMessage", {"chat_id": chat_id, "text": chunk})
            logger.debug(f"메시지 전송 성공: chat={chat_id}, parts={len(chunks)}")
            return True
        except TelegramApiError as e:
            logger.warning(
                "메시지 전송 실패: chat=%s, code=%s, error=%s",
                chat_id,
                e.error_code,
                e,
            )
            return False
        except httpx.TimeoutException:
            logger.error("메시지 전송 타임아웃: chat=%s", chat_id)
            return False
        except httpx.HTTPError as e:
            logger.error("메시지 전송 HTTP 에러: chat=%s, error=%s", chat_id, e)
            return False

    # -------------------------------------------------------------------------
    # Context Manager 지원
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "TelegramClient":
        """async with 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """async with 종료 시 클라이언트 정리"""
        await self.close()


def _utf16_len(text: str) -> int:
    """Telegram 기준 길이 (UTF-16 code unit, 이모지는 2)"""
    return len(text.encode("utf-16-le")) // 2


def split_text(text: str, limit: int) -> list[str]:
    """본문을 limit 이하 조각으로 분할

    줄 경계에서 나누며, 한 줄이 limit보다 길면 limit // 2 글자씩 자름.
    limit 이하 본문은 그대로 한 조각.
    """
    if _utf16_len(text) <= limit:
        return [text]

    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while _utf16_len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            cut = limit // 2
            chunks.append(line[:cut])
            line = line[cut:]

        candidate = f"{current}\n{line}" if current else line
        if _utf16_len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current:
        chunks.append(current)
    return chunks
