"""
어댑터 테스트 픽스처

Telegram API 응답 샘플 및 클라이언트 픽스처.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.telegram.client import TelegramClient


# -------------------------------------------------------------------------
# 클라이언트 픽스처
# -------------------------------------------------------------------------

@pytest_asyncio.fixture
async def telegram_client() -> AsyncGenerator[TelegramClient, None]:
    """Telegram 클라이언트 (테스트 종료 시 정리)"""
    client = TelegramClient(token="123456:FIXTURE_TOKEN")
    yield client
    await client.close()


# -------------------------------------------------------------------------
# Telegram API 응답 샘플
# -------------------------------------------------------------------------

@pytest.fixture
def telegram_text_update() -> dict:
    """그룹 채팅 텍스트 메시지 update 샘플"""
    return {
        "update_id": 10001,
        "message": {
            "message_id": 5,
            "from": {"id": 111, "is_bot": False, "first_name": "Alice", "username": "alice"},
            "chat": {"id": -100123, "type": "group", "title": "Trip"},
            "date": 1700000000,
            "text": "/add 1500",
        },
    }


@pytest.fixture
def telegram_get_updates_response(telegram_text_update: dict) -> dict:
    """getUpdates API 응답 샘플"""
    return {
        "ok": True,
        "result": [
            telegram_text_update,
            {"update_id": 10002, "edited_message": {"message_id": 5}},
        ],
    }
