"""
Poller 모듈

Telegram getUpdates long polling으로 메시지를 수신하여 처리.
"""

from bot.poller.updates import UpdatePoller

__all__ = [
    "UpdatePoller",
]
