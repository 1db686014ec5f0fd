"""
Telegram 어댑터

Bot API long polling 수신 및 메시지 전송.
IMessenger Protocol 준수.
"""

from adapters.telegram.client import TelegramApiError, TelegramClient
from adapters.telegram.models import Chat, Message, Update, User

__all__ = [
    "TelegramApiError",
    "TelegramClient",
    "Chat",
    "Message",
    "Update",
    "User",
]
