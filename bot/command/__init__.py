"""
Command 처리 모듈

채팅 명령어 파싱, 라우팅, 응답 렌더링
"""

from bot.command.handler import CommandHandler
from bot.command.parser import ParsedCommand, parse_command

__all__ = [
    "CommandHandler",
    "ParsedCommand",
    "parse_command",
]
