"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class BotCommand(str, Enum):
    """채팅 명령어"""

    START = "start"
    ADD = "add"
    CALC = "calc"
    SETTLE = "settle"  # calc 별칭
    RESET = "reset"


class ReportStatus(str, Enum):
    """정산 결과 상태"""

    SETTLED = "SETTLED"  # 이미 균등 (이체 불필요)
    TRANSFERS = "TRANSFERS"  # 이체 목록 존재
