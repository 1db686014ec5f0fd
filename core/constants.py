"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → settlebot/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class TelegramEndpoints:
    """Telegram Bot API 엔드포인트 (고정값)

    공식 문서: https://core.telegram.org/bots/api
    """

    API_URL: str = "https://api.telegram.org"

    # sendMessage 본문 최대 길이
    MAX_MESSAGE_LENGTH: int = 4096


class Defaults:
    """기본값 상수"""

    BOT_NAME: str = "settlebot"

    # getUpdates long polling
    POLL_TIMEOUT_SEC: int = 30
    POLL_INTERVAL_SEC: float = 3.0

    # 동시에 처리할 수 있는 update 수
    MAX_CONCURRENCY: int = 8

    HTTP_TIMEOUT_SEC: float = 10.0

    LOG_LEVEL: str = "INFO"


class Money:
    """금액 관련 상수"""

    # 최소 단위 (1 = 0.01)
    MINOR_UNITS_PER_UNIT: int = 100

    # 1회 입력 상한 (오타로 인한 비정상 값 방지)
    MAX_AMOUNT: Decimal = Decimal("1000000000000")


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    BOT_LOGS_DIR: Path = LOGS_DIR / "bot"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"
