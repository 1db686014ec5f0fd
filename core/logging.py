"""
로깅 설정 유틸리티

Bot 프로세스에서 사용하는 공통 로깅 설정.
- 콘솔: Defaults.LOG_LEVEL (기본 INFO)
- 파일: INFO 레벨, 자정마다 새 파일 (최대 7일 보관)

사용법:
    from core.logging import setup_logging
    setup_logging("bot")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Defaults, Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# 레벨을 WARNING으로 낮출 서드파티 로거
NOISY_LOGGERS = [
    "httpcore",
    "httpx",          # getUpdates long polling마다 요청 로그
    "asyncio",
]


def _resolve_log_dir(process_name: str, base_dir: Path | None) -> Path:
    """프로세스별 로그 디렉토리 결정"""
    if base_dir is not None:
        return base_dir / process_name
    if process_name == "bot":
        return Paths.BOT_LOGS_DIR
    return Paths.LOGS_DIR


def _level_name(level: int | str) -> str:
    return level if isinstance(level, str) else logging.getLevelName(level)


def _daily_file_handler(log_file: Path, level: int | str) -> TimedRotatingFileHandler:
    """자정 롤링 파일 핸들러 (백업: bot.log.2026-10-19)"""
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    return handler


def setup_logging(
    process_name: str,
    console_level: int | str = Defaults.LOG_LEVEL,
    file_level: int | str = logging.INFO,
    base_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 설치

    여러 번 호출해도 기존 핸들러를 교체하므로 중복 출력이 없음.

    Args:
        process_name: 프로세스 이름 (로그 디렉토리/파일 이름)
        console_level: 콘솔 로그 레벨
        file_level: 파일 로그 레벨
        base_dir: 로그 루트 디렉토리 (None이면 Paths 기준, 테스트에서 임시 경로 지정)

    Returns:
        설정된 루트 Logger
    """
    log_dir = _resolve_log_dir(process_name, base_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # 필터링은 핸들러에서

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)

    file_handler = _daily_file_handler(log_file, file_level)

    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(
        f"로깅 초기화 완료: {process_name} "
        f"(콘솔 {_level_name(console_level)}, 파일 {log_file} {_level_name(file_level)})"
    )
    return root_logger


def get_log_file_path(process_name: str) -> Path:
    """기본 설정 기준 로그 파일 경로"""
    return _resolve_log_dir(process_name, None) / f"{process_name}.log"
