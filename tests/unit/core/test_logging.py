"""
로깅 설정 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.constants import Paths
from core.logging import LOG_FILE_BACKUP_COUNT, NOISY_LOGGERS, get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger(temp_dir: Path):
    """루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield temp_dir
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """setup_logging() 테스트"""

    def test_handlers(self, restore_root_logger: Path) -> None:
        """콘솔 + daily 파일 핸들러"""
        root = setup_logging("bot", base_dir=restore_root_logger)

        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(root.handlers) == 2
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == LOG_FILE_BACKUP_COUNT
        assert Path(file_handlers[0].baseFilename) == restore_root_logger / "bot" / "bot.log"

    def test_repeated_setup_no_duplicates(self, restore_root_logger: Path) -> None:
        """여러 번 호출해도 핸들러 중복 없음"""
        setup_logging("bot", base_dir=restore_root_logger)
        root = setup_logging("bot", base_dir=restore_root_logger)

        assert len(root.handlers) == 2

    def test_writes_file(self, restore_root_logger: Path) -> None:
        """파일에 기록"""
        setup_logging("bot", base_dir=restore_root_logger)
        logging.getLogger("core.service").info("지출 기록")

        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (restore_root_logger / "bot" / "bot.log").read_text(encoding="utf-8")
        assert "지출 기록" in content
        assert "| INFO     | core.service |" in content

    def test_noisy_loggers_quieted(self, restore_root_logger: Path) -> None:
        """httpx 등은 WARNING 이상만"""
        setup_logging("bot", base_dir=restore_root_logger)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestLogFilePath:
    """get_log_file_path() 테스트"""

    def test_bot_path(self) -> None:
        """bot 로그 경로"""
        assert get_log_file_path("bot") == Paths.BOT_LOGS_DIR / "bot.log"

    def test_other_process(self) -> None:
        """기타 프로세스는 logs 루트"""
        assert get_log_file_path("tool") == Paths.LOGS_DIR / "tool.log"
