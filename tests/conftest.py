"""
pytest 공통 fixture 정의

설정 파일, 저장소, 서비스, Mock 메신저 등 공통 fixture
"""

import tempfile
from pathlib import Path

import pytest

from adapters.mock.messenger import MockMessenger
from core.config.loader import Settings
from core.ledger.store import LedgerStore
from core.service import ExpenseService


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
telegram:
  bot_token: "111111:file_token_abcde"

bot:
  poll_timeout_sec: 15
  poll_interval_sec: 0.5
  max_concurrency: 4
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_token_only(temp_dir: Path) -> Path:
    """bot 섹션 없는 secrets.yaml 파일 생성"""
    secrets_content = """telegram:
  bot_token: "222222:token_only"
"""
    secrets_path = temp_dir / "secrets_token_only.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture(autouse=True)
def reset_settings() -> None:
    """Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def store() -> LedgerStore:
    """빈 Ledger 저장소"""
    return LedgerStore()


@pytest.fixture
def service(store: LedgerStore) -> ExpenseService:
    """저장소를 공유하는 정산 서비스"""
    return ExpenseService(store)


@pytest.fixture
def messenger() -> MockMessenger:
    """Mock Messenger"""
    return MockMessenger()
