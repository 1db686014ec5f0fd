"""
설정 로더

secrets.yaml 로드 및 Bot 설정 생성
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths


# 토큰 환경변수 (secrets.yaml보다 우선)
TOKEN_ENV_VAR = "TELEGRAM_BOT_TOKEN"


@dataclass(frozen=True)
class BotConfig:
    """Bot 동작 설정

    secrets.yaml의 bot 섹션 (모두 선택)
    """

    poll_timeout_sec: int = Defaults.POLL_TIMEOUT_SEC
    poll_interval_sec: float = Defaults.POLL_INTERVAL_SEC
    max_concurrency: int = Defaults.MAX_CONCURRENCY


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml 또는 환경변수에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    bot_token: str
    bot: BotConfig


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML 파일 읽기 (없거나 비어 있으면 빈 dict)"""
    if not path.exists():
        return {}

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 mapping이어야 합니다")
    return data


def _parse_bot_config(data: dict[str, Any]) -> BotConfig:
    """bot 섹션 파싱 및 검증"""
    section = data.get("bot") or {}

    try:
        poll_timeout = int(section.get("poll_timeout_sec", Defaults.POLL_TIMEOUT_SEC))
        poll_interval = float(section.get("poll_interval_sec", Defaults.POLL_INTERVAL_SEC))
        max_concurrency = int(section.get("max_concurrency", Defaults.MAX_CONCURRENCY))
    except (TypeError, ValueError) as e:
        raise SecretsLoadError(f"secrets.yaml의 bot 섹션 값이 잘못되었습니다: {e}") from e

    if poll_timeout < 0:
        raise SecretsLoadError("poll_timeout_sec는 0 이상이어야 합니다")
    if poll_interval < 0:
        raise SecretsLoadError("poll_interval_sec는 0 이상이어야 합니다")
    if max_concurrency < 1:
        raise SecretsLoadError("max_concurrency는 1 이상이어야 합니다")

    return BotConfig(
        poll_timeout_sec=poll_timeout,
        poll_interval_sec=poll_interval,
        max_concurrency=max_concurrency,
    )


def load_secrets(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Secrets:
    """secrets.yaml 파일 로드

    토큰은 환경변수 TELEGRAM_BOT_TOKEN이 우선이며,
    환경변수가 있으면 secrets.yaml이 없어도 동작.

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)
        environ: 환경변수 (None이면 os.environ)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 토큰이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE
    if environ is None:
        environ = dict(os.environ)

    data = _read_yaml(path)

    token = environ.get(TOKEN_ENV_VAR, "").strip()
    if not token:
        telegram_config = data.get("telegram") or {}
        token = str(telegram_config.get("bot_token") or "").strip()

    if not token:
        raise SecretsLoadError(
            f"{TOKEN_ENV_VAR}가 설정되지 않았고 "
            f"secrets.yaml({path})에도 'telegram.bot_token'이 없습니다"
        )

    return Secrets(bot_token=token, bot=_parse_bot_config(data))


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def bot_token(self) -> str:
        """Telegram Bot 토큰"""
        assert self._secrets is not None
        return self._secrets.bot_token

    @property
    def bot(self) -> BotConfig:
        """Bot 동작 설정"""
        assert self._secrets is not None
        return self._secrets.bot

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
