"""Settings for the pytest run: a throwaway SQLite file and a fixed signing key."""
from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.test"


class TestSettings(BaseSettings):
    # Not a test case; keep pytest from collecting it.
    __test__ = False

    DATABASE_URL: str = "sqlite+aiosqlite:///./assets_test.db"
    APP_ENV: str = "test"
    SECRET_KEY: str = "test-secret-key"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    # Session token lifetimes
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
