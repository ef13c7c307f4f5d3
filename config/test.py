from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / "env" / ".env.test"


class TestSettings(BaseSettings):
    # The suite swaps in a per-test sqlite file through dependency overrides
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_inventory_test.db"
    APP_ENV: str = "test"
    DEBUG: bool = False
    LOG_LEVEL: str = "DEBUG"

    ASSET_ID_PREFIX: str = "AST"
    LOG_PAGE_MAX: int = 200

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )
