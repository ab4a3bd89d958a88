"""Application configuration via environment variables."""

from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings

from journal.utils.constants import VALID_INTERVALS

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = "sqlite:///./journal.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server
    host: str = "127.0.0.1"
    port: int = 8000

    # Stats refresh
    stats_refresh_enabled: bool = True
    stats_refresh_interval: str = "1h"

    # Journal defaults
    default_lot_size: float = 0.1

    model_config = {"env_prefix": "JOURNAL_", "env_file": ".env"}

    @field_validator("stats_refresh_interval")
    @classmethod
    def _validate_interval(cls, value: str) -> str:
        text = value.strip()
        if text in VALID_INTERVALS or (text.endswith("m") and text[:-1].isdigit() and int(text[:-1]) > 0):
            return text
        raise ValueError(f"must be one of {', '.join(VALID_INTERVALS)} or '<N>m'")

    @field_validator("default_lot_size")
    @classmethod
    def _validate_lot_size(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value


settings = Settings()
