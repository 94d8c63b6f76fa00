"""Application settings and environment configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from task_planner.core.storage_mode import StorageMode, WeekStart

BACKEND_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = BACKEND_ROOT / ".env"
DEFAULT_DATA_FILE = BACKEND_ROOT / "data" / "data.json"


class Settings(BaseSettings):
    """Typed runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        # Load `backend/.env` regardless of current working directory.
        env_file=[DEFAULT_ENV_FILE, ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "dev"

    # Persistence
    storage_backend: StorageMode = StorageMode.FILE
    data_file: str = str(DEFAULT_DATA_FILE)
    seed_on_first_run: bool = True

    # Date windows
    week_starts_on: WeekStart = WeekStart.SUNDAY

    cors_origins: str = ""

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"
    log_use_utc: bool = False
    request_log_slow_ms: int = Field(default=1000, ge=0)
    request_log_include_health: bool = False

    @model_validator(mode="after")
    def _defaults(self) -> Self:
        if self.storage_backend == StorageMode.FILE and not self.data_file.strip():
            raise ValueError("DATA_FILE must be set and non-empty when STORAGE_BACKEND=file.")
        self.log_format = self.log_format.strip().lower() or "text"
        if self.log_format not in {"text", "json"}:
            raise ValueError("LOG_FORMAT must be either 'text' or 'json'.")
        return self

    @property
    def data_path(self) -> Path:
        """Resolved path of the JSON data file."""
        return Path(self.data_file).expanduser()


settings = Settings()
