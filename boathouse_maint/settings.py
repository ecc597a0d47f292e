from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection and logging configuration for maintenance fixes.

    Values are loaded from environment variables and `.env`, using the same
    DB_* keys as the boathouse ETL/API services.
    """

    # Empty values fall back to the defaults, like `process.env.X || default`.
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True, extra="ignore"
    )

    # Database
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_NAME: str = Field(default="boathouse_etl")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="password")
    DB_SSL: bool = Field(default=False)
    # Optional schema placed first on the search_path (mainly for test schemas).
    DB_SCHEMA: str | None = Field(default=None)
    DB_CONNECT_TIMEOUT: int = Field(default=10)
    # 0 disables the server-side statement timeout.
    DB_STATEMENT_TIMEOUT_MS: int = Field(default=30000)
    # Echo executed SQL at DEBUG (off by default, like the ETL services).
    DB_LOG_SQL: bool = Field(default=False)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    # If set, a daily-rotating log file is written here in addition to the console.
    LOG_DIR: Path | None = Field(default=None)
    LOG_BACKUP_COUNT: int = Field(default=14)

    def describe_target(self) -> str:
        return f"{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


def load_settings() -> Settings:
    return Settings()
