"""Application configuration loaded from environment variables."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central place for strongly typed application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Totem API")
    app_version: str = Field(default="1.0.0")
    environment: Literal["development", "test", "production"] = Field(default="development")
    port: int = Field(default=3001)
    docs_url: str = Field(default="/api-docs")

    database_path: str = Field(default="./database.sqlite")
    database_url: str | None = Field(default=None)

    log_level: str | None = Field(default=None)
    log_dir: str = Field(default="logs")
    log_to_file: bool | None = Field(default=None)

    @model_validator(mode="after")
    def resolve_database_url(self) -> "Settings":
        """Derive the SQLite URL from DATABASE_PATH and normalise psycopg3 URLs."""
        if not self.database_url:
            self.database_url = f"sqlite:///{self.database_path}"
        if self.database_url.startswith("postgresql+psycopg://"):
            self.database_url = self.database_url.replace("postgresql+psycopg://", "postgresql://")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.environment == "development" else "INFO"

    @property
    def file_logging_enabled(self) -> bool:
        if self.log_to_file is not None:
            return self.log_to_file
        return self.environment != "test"


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance so downstream code can import directly."""

    return Settings()
