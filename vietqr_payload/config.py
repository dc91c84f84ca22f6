"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="vietqr-payload")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    default_template: Literal["compact", "compact2"] = Field(default="compact2")
    strict_validation: bool = Field(
        default=True,
        validation_alias=AliasChoices("VIETQR_STRICT", "STRICT_VALIDATION"),
        description="Validate payloads by TLV decode and CRC check instead of substring probes",
    )
    require_reference: bool = Field(
        default=False,
        description="Reject requests without transaction_id instead of using a clock-derived reference",
    )
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
