"""
Configuration module for the faultline gateway.

The Settings object centralizes environment-driven configuration with strict
typing and validation rules. The error pipeline components never read it
directly; the application factory passes plain values into them.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    project_name: str = Field(default="Faultline Gateway", alias="PROJECT_NAME")
    environment: Literal["local", "test", "staging", "production"] = Field(
        default="local",
        alias="APP_ENV",
    )
    debug: bool = Field(
        default=False,
        alias="DEBUG",
        description="Expose internal error detail to HTTP clients.",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    module_name: str = Field(
        default="gateway",
        alias="MODULE_NAME",
        description="Name stamped into outgoing wire errors as moduleName.",
    )
    include_stack_trace: bool = Field(
        default=False,
        alias="INCLUDE_STACK_TRACE",
        description="Attach captured stack traces to outgoing wire errors.",
    )
    max_cause_depth: int = Field(
        default=20,
        alias="WIRE_MAX_CAUSE_DEPTH",
        description="Deepest nesting of decoded causes kept from a peer.",
        ge=1,
        le=256,
    )
    generic_error_message: str = Field(
        default="Internal server error",
        alias="GENERIC_ERROR_MESSAGE",
        description="Message returned for system failures when DEBUG is off.",
    )
    response_log: bool = Field(default=False, alias="RESPONSE_LOG")
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")

    @field_validator("module_name", "generic_error_message", mode="before")
    @classmethod
    def _strip_string(cls, value: str | None, info: ValidationInfo) -> str:
        if value is None:
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must be provided.")
        trimmed = str(value).strip()
        if not trimmed:
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must not be empty.")
        return trimmed

    @model_validator(mode="after")
    def _validate_debug_outside_production(self) -> "Settings":
        if self.debug and self.environment == "production":
            raise ValueError("DEBUG must be disabled when APP_ENV is 'production'.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance so configuration is evaluated once."""
    return Settings()


settings = get_settings()
