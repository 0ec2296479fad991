"""Configuration for Winnie Core.

Pydantic Settings with environment variable and ``.env`` support.

Usage:
    from winnie_core.config import load_config

    config = load_config()
    print(config.engine.max_projection_months)

    # Override for a test or a one-off run
    config = load_config(engine=EngineConfig(max_projection_months=360))
"""

from decimal import Decimal
from typing import Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_INFLATION_RATE, MAX_PROJECTION_MONTHS
from .exceptions import ConfigurationError


class EngineConfig(BaseSettings):
    """Projection engine settings.

    Environment Variables:
        WINNIE_ENGINE_MAX_PROJECTION_MONTHS: Horizon after which a goal is
            reported unreachable
        WINNIE_ENGINE_INFLATION_RATE: Annual inflation used for
            today's-dollars adjustments
    """

    model_config = SettingsConfigDict(
        env_prefix="WINNIE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_projection_months: int = Field(
        default=MAX_PROJECTION_MONTHS,
        ge=1,
        le=1200,
        description="Maximum months to project before a goal counts as unreachable",
    )
    inflation_rate: Decimal = Field(
        default=DEFAULT_INFLATION_RATE,
        ge=0,
        le=1,
        description="Annual inflation rate as a decimal",
    )


class WinnieConfig(BaseSettings):
    """Root configuration.

    Environment Variables:
        WINNIE_ENV: Environment name (development, staging, production, test)
        WINNIE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        WINNIE_LOG_JSON: Render log events as JSON instead of console text
    """

    model_config = SettingsConfigDict(
        env_prefix="WINNIE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    engine: EngineConfig = Field(default_factory=EngineConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        return self.log_level == "DEBUG"


def load_config(**overrides: Any) -> WinnieConfig:
    """Load configuration from the environment, applying ``overrides``.

    Raises:
        ConfigurationError: If any setting fails validation.
    """
    try:
        return WinnieConfig(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration: {first['msg']}",
            config_key=key,
            expected=first["msg"],
            actual=first.get("input"),
            details={"errors": len(e.errors())},
        ) from e
