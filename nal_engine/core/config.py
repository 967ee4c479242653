"""
Configuration management for the NAL-Engine framework.

Supports environment variables and programmatic configuration.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nal_engine.core.exceptions import InvalidConfigError


class TruthConfig(BaseSettings):
    """Configuration for truth-value defaults and evidence accounting."""

    model_config = SettingsConfigDict(env_prefix="NAL_TRUTH_")

    # Truth value given to an assertion without an explicit <f, c>
    default_frequency: float = Field(default=1.0, ge=0.0, le=1.0)
    default_confidence: float = Field(default=0.99, ge=0.0, lt=1.0)

    # Evidence horizon k
    evidence_horizon: float = Field(default=1.0, gt=0.0)

    # Frequency reported when a formula sees no evidence at all (0/0)
    ignorance_frequency: float = Field(default=0.5, ge=0.0, le=1.0)


class ExperienceConfig(BaseSettings):
    """Configuration for the experience base."""

    model_config = SettingsConfigDict(env_prefix="NAL_EXPERIENCE_")

    name: str = "ExperienceBase"
    reference_counted_terms: bool = False


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    model_config = SettingsConfigDict(env_prefix="NAL_LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "console"] = "console"
    file_path: str = ""  # Empty means no file logging

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class Config(BaseSettings):
    """
    Main configuration class for the NAL-Engine framework.

    Can be configured via:
    - Environment variables (NAL_* prefix, nested with __)
    - Programmatic instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="NAL_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Sub-configurations
    truth: TruthConfig = Field(default_factory=TruthConfig)
    experience: ExperienceConfig = Field(default_factory=ExperienceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Global settings
    debug_mode: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create config from a dictionary.

        Raises:
            InvalidConfigError: If a value fails validation.
        """
        try:
            return cls(**data)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            raise InvalidConfigError(key, first.get("input"), first["msg"]) from e


# Global default config instance
_default_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _default_config
    if _default_config is None:
        _default_config = Config.from_env()
    return _default_config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (None resets to environment defaults)."""
    global _default_config
    _default_config = config
