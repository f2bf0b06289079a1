"""Configuration management for the tracking-number extractor.

Supports configuration via:
1. Environment variables
2. Dependency Injection (constructor parameters)
3. Default values

Environment Variables:
    TRACKING_EXTRACTOR_MAX_INPUT_CHARS: Input is truncated beyond this length (default: 200000)
    TRACKING_EXTRACTOR_MAX_TOKEN_LENGTH: Longer alphanumeric runs are ignored (default: 128)
    TRACKING_EXTRACTOR_UNKNOWN_MIN_LENGTH: Shortest unclassified candidate (default: 8)
    TRACKING_EXTRACTOR_UNKNOWN_MAX_LENGTH: Longest unclassified candidate (default: 30)
    TRACKING_EXTRACTOR_LOG_FORMAT: Log format - 'json' or 'text' (default: json)
    TRACKING_EXTRACTOR_LOG_LEVEL: Log level (default: INFO)
"""

from typing import Optional, Literal
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, field: str, value, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid configuration for '{field}': {message} (got: {value})")


class ExtractorSettings(BaseSettings):
    """Extractor configuration with environment variable support.

    Settings are loaded from environment variables with TRACKING_EXTRACTOR_ prefix.
    All values are validated on load to ensure safe operation.
    """

    max_input_chars: int = Field(
        default=200_000,
        ge=1_000,
        le=10_000_000,
        description="Maximum characters scanned per call; longer input is truncated"
    )
    max_token_length: int = Field(
        default=128,
        ge=18,
        le=4096,
        description="Alphanumeric runs longer than this are skipped"
    )
    unknown_min_length: int = Field(
        default=8,
        ge=4,
        le=64,
        description="Minimum length of a candidate that matches no carrier rule"
    )
    unknown_max_length: int = Field(
        default=30,
        ge=8,
        le=128,
        description="Maximum length of a candidate that matches no carrier rule"
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log format: 'json' for structured, 'text' for human-readable"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    model_config = {
        "env_prefix": "TRACKING_EXTRACTOR_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def validate_settings_combination(self) -> "ExtractorSettings":
        """Validate combinations of settings that depend on each other."""
        if self.unknown_min_length > self.unknown_max_length:
            raise ConfigurationError(
                "unknown_min_length",
                self.unknown_min_length,
                f"must not exceed unknown_max_length ({self.unknown_max_length})",
            )

        if self.unknown_max_length > self.max_token_length:
            import warnings
            warnings.warn(
                f"unknown_max_length ({self.unknown_max_length}) exceeds "
                f"max_token_length ({self.max_token_length}); longer tokens are "
                "skipped before classification.",
                UserWarning
            )

        return self

    @classmethod
    def from_env(cls) -> "ExtractorSettings":
        """Create settings from environment variables."""
        return cls()

    def with_overrides(
        self,
        max_input_chars: Optional[int] = None,
        max_token_length: Optional[int] = None,
        unknown_min_length: Optional[int] = None,
        unknown_max_length: Optional[int] = None,
        log_format: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "ExtractorSettings":
        """Create new settings with overridden values (DI pattern)."""
        return ExtractorSettings(
            max_input_chars=max_input_chars or self.max_input_chars,
            max_token_length=max_token_length or self.max_token_length,
            unknown_min_length=unknown_min_length or self.unknown_min_length,
            unknown_max_length=unknown_max_length or self.unknown_max_length,
            log_format=log_format or self.log_format,
            log_level=log_level or self.log_level,
        )


# Global default settings instance (can be overridden)
_settings: Optional[ExtractorSettings] = None


def get_settings() -> ExtractorSettings:
    """Get current settings (lazy initialization from env)."""
    global _settings
    if _settings is None:
        _settings = ExtractorSettings.from_env()
    return _settings


def configure(settings: ExtractorSettings) -> None:
    """Configure global settings (useful for testing or DI)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to reload from environment (useful for testing)."""
    global _settings
    _settings = None
