"""Settings for the lambdaaccess build step.

This module provides a Pydantic-validated settings model for the ambient
concerns of the compiler (log level, log format, the diagnostic prefix and
the optional schema check).

load_settings_from_env() is the ONLY place os.getenv is allowed.
All other code MUST receive an AccessSettings instance.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

DEFAULT_LOG_PREFIX = "[serverless-plugin-lambda-account-access]"


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AccessSettings(BaseModel):
    """Settings for a single compilation pass.

    Environment variables:
        LAMBDA_ACCESS_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL
        LAMBDA_ACCESS_LOG_JSON: emit JSON log lines
        LAMBDA_ACCESS_LOG_PREFIX: prefix for host-facing diagnostics
        LAMBDA_ACCESS_VALIDATE_SCHEMA: check the access block against the schema
    """

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the build step",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    log_prefix: str = Field(
        default=DEFAULT_LOG_PREFIX,
        description="Prefix prepended to diagnostics sent to the host log",
    )
    validate_schema: bool = Field(
        default=False,
        description="Validate provider.access against the declared schema before compiling",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def _env_flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def load_settings_from_env() -> AccessSettings:
    """Load settings from environment variables.

    Returns:
        AccessSettings instance with values from environment or defaults.
    """
    import os

    return AccessSettings(
        log_level=os.getenv("LAMBDA_ACCESS_LOG_LEVEL", "INFO"),
        log_json=_env_flag(os.getenv("LAMBDA_ACCESS_LOG_JSON", "false")),
        log_prefix=os.getenv("LAMBDA_ACCESS_LOG_PREFIX", DEFAULT_LOG_PREFIX),
        validate_schema=_env_flag(os.getenv("LAMBDA_ACCESS_VALIDATE_SCHEMA", "false")),
    )


__all__ = [
    "AccessSettings",
    "DEFAULT_LOG_PREFIX",
    "LogLevel",
    "load_settings_from_env",
]
