"""Logging utilities for the lambdaaccess build step.

This module provides:
- Logging configuration from AccessSettings
- Safe preview of principal values for log messages
- Structured logging with group/function context
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import AccessSettings, LogLevel

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "group", "function",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Args:
        value: The value to preview (principal, directive, any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class AccessLogFormatter(logging.Formatter):
    """Formatter that includes group/function context and optional JSON output."""

    def __init__(self, json_format: bool = False, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        group = getattr(record, "group", None)
        function = getattr(record, "function", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if group:
            log_data["group"] = group
        if function:
            log_data["function"] = function

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        if group:
            parts.append(f"group={group}")
        if function:
            parts.append(f"function={function}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class AccessLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds the current group (and function) to log records.

    Usage:
        logger = get_access_logger(__name__, group="api")
        logger.debug("Created permission", function="Function1LambdaFunction")
    """

    def __init__(self, logger: logging.Logger, group: Optional[str] = None):
        super().__init__(logger, {})
        self.group = group

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        group = kwargs.pop("group", self.group)
        function = kwargs.pop("function", None)

        extra = kwargs.get("extra", {})
        if group:
            extra["group"] = group
        if function:
            extra["function"] = function
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(settings: Optional[AccessSettings] = None) -> None:
    """Configure the root logger for a build run.

    Args:
        settings: AccessSettings instance (if None, loads from environment)
    """
    if settings is None:
        from .config import load_settings_from_env

        settings = load_settings_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(AccessLogFormatter(json_format=settings.log_json))
    root_logger.addHandler(console_handler)


def get_access_logger(name: str, group: Optional[str] = None) -> AccessLoggerAdapter:
    """Get a logger adapter bound to an optional access group.

    Example:
        logger = get_access_logger(__name__, group="api")
        logger.warning("Group is not used")
    """
    return AccessLoggerAdapter(logging.getLogger(name), group=group)


__all__ = [
    "safe_preview",
    "AccessLogFormatter",
    "AccessLoggerAdapter",
    "setup_logging",
    "get_access_logger",
]
