"""
Centralized logging configuration for the job board.

Provides logging with component and request_id tagging for easy debugging.
Supports debug_mode flag for verbose logging (DEBUG_MODE=true).
"""

import json
import logging
import os
import sys
from typing import Optional


# Global debug mode flag - can be set via environment
_GLOBAL_DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"


def set_global_debug_mode(enabled: bool) -> None:
    """Set global debug mode."""
    global _GLOBAL_DEBUG_MODE
    _GLOBAL_DEBUG_MODE = enabled


def is_debug_mode() -> bool:
    """Check if debug mode is enabled globally."""
    return _GLOBAL_DEBUG_MODE


class ContextLogger:
    """
    Logger that adds contextual information to every message.

    Prefixes messages with the component name (e.g. "job_store") and,
    when set, a shortened request id so a request can be followed
    through the store and the listing cache.
    """

    def __init__(
        self,
        name: str,
        component: Optional[str] = None,
        request_id: Optional[str] = None,
        debug_mode: Optional[bool] = None
    ):
        """
        Initialize context logger.

        Args:
            name: Logger name (usually __name__)
            component: Optional component name (e.g., "job_store", "listing_cache")
            request_id: Optional request identifier for correlation
            debug_mode: If True, enables DEBUG level for this logger.
                       If None, uses global debug mode setting.
        """
        self.logger = logging.getLogger(name)
        self.component = component
        self.request_id = request_id

        # Explicit param > global setting
        self._debug_mode = debug_mode if debug_mode is not None else is_debug_mode()

        if self._debug_mode:
            self.logger.setLevel(logging.DEBUG)

    @property
    def level(self) -> int:
        """Get current logging level."""
        return self.logger.level

    def bind(self, request_id: Optional[str]) -> "ContextLogger":
        """Return a copy of this logger tagged with a request id."""
        return ContextLogger(
            self.logger.name,
            component=self.component,
            request_id=request_id,
            debug_mode=self._debug_mode,
        )

    def _format_message(self, message: str) -> str:
        """Add contextual prefix to message."""
        prefix_parts = []
        if self.request_id:
            prefix_parts.append(f"[req:{self.request_id[:8]}]")
        if self.component:
            prefix_parts.append(f"[{self.component}]")

        if prefix_parts:
            return f"{' '.join(prefix_parts)} {message}"
        return message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message), **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message), **kwargs)


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format == "json":
        formatter = JsonLineFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    component: Optional[str] = None,
    request_id: Optional[str] = None,
    debug_mode: Optional[bool] = None
) -> ContextLogger:
    """
    Get a context logger instance.

    Args:
        name: Logger name (usually __name__)
        component: Optional component name
        request_id: Optional request identifier
        debug_mode: If True, enables DEBUG level. If None, uses global setting.

    Returns:
        ContextLogger instance
    """
    return ContextLogger(name, component, request_id, debug_mode)
