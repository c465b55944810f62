from __future__ import annotations

from .config import LoggingConfig, get_default_log_path, resolve_log_file
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "get_default_log_path",
    "get_logger",
    "resolve_log_file",
    "shutdown_logging",
]
