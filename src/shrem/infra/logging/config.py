from __future__ import annotations

"""
Logging Configuration Models.

Translates the runtime settings of a removal run ('log_level', 'log_file')
into the immutable configuration consumed by configure_logging(). Console
records share the 'shrem:' prefix of the tool's own messages so diagnostics
read like the rest of stderr.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from shrem.infra.fs import get_user_data_dir, normalize_path

# Keyword accepted for 'log_file' meaning "the standard location"
DEFAULT_LOG_KEYWORD = "default"
LOG_DIR_NAME = "logs"
LOG_FILE_NAME = "shrem.log"

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_default_log_path() -> str:
    """Return ~/.shrem/logs/shrem.log (or its Windows equivalent)."""
    return os.path.join(get_user_data_dir(), LOG_DIR_NAME, LOG_FILE_NAME)


def resolve_log_file(value: Optional[str]) -> Optional[str]:
    """
    Map a 'log_file' setting to an absolute path.

    None or blank disables file logging, the 'default' keyword selects the
    standard location, anything else is expanded ('~', $VARS) and made
    absolute.
    """
    if value is None or not value.strip():
        return None
    if value.strip().lower() == DEFAULT_LOG_KEYWORD:
        return get_default_log_path()
    return normalize_path(value)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable specification for the logging subsystem initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        log_file: Absolute path of the rotating audit log, or None.
        max_bytes: Maximum size per log segment before rotation.
        backup_count: Number of historical log segments to preserve.
        console_fmt: Format for terminal output.
        file_fmt: Format for file entries; keeps the logger name so each
                  failure can be traced to the walker, obliterator or shredder.
        datefmt: Timestamp format.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 5

    console_fmt: str = "shrem: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s | %(process)d | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], *, console: bool = True) -> "LoggingConfig":
        """Build the logging configuration from a validated runtime config."""
        return cls(
            level=str(settings.get("log_level") or "INFO"),
            console=console,
            log_file=resolve_log_file(settings.get("log_file")),
        )
