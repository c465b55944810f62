from __future__ import annotations

"""
Configuration management for shrem.

Provides the runtime defaults and loads the optional persistent JSON file
stored in the user data directory. Values given on the command line are
merged on top by the CLI controller.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from shrem.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
DEFAULT_PASSES = 3
DEFAULT_SHRED_COMMAND = "shred"
TOOL_PREFIX = "shrem"


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """Return the default runtime configuration dictionary."""
    return {
        # Overwrite delegation
        "passes": DEFAULT_PASSES,
        "zero_pass": True,
        "shred_command": DEFAULT_SHRED_COMMAND,

        # Removal behaviour
        "recursive": False,
        "force": False,
        "interactive": False,
        "verbose": False,

        # Logging
        "log_level": "INFO",
        "log_file": None,
    }


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# I/O Operations
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persistent configuration merged onto the defaults.

    A missing file is not an error. An unreadable or malformed file is
    logged and ignored so a broken config never blocks a removal run.

    Args:
        path: Explicit config file. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: Defaults updated with the keys found in the file.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"No config file at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Invalid config format in '{config_path}'. Using defaults.")
        return config

    unknown = sorted(set(data) - set(config))
    if unknown:
        logger.debug(f"Ignoring unknown config keys: {', '.join(unknown)}")

    config.update({k: v for k, v in data.items() if k in config})
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """Persist *config* as JSON, creating the parent directory if needed."""
    config_path = path or get_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Config saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
