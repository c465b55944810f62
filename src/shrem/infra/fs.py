from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path resolution helpers shared by the configuration and logging layers.
The obliteration core talks to the 'os' module directly.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "shrem"
UNIX_APP_DIR_NAME = ".shrem"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    The directory is not created here; writers create it on demand.
    Standards:
    - Windows: %LOCALAPPDATA%/shrem
    - Linux/Mac: ~/.shrem

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Expand '~' and environment variables and return an absolute path.

    Args:
        path: Raw input path string.
        fallback: Value used when *path* is empty.

    Returns:
        str: Normalized absolute path, or '' if both inputs are empty.
    """
    p = (path or "").strip() or fallback
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))
