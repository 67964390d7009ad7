"""
paths.py - Store path resolution.
"""

import os
from pathlib import Path

from keymapp_sync.config import STORE_DIR_MODE


def resolve_store_path(path: str) -> Path:
    """
    Expand a leading "~/" to the user's home directory.

    Other forms (relative paths, "~user/") are returned unchanged.
    """
    if path.startswith("~/"):
        return Path.home() / path[2:]
    return Path(path)


def ensure_parent_dir(path: Path, mode: int = STORE_DIR_MODE) -> None:
    """Create the directory holding path, with any missing parents."""
    os.makedirs(path.parent, mode=mode, exist_ok=True)
