from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization shared by the scanner, the tree builder and the
navigator, plus user data directory resolution for diagnostics. All cache
keys are produced by `normalize_path` so that lookups never disagree about
trailing separators.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

ROOT_PATH = "/"
UNIX_APP_DIR_NAME = ".dusk"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the per-user application directory (~/.dusk).

    Only the default config file lives here. The directory is never created.

    Returns:
        str: Absolute path to the application data directory.
    """
    try:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)
    except Exception:
        path = os.path.abspath(UNIX_APP_DIR_NAME)
    return os.path.abspath(path)


def normalize_path(path: str) -> str:
    """
    Remove trailing separators, except for the literal root.

    Args:
        path: Raw path as emitted by the enumeration or typed by the user.

    Returns:
        str: Normalized path ('/' stays '/').
    """
    if not path:
        return path
    stripped = path.rstrip("/")
    return stripped or ROOT_PATH


def parent_path(path: str) -> str:
    """
    Compute the normalized parent directory of a normalized path.

    Args:
        path: Normalized absolute path.

    Returns:
        str: Parent path; the parent of '/' is '/'.
    """
    return normalize_path(os.path.dirname(normalize_path(path))) or ROOT_PATH


def is_within(path: str, start: str) -> bool:
    """
    Check whether `path` equals `start` or lies underneath it.

    Args:
        path: Normalized candidate path.
        start: Normalized scan root.

    Returns:
        bool: True if the candidate belongs to the scanned subtree.
    """
    if path == start:
        return True
    prefix = start if start == ROOT_PATH else start + "/"
    return path.startswith(prefix)


def resolve_start_path(path: Optional[str], fallback: str = ROOT_PATH) -> str:
    """
    Turn a user-provided directory into a normalized absolute path.

    Handles user home shortcuts (~/) and environment variables. Reverts to
    fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use when the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return normalize_path(os.path.abspath(p))
