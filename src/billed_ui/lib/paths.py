"""
Path utilities for the Billed UI.

Provides convenience functions for common path operations like
resolving the session storage directory.
"""

import os
import tempfile
from pathlib import Path


def temp_dir() -> Path:
    """
    Return the system temporary directory as a Path.

    Returns:
        Path object pointing to the system temp directory.
    """
    return Path(tempfile.gettempdir())


def session_dir() -> Path | None:
    """
    Return the directory used to persist the session, if one is configured.

    BILLED_UI_SESSION_DIR may hold an absolute path, or a bare name that is
    resolved under the temporary directory.
    """
    value = os.getenv("BILLED_UI_SESSION_DIR", "").strip()
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else temp_dir() / path
