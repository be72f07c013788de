"""
app/intake/provisioner.py

Creates the on-disk upload layout:

    <root>/
      documents/
      images/
      reports/

Called once from the application lifespan, before any request is served.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from app.core.constants import STORAGE_FOLDERS
from app.core.exceptions import StorageInitError
from app.core.logger import get_logger

logger = get_logger(__name__)


def upload_dirs(root: Path) -> List[Path]:
    """Return the root followed by every storage sub-directory."""
    return [root] + [root / folder for folder in STORAGE_FOLDERS]


def ensure_upload_dirs(root: Path) -> List[Path]:
    """
    Make sure the upload root and its sub-directories exist.

    Safe to call repeatedly; existing directories are left untouched.

    Raises:
        StorageInitError: If any directory cannot be created.
    """
    dirs = upload_dirs(Path(root))
    for path in dirs:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageInitError(f"Cannot create upload directory '{path}': {exc}") from exc

    logger.info("Upload directories ready under '%s'.", root)
    return dirs
