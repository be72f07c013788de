"""
app/core/constants.py

Application-wide fixed constants.

These are business rules that are part of the system's contract and are
NOT configurable via environment variables.
"""

from typing import Dict, Tuple

# ── Storage layout ─────────────────────────────────────────────────────────────

DOCUMENTS_FOLDER: str = "documents"
IMAGES_FOLDER: str = "images"
REPORTS_FOLDER: str = "reports"

#: Sub-directories created under the upload root at startup.
STORAGE_FOLDERS: Tuple[str, ...] = (DOCUMENTS_FOLDER, IMAGES_FOLDER, REPORTS_FOLDER)

# ── Allowed file types ─────────────────────────────────────────────────────────

#: Extensions accepted when ALLOWED_FILE_TYPES is not set.
DEFAULT_ALLOWED_EXTENSIONS: Tuple[str, ...] = (
    "jpg", "jpeg", "png", "pdf", "doc", "docx", "xls", "xlsx",
)

#: The one content-type a client must declare for each known extension.
EXTENSION_CONTENT_TYPES: Dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

# ── Limits ─────────────────────────────────────────────────────────────────────

DEFAULT_MAX_FILE_SIZE: str = "10MB"
DEFAULT_MAX_FILE_BYTES: int = 10 * 1024 * 1024

#: Hard cap on file parts in a single request.
MAX_FILES_PER_REQUEST: int = 10

#: Default cap for the "many files under one field" submission shape.
DEFAULT_ARRAY_MAX_COUNT: int = 5

#: Bytes copied per read when streaming a part to disk.
COPY_CHUNK_SIZE: int = 64 * 1024

SIZE_UNITS: Dict[str, int] = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 ** 2,
    "GB": 1024 ** 3,
}
