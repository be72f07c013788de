"""
app/intake/policy.py

The upload policy: which file types are accepted and how big a request
may be.

An UploadPolicy is built once at startup from Settings and then handed to
every component that needs it. Nothing reads the environment after that,
so tests can construct a policy directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from app.core.config import Settings
from app.core.constants import (
    DEFAULT_ALLOWED_EXTENSIONS,
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_MAX_FILE_SIZE,
    EXTENSION_CONTENT_TYPES,
    MAX_FILES_PER_REQUEST,
    SIZE_UNITS,
)
from app.core.logger import get_logger

logger = get_logger(__name__)

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(B|KB|MB|GB)?$", re.IGNORECASE)


def parse_size(size_str: Optional[str]) -> int:
    """
    Convert a human-readable size such as ``"25MB"`` into a byte count.

    Units are powers of 1024 and case-insensitive; a bare number is bytes.
    Missing or malformed input falls back to 10 MiB rather than raising.

    >>> parse_size("512KB")
    524288
    """
    if not size_str:
        return DEFAULT_MAX_FILE_BYTES

    match = _SIZE_RE.match(size_str)
    if not match:
        logger.warning("Unparseable size '%s' — using default of %s.", size_str, DEFAULT_MAX_FILE_SIZE)
        return DEFAULT_MAX_FILE_BYTES

    value = float(match.group(1))
    unit = (match.group(2) or "B").upper()
    return int(value * SIZE_UNITS[unit])


def parse_allowed_extensions(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated extension list; ``None`` or blank means the default list."""
    if not raw or not raw.strip():
        return DEFAULT_ALLOWED_EXTENSIONS
    return tuple(ext.strip().lower().lstrip(".") for ext in raw.split(",") if ext.strip())


def build_type_table(
    extensions: Iterable[str],
    content_types: Mapping[str, str] = EXTENSION_CONTENT_TYPES,
) -> Mapping[str, Optional[str]]:
    """
    Map each allowed extension to the one content-type it must be declared as.

    An allowed extension without a known content-type maps to ``None``. It
    stays in the allow-list (and in error messages) but no upload can ever
    match it.
    """
    table = {}
    for ext in extensions:
        expected = content_types.get(ext)
        if expected is None:
            logger.warning(
                "Extension '%s' is allowed but has no known content-type — "
                "files of this type will always be rejected.",
                ext,
            )
        table[ext] = expected
    return MappingProxyType(table)


@dataclass(frozen=True)
class UploadPolicy:
    """
    Immutable, process-wide upload rules.

    Attributes:
        types               : extension (lower-case, no dot) → expected content-type.
        max_file_bytes      : per-file byte cap.
        max_file_size_label : cap as shown to clients ("10MB", "25MB", ...).
        max_files           : cap on file parts per request.
    """

    types: Mapping[str, Optional[str]] = field(
        default_factory=lambda: build_type_table(DEFAULT_ALLOWED_EXTENSIONS)
    )
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    max_file_size_label: str = DEFAULT_MAX_FILE_SIZE
    max_files: int = MAX_FILES_PER_REQUEST

    @property
    def allowed_extensions(self) -> Tuple[str, ...]:
        return tuple(self.types.keys())

    def expected_content_type(self, extension: str) -> Optional[str]:
        return self.types.get(extension)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadPolicy":
        """Build the policy from environment-backed settings."""
        return cls(
            types=build_type_table(parse_allowed_extensions(settings.allowed_file_types)),
            max_file_bytes=parse_size(settings.max_file_size),
            max_file_size_label=settings.max_file_size or DEFAULT_MAX_FILE_SIZE,
        )

    @classmethod
    def for_extensions(cls, *extensions: str, **overrides) -> "UploadPolicy":
        """Shortcut for a policy allowing only ``extensions``."""
        return cls(types=build_type_table(extensions), **overrides)
