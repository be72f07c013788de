"""
app/core/exceptions.py

Custom exception hierarchy for the application.

Raising typed exceptions from services lets controllers catch specific
cases and return the correct HTTP status code without leaking internals.
Upload errors additionally carry a ``kind`` tag so handlers can branch on
structure instead of matching message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence


class AppBaseException(Exception):
    """Root exception — catch-all for any application-level error."""


# ── Infrastructure exceptions ──────────────────────────────────────────────────

class StorageInitError(AppBaseException):
    """Raised when the upload directories cannot be created at startup."""


# ── Upload exceptions ──────────────────────────────────────────────────────────

class UploadErrorKind(str, Enum):
    FILE_TOO_LARGE = "file_too_large"
    TOO_MANY_FILES = "too_many_files"
    UNEXPECTED_FIELD = "unexpected_field"
    PARSER = "parser"
    TYPE_NOT_ALLOWED = "type_not_allowed"


class UploadError(AppBaseException):
    """
    Base class for every rejection of an upload request.

    Attributes:
        kind   : Which rule rejected the request.
        detail : Low-level description (library message, offending field, ...).
    """

    kind: UploadErrorKind = UploadErrorKind.PARSER

    def __init__(self, detail: str = "", message: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(message or detail or self.kind.value)


class FileTooLargeError(UploadError):
    """Raised when a single file part exceeds the per-file byte cap."""

    kind = UploadErrorKind.FILE_TOO_LARGE


class TooManyFilesError(UploadError):
    """Raised when a request carries more file parts than allowed."""

    kind = UploadErrorKind.TOO_MANY_FILES


class UnexpectedFieldError(UploadError):
    """Raised when a file arrives under a field the endpoint does not expect."""

    kind = UploadErrorKind.UNEXPECTED_FIELD

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(detail=f"Unexpected field '{field}'")


class MultipartParseError(UploadError):
    """Raised when the multipart body itself cannot be parsed."""

    kind = UploadErrorKind.PARSER


class FileTypeNotAllowedError(UploadError):
    """Raised when a file's extension or declared content-type is not accepted."""

    kind = UploadErrorKind.TYPE_NOT_ALLOWED

    def __init__(self, allowed: Sequence[str], filename: str = "") -> None:
        self.allowed = list(allowed)
        self.filename = filename
        super().__init__(
            detail=filename,
            message=f"File type not allowed. Allowed types: {', '.join(self.allowed)}",
        )
