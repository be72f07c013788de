"""
app/intake/errors.py

Turns upload rejections into the uniform client payload.

    FILE_TOO_LARGE    → "File too large. Maximum size: <cap>"
    TOO_MANY_FILES    → "Too many files. Maximum <n> files allowed"
    UNEXPECTED_FIELD  → "Unexpected field name"
    PARSER            → "File upload error"
    TYPE_NOT_ALLOWED  → the validator's own message, unchanged

Anything that is not an UploadError is not translated here and is left
for the generic error handler.
"""

from __future__ import annotations

from typing import Optional

from app.core.exceptions import UploadError, UploadErrorKind
from app.core.logger import get_logger
from app.intake.policy import UploadPolicy
from app.models.upload_models import UploadErrorResponse

logger = get_logger(__name__)


def translate_upload_error(exc: BaseException, policy: UploadPolicy) -> Optional[UploadErrorResponse]:
    """Return the client payload for ``exc``, or None if it is not an upload rejection."""
    if not isinstance(exc, UploadError):
        return None

    if exc.kind is UploadErrorKind.FILE_TOO_LARGE:
        message = f"File too large. Maximum size: {policy.max_file_size_label}"
    elif exc.kind is UploadErrorKind.TOO_MANY_FILES:
        message = f"Too many files. Maximum {policy.max_files} files allowed"
    elif exc.kind is UploadErrorKind.UNEXPECTED_FIELD:
        message = "Unexpected field name"
    elif exc.kind is UploadErrorKind.PARSER:
        logger.warning("Multipart parsing failed: %s", exc.detail)
        message = "File upload error"
    else:
        return UploadErrorResponse(message=str(exc))

    return UploadErrorResponse(message=message, error=exc.detail or None)
