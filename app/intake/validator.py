"""
app/intake/validator.py

Accepts or rejects a file part from its filename and declared
content-type.

Rule: the lower-cased extension must be in the policy AND the declared
content-type must equal exactly the one the policy expects for it.
"""

from __future__ import annotations

from app.core.exceptions import FileTypeNotAllowedError
from app.core.logger import get_logger
from app.intake.naming import original_suffix
from app.intake.policy import UploadPolicy

logger = get_logger(__name__)


def extract_extension(filename: str) -> str:
    """Lower-cased extension without the leading dot; "" when there is none."""
    return original_suffix(filename).lower()[1:]


class FileTypeValidator:
    """Checks uploads against the allow-list of an UploadPolicy."""

    def __init__(self, policy: UploadPolicy) -> None:
        self._policy = policy

    def is_allowed(self, filename: str, content_type: str) -> bool:
        ext = extract_extension(filename)
        if ext not in self._policy.types:
            return False
        expected = self._policy.expected_content_type(ext)
        return expected is not None and content_type == expected

    def validate(self, filename: str, content_type: str) -> None:
        """
        Raise if the file may not be uploaded.

        Raises:
            FileTypeNotAllowedError: listing the allowed extensions.
        """
        if self.is_allowed(filename, content_type):
            return

        logger.info("Rejected '%s' declared as '%s'.", filename, content_type)
        raise FileTypeNotAllowedError(self._policy.allowed_extensions, filename=filename)
