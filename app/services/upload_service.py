"""
app/services/upload_service.py

Stores the file parts of one upload request:

    (field, UploadFile) parts
      └─ count check                    > max_files → TooManyFilesError
           └─ per part, in order:
                FileTypeValidator.validate()   → FileTypeNotAllowedError
                classify_folder()              → images | documents
                generate_stored_name()         → <uuid>-<millis><ext>
                streamed copy to disk          > max_file_bytes → FileTooLargeError

A request is all-or-nothing: when any part is rejected, the files already
written for that request are removed before the error propagates.

Limits come before types: an 11th file part is reported as "too many
files" even when an earlier part has a bad type. multer filters each part
as it streams and would report the bad type first.

The policy, the upload root and the validator are constructor-injected;
the application lifespan builds the production instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import aiofiles
from fastapi import UploadFile

from app.core.constants import COPY_CHUNK_SIZE
from app.core.exceptions import FileTooLargeError, TooManyFilesError
from app.core.logger import get_logger
from app.intake.classifier import classify_folder
from app.intake.naming import generate_stored_name
from app.intake.policy import UploadPolicy
from app.intake.validator import FileTypeValidator
from app.models.upload_models import StoredFile

logger = get_logger(__name__)

FilePart = Tuple[str, UploadFile]


class UploadService:
    """Validates, routes, names and persists uploaded files."""

    def __init__(
        self,
        policy: UploadPolicy,
        root: Path,
        validator: Optional[FileTypeValidator] = None,
    ) -> None:
        self._policy = policy
        self._root = Path(root)
        self._validator = validator or FileTypeValidator(policy)

    # ── Public API ─────────────────────────────────────────────────────────────

    def check_count(self, count: int) -> None:
        """Reject a request carrying more than ``max_files`` file parts."""
        if count > self._policy.max_files:
            raise TooManyFilesError(
                detail=f"{count} files received, limit is {self._policy.max_files}"
            )

    async def store(self, parts: Sequence[FilePart]) -> List[StoredFile]:
        """
        Persist every part, or none of them.

        Args:
            parts: (form field name, UploadFile) pairs in request order.

        Returns:
            One StoredFile per part, in the same order.

        Raises:
            UploadError: The first rejection encountered; nothing is kept.
            OSError:     Disk failures while writing; nothing is kept.
        """
        self.check_count(len(parts))

        written: List[Path] = []
        stored: List[StoredFile] = []
        try:
            for field, upload in parts:
                record = await self._store_one(field, upload, written)
                stored.append(record)
        except Exception:
            self._discard(written)
            raise

        for record in stored:
            logger.info(
                "Stored '%s' as %s (%d bytes).", record.original_name, record.path, record.size
            )
        return stored

    # ── Internals ──────────────────────────────────────────────────────────────

    async def _store_one(self, field: str, upload: UploadFile, written: List[Path]) -> StoredFile:
        original_name = upload.filename or ""
        content_type = upload.content_type or ""

        self._validator.validate(original_name, content_type)

        folder = classify_folder(content_type)
        stored_name = generate_stored_name(original_name)
        destination = self._root / folder / stored_name

        size = await self._copy(upload, destination, written)

        return StoredFile(
            field=field,
            original_name=original_name,
            stored_name=stored_name,
            folder=folder,
            content_type=content_type,
            size=size,
            path=f"{folder}/{stored_name}",
        )

    async def _copy(self, upload: UploadFile, destination: Path, written: List[Path]) -> int:
        """Stream ``upload`` into ``destination`` chunk by chunk, enforcing the byte cap."""
        limit = self._policy.max_file_bytes
        size = 0

        async with aiofiles.open(destination, "xb") as out:
            written.append(destination)
            while True:
                chunk = await upload.read(COPY_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > limit:
                    raise FileTooLargeError(
                        detail=f"'{upload.filename}' exceeds {limit} bytes"
                    )
                await out.write(chunk)
        return size

    @staticmethod
    def _discard(paths: List[Path]) -> None:
        for path in paths:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.warning("Could not remove rejected upload '%s': %s", path, exc)
        if paths:
            logger.info("Discarded %d file(s) from rejected request.", len(paths))
