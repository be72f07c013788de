"""
app/intake/multipart.py

Multipart parsing with the upload limits applied while the body streams in.

Starlette's MultiPartParser spools every file part to a temporary file
before the application sees it. LimitedMultiPartParser hooks into its
callbacks so that:

  - the (max_files + 1)-th file part raises TooManyFilesError as soon as
    its headers are read;
  - a file part raises FileTooLargeError as soon as its data passes
    max_file_bytes, so at most one chunk beyond the cap is ever spooled.

Both errors escape the parse unchanged; any other parser failure is
wrapped into MultipartParseError.
"""

from __future__ import annotations

from contextlib import aclosing
from typing import AsyncGenerator

from starlette.datastructures import FormData, Headers
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import Request

from app.core.exceptions import FileTooLargeError, MultipartParseError, TooManyFilesError
from app.intake.policy import UploadPolicy

MULTIPART_CONTENT_TYPE = "multipart/form-data"


class LimitedMultiPartParser(MultiPartParser):
    """MultiPartParser that enforces an UploadPolicy during parsing."""

    def __init__(
        self,
        headers: Headers,
        stream: AsyncGenerator[bytes, None],
        policy: UploadPolicy,
    ) -> None:
        # The file cap is ours; Starlette's own one must never fire first.
        super().__init__(headers, stream, max_files=float("inf"))
        self._policy = policy
        self._file_count = 0
        self._file_bytes = 0

    def on_part_begin(self) -> None:
        super().on_part_begin()
        self._file_bytes = 0

    def on_headers_finished(self) -> None:
        super().on_headers_finished()
        part = self._current_part
        if part.file is None:
            return
        self._file_count += 1
        if self._file_count > self._policy.max_files:
            raise TooManyFilesError(
                detail=f"More than {self._policy.max_files} files in request"
            )

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        part = self._current_part
        if part.file is not None:
            self._file_bytes += end - start
            if self._file_bytes > self._policy.max_file_bytes:
                raise FileTooLargeError(
                    detail=f"'{part.file.filename}' exceeds {self._policy.max_file_bytes} bytes"
                )
        super().on_part_data(data, start, end)


async def read_form(request: Request, policy: UploadPolicy) -> FormData:
    """
    Parse the request body into FormData under ``policy``.

    Non-multipart bodies go through Starlette's regular form parsing.

    Raises:
        TooManyFilesError, FileTooLargeError: limits hit while streaming.
        MultipartParseError: the body could not be parsed.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if not content_type.lower().startswith(MULTIPART_CONTENT_TYPE):
            return await request.form()
        async with aclosing(request.stream()) as stream:
            return await LimitedMultiPartParser(request.headers, stream, policy).parse()
    except (TooManyFilesError, FileTooLargeError):
        raise
    except MultiPartException as exc:
        raise MultipartParseError(detail=exc.message) from exc
    except Exception as exc:  # noqa: BLE001
        detail = getattr(exc, "detail", None) or str(exc)
        raise MultipartParseError(detail=str(detail)) from exc
