"""
app/api/upload_controller.py

Handles incoming requests to POST /api/uploads/*.

This layer is responsible only for HTTP concerns:
  - Parsing the multipart form, with the file-count and per-file byte
    caps applied while the body streams in.
  - Enforcing the submission shape of each endpoint — one file under one
    field, several files under one field, or several named fields.
  - Delegating validation and storage to UploadService.

Three dependency factories describe the shapes and can be reused by any
route:

    upload_single("file")
    upload_array("files", max_count=5)
    upload_fields([UploadField(name="photos", max_count=5), ...])

Responses:
  201  Every file was accepted and stored.  Body lists, per file, the
       stored name, destination folder and size.
  400  The request was rejected — bad type, too large, too many files,
       unexpected field or an unparseable body.  Body is the uniform
       { "success": false, "message": ..., "error"?: ... } payload,
       produced by the UploadError handler in app.main.
"""

from typing import Awaitable, Callable, Dict, List, Sequence

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.core.constants import DEFAULT_ARRAY_MAX_COUNT
from app.core.exceptions import UnexpectedFieldError
from app.core.logger import get_logger
from app.intake.multipart import read_form
from app.models.upload_models import StoredFile, UploadField, UploadResponse
from app.services.upload_service import FilePart, UploadService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["Uploads"])

UploadDependency = Callable[[Request], Awaitable[List[StoredFile]]]


# ── Helpers ────────────────────────────────────────────────────────────────────

def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


def _file_parts(form: FormData) -> List[FilePart]:
    """All (field, file) pairs of the form, in request order; text fields are ignored."""
    return [
        (key, value)
        for key, value in form.multi_items()
        if isinstance(value, StarletteUploadFile)
    ]


def _select_parts(parts: Sequence[FilePart], limits: Dict[str, int]) -> List[FilePart]:
    """Check every part against the expected fields and their per-field caps."""
    seen: Dict[str, int] = {}
    for field, _ in parts:
        if field not in limits:
            raise UnexpectedFieldError(field)
        seen[field] = seen.get(field, 0) + 1
        if seen[field] > limits[field]:
            raise UnexpectedFieldError(field)
    return list(parts)


def _upload_dependency(limits: Dict[str, int]) -> UploadDependency:
    async def dependency(request: Request) -> List[StoredFile]:
        service = get_upload_service(request)
        form = await read_form(request, request.app.state.upload_policy)
        try:
            parts = _file_parts(form)
            selected = _select_parts(parts, limits)
            return await service.store(selected)
        finally:
            await form.close()

    return dependency


# ── Submission shapes ──────────────────────────────────────────────────────────

def upload_single(field: str) -> UploadDependency:
    """At most one file, under ``field``."""
    return _upload_dependency({field: 1})


def upload_array(field: str, max_count: int = DEFAULT_ARRAY_MAX_COUNT) -> UploadDependency:
    """Up to ``max_count`` files, all under ``field``."""
    return _upload_dependency({field: max_count})


def upload_fields(fields: Sequence[UploadField]) -> UploadDependency:
    """Files under several named fields, each with its own cap."""
    return _upload_dependency({f.name: f.max_count for f in fields})


def _ok(files: List[StoredFile]) -> JSONResponse:
    message = f"{len(files)} file(s) uploaded successfully." if files else "No files uploaded."
    body = UploadResponse(message=message, files=files)
    return JSONResponse(status_code=201, content=body.model_dump())


# ── Endpoints ──────────────────────────────────────────────────────────────────

SITE_REPORT_FIELDS = [
    UploadField(name="photos", max_count=5),
    UploadField(name="documents", max_count=5),
]


@router.post("/file", response_model=UploadResponse, status_code=201, summary="Upload one file")
async def upload_file(files: List[StoredFile] = Depends(upload_single("file"))) -> JSONResponse:
    """Accepts a single file under the ``file`` field."""
    return _ok(files)


@router.post("/files", response_model=UploadResponse, status_code=201, summary="Upload several files")
async def upload_files(files: List[StoredFile] = Depends(upload_array("files"))) -> JSONResponse:
    """Accepts up to 5 files under the ``files`` field."""
    return _ok(files)


@router.post(
    "/site-report",
    response_model=UploadResponse,
    status_code=201,
    summary="Upload site report attachments",
)
async def upload_site_report(
    files: List[StoredFile] = Depends(upload_fields(SITE_REPORT_FIELDS)),
) -> JSONResponse:
    """
    Accepts attachments for a daily site report:

      photos     (optional) — up to 5 site photos.
      documents  (optional) — up to 5 supporting documents or spreadsheets.
    """
    logger.info(
        "Site report upload — %d photo(s), %d document(s).",
        sum(1 for f in files if f.field == "photos"),
        sum(1 for f in files if f.field == "documents"),
    )
    return _ok(files)
