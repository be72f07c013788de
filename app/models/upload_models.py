"""
app/models/upload_models.py

Pydantic DTOs for the upload flow.
The request has no DTO — multipart/form-data is parsed in the controller;
only the field description and the response shapes are defined here.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class UploadField(BaseModel):
    """One named file field accepted by a multi-field endpoint."""

    name: str
    max_count: int = Field(default=1, ge=1)


class StoredFile(BaseModel):
    """
    An accepted file, as persisted to disk.

        {
            "field": "file",
            "original_name": "photo.JPG",
            "stored_name": "0b8c...-1718000000000.JPG",
            "folder": "images",
            "content_type": "image/jpeg",
            "size": 48213,
            "path": "images/0b8c...-1718000000000.JPG"
        }
    """

    field: str
    original_name: str
    stored_name: str
    folder: str
    content_type: str
    size: int
    path: str


class UploadResponse(BaseModel):
    """Successful response for every POST /api/uploads/* route."""

    success: bool = True
    message: str
    files: List[StoredFile]


class UploadErrorResponse(BaseModel):
    """
    Uniform rejection payload (HTTP 400).

        { "success": false, "message": "Unexpected field name", "error": "..." }

    ``error`` is omitted when there is no low-level detail to report.
    """

    success: bool = False
    message: str
    error: Optional[str] = None
