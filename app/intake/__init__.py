"""app/intake/__init__.py — public API of the intake package."""

from app.intake.classifier import classify_folder
from app.intake.errors import translate_upload_error
from app.intake.multipart import LimitedMultiPartParser, read_form
from app.intake.naming import generate_stored_name
from app.intake.policy import UploadPolicy, parse_size
from app.intake.provisioner import ensure_upload_dirs
from app.intake.validator import FileTypeValidator, extract_extension

__all__ = [
    "UploadPolicy",
    "parse_size",
    "ensure_upload_dirs",
    "classify_folder",
    "generate_stored_name",
    "FileTypeValidator",
    "extract_extension",
    "translate_upload_error",
    "LimitedMultiPartParser",
    "read_form",
]
