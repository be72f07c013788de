"""
tests/intake/test_validator.py

Unit tests for FileTypeValidator and extension extraction.
"""

import pytest

from app.core.exceptions import FileTypeNotAllowedError, UploadErrorKind
from app.intake.policy import UploadPolicy
from app.intake.validator import FileTypeValidator, extract_extension

DEFAULT_MESSAGE = "File type not allowed. Allowed types: jpg, jpeg, png, pdf, doc, docx, xls, xlsx"


@pytest.fixture
def validator() -> FileTypeValidator:
    return FileTypeValidator(UploadPolicy())


class TestExtractExtension:

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("report.pdf", "pdf"),
            ("photo.JPG", "jpg"),
            ("archive.tar.GZ", "gz"),
            ("README", ""),
            (".env", ""),
            ("", ""),
        ],
    )
    def test_extension(self, filename: str, expected: str) -> None:
        assert extract_extension(filename) == expected


class TestFileTypeValidator:

    def test_accepts_matching_pdf(self, validator: FileTypeValidator) -> None:
        validator.validate("report.pdf", "application/pdf")

    def test_accepts_uppercase_extension(self, validator: FileTypeValidator) -> None:
        validator.validate("photo.JPG", "image/jpeg")

    def test_accepts_office_formats(self, validator: FileTypeValidator) -> None:
        validator.validate("plan.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")
        validator.validate("boq.xls", "application/vnd.ms-excel")

    def test_rejects_content_type_mismatch(self, validator: FileTypeValidator) -> None:
        with pytest.raises(FileTypeNotAllowedError) as exc:
            validator.validate("report.pdf", "image/png")
        assert str(exc.value) == DEFAULT_MESSAGE

    def test_rejects_unlisted_extension(self, validator: FileTypeValidator) -> None:
        with pytest.raises(FileTypeNotAllowedError):
            validator.validate("data.csv", "text/csv")

    def test_rejects_missing_extension(self, validator: FileTypeValidator) -> None:
        with pytest.raises(FileTypeNotAllowedError):
            validator.validate("report", "application/pdf")

    def test_content_type_match_is_exact(self, validator: FileTypeValidator) -> None:
        assert not validator.is_allowed("report.pdf", "application/pdf; charset=binary")
        assert not validator.is_allowed("report.pdf", "APPLICATION/PDF")

    def test_correct_type_outside_allow_list_is_rejected(self) -> None:
        validator = FileTypeValidator(UploadPolicy.for_extensions("pdf"))
        with pytest.raises(FileTypeNotAllowedError) as exc:
            validator.validate("site.png", "image/png")
        assert str(exc.value) == "File type not allowed. Allowed types: pdf"

    def test_allowed_extension_without_known_content_type_is_always_rejected(self) -> None:
        validator = FileTypeValidator(UploadPolicy.for_extensions("pdf", "csv"))
        for content_type in ("text/csv", "application/csv", ""):
            assert not validator.is_allowed("data.csv", content_type)
        with pytest.raises(FileTypeNotAllowedError, match="pdf, csv"):
            validator.validate("data.csv", "text/csv")

    def test_error_is_tagged(self, validator: FileTypeValidator) -> None:
        with pytest.raises(FileTypeNotAllowedError) as exc:
            validator.validate("notes.txt", "text/plain")
        assert exc.value.kind is UploadErrorKind.TYPE_NOT_ALLOWED
        assert exc.value.allowed == list(UploadPolicy().allowed_extensions)
        assert exc.value.filename == "notes.txt"
