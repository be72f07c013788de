"""
tests/intake/test_policy.py

Unit tests for size parsing and UploadPolicy construction.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from app.core.config import Settings
from app.core.constants import DEFAULT_ALLOWED_EXTENSIONS, EXTENSION_CONTENT_TYPES
from app.intake.policy import (
    UploadPolicy,
    build_type_table,
    parse_allowed_extensions,
    parse_size,
)

TEN_MIB = 10 * 1024 * 1024


def _settings(**overrides) -> Settings:
    values = {"upload_root": Path("unused"), "allowed_file_types": None, "max_file_size": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


# ── parse_size ─────────────────────────────────────────────────────────────────

class TestParseSize:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("25MB", 26_214_400),
            ("512KB", 524_288),
            ("1GB", 1024 ** 3),
            ("100B", 100),
            ("100", 100),
            ("1.5KB", 1536),
            ("5 MB", 5 * 1024 * 1024),
            ("5mb", 5 * 1024 * 1024),
        ],
    )
    def test_valid_sizes(self, raw: str, expected: int) -> None:
        assert parse_size(raw) == expected

    @pytest.mark.parametrize("raw", ["bogus", "10TB", "MB", "-5MB", "", None])
    def test_invalid_or_missing_falls_back_to_default(self, raw) -> None:
        assert parse_size(raw) == TEN_MIB

    def test_returns_int(self) -> None:
        assert isinstance(parse_size("0.5KB"), int)


# ── allow-list parsing ─────────────────────────────────────────────────────────

class TestAllowedExtensions:

    def test_default_when_unset(self) -> None:
        assert parse_allowed_extensions(None) == DEFAULT_ALLOWED_EXTENSIONS

    def test_default_when_blank(self) -> None:
        assert parse_allowed_extensions("  ") == DEFAULT_ALLOWED_EXTENSIONS

    def test_entries_are_trimmed_and_lowercased(self) -> None:
        assert parse_allowed_extensions(" PDF, png ,,jpg") == ("pdf", "png", "jpg")

    def test_table_keeps_unknown_extension_with_no_content_type(self) -> None:
        table = build_type_table(["pdf", "csv"])
        assert table["pdf"] == "application/pdf"
        assert "csv" in table
        assert table["csv"] is None

    def test_table_is_read_only(self) -> None:
        table = build_type_table(["pdf"])
        with pytest.raises(TypeError):
            table["png"] = "image/png"  # type: ignore[index]


# ── UploadPolicy ───────────────────────────────────────────────────────────────

class TestUploadPolicy:

    def test_defaults(self) -> None:
        policy = UploadPolicy()
        assert policy.allowed_extensions == DEFAULT_ALLOWED_EXTENSIONS
        assert policy.max_file_bytes == TEN_MIB
        assert policy.max_file_size_label == "10MB"
        assert policy.max_files == 10

    def test_default_table_matches_known_content_types(self) -> None:
        policy = UploadPolicy()
        for ext in policy.allowed_extensions:
            assert policy.expected_content_type(ext) == EXTENSION_CONTENT_TYPES[ext]

    def test_from_settings_without_overrides(self) -> None:
        policy = UploadPolicy.from_settings(_settings())
        assert policy.allowed_extensions == DEFAULT_ALLOWED_EXTENSIONS
        assert policy.max_file_bytes == TEN_MIB
        assert policy.max_file_size_label == "10MB"

    def test_from_settings_with_overrides(self) -> None:
        policy = UploadPolicy.from_settings(_settings(allowed_file_types="pdf,png", max_file_size="25MB"))
        assert policy.allowed_extensions == ("pdf", "png")
        assert policy.max_file_bytes == 26_214_400
        assert policy.max_file_size_label == "25MB"

    def test_unparseable_size_keeps_raw_label(self) -> None:
        """The cap falls back to 10 MiB but clients still see the configured string."""
        policy = UploadPolicy.from_settings(_settings(max_file_size="lots"))
        assert policy.max_file_bytes == TEN_MIB
        assert policy.max_file_size_label == "lots"

    def test_policy_is_frozen(self) -> None:
        policy = UploadPolicy()
        with pytest.raises(Exception):
            policy.max_files = 99  # type: ignore[misc]

    def test_for_extensions(self) -> None:
        policy = UploadPolicy.for_extensions("pdf", max_file_bytes=10)
        assert policy.allowed_extensions == ("pdf",)
        assert policy.max_file_bytes == 10
