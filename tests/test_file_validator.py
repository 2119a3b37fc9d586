"""Tests for upload type and size checks."""

from __future__ import annotations

import pytest

from leadsync.models.upload import UploadedFile, ValidationError, XLS_MEDIA_TYPE, XLSX_MEDIA_TYPE
from leadsync.services.file_validator import FileValidator

TEN_MIB = 10 * 1024 * 1024


@pytest.mark.parametrize(
    "name, content_type",
    [
        ("leads.xlsx", XLSX_MEDIA_TYPE),
        ("leads.xls", XLS_MEDIA_TYPE),
        ("LEADS.XLSX", "application/octet-stream"),
        ("export", XLSX_MEDIA_TYPE),
    ],
)
def test_accepts_spreadsheet_by_type_or_extension(name: str, content_type: str) -> None:
    upload = UploadedFile(name=name, size=2048, content_type=content_type)
    assert FileValidator().validate(upload) is None


def test_rejects_unknown_type_and_extension() -> None:
    upload = UploadedFile(name="leads.csv", size=100, content_type="text/csv")
    assert FileValidator().validate(upload) is ValidationError.UNSUPPORTED_TYPE


def test_size_at_ceiling_is_allowed() -> None:
    upload = UploadedFile(name="leads.xlsx", size=TEN_MIB, content_type=XLSX_MEDIA_TYPE)
    assert FileValidator().validate(upload) is None


def test_rejects_oversized_file() -> None:
    upload = UploadedFile(name="leads.xlsx", size=TEN_MIB + 1, content_type=XLSX_MEDIA_TYPE)
    result = FileValidator().validate(upload)
    assert result is ValidationError.TOO_LARGE
    assert result.message == "File size exceeds 10MB limit."


def test_type_is_checked_before_size() -> None:
    upload = UploadedFile(name="huge.pdf", size=TEN_MIB * 3, content_type="application/pdf")
    assert FileValidator().validate(upload) is ValidationError.UNSUPPORTED_TYPE


def test_custom_ceiling() -> None:
    upload = UploadedFile(name="leads.xlsx", size=2_000, content_type=XLSX_MEDIA_TYPE)
    assert FileValidator(max_bytes=1_000).validate(upload) is ValidationError.TOO_LARGE
