"""Tests for workbook decoding."""

from __future__ import annotations

from io import BytesIO

import pandas as pd
import pytest

from leadsync.errors import EmptyDocument, MalformedDocument
from leadsync.services.field_mapper import FieldMapper
from leadsync.services.spreadsheet_parser import SpreadsheetParser
from tests.conftest import build_workbook, funding_rows


def test_parse_returns_rows_keyed_by_header_in_order() -> None:
    data = build_workbook(funding_rows(3))

    rows = SpreadsheetParser().parse(data)

    assert len(rows) == 3
    assert [row["identifier-label"] for row in rows] == ["Company 1", "Company 2", "Company 3"]
    assert rows[0]["component--field-formatter (5)"] == "Series A"


def test_blank_cells_become_empty_strings() -> None:
    data = build_workbook(
        [
            {
                "identifier-label": "Acme",
                "component--field-formatter href": "https://acme.example.com",
                "component--field-formatter (6)": 1500000,
            },
            {
                "identifier-label": None,
                "component--field-formatter href": "https://blank.example.com",
                "component--field-formatter (6)": None,
            },
        ]
    )

    rows = SpreadsheetParser().parse(data)

    assert rows[1]["identifier-label"] == ""
    assert rows[1]["component--field-formatter (6)"] == ""
    # NaN upcasting must not turn whole numbers into floats
    assert rows[0]["component--field-formatter (6)"] == 1500000
    assert isinstance(rows[0]["component--field-formatter (6)"], int)


@pytest.mark.parametrize("text", ["NA", "N/A", "null", "None", "nan", "NULL", "#N/A"])
def test_missing_value_lookalikes_are_kept_as_text(text: str) -> None:
    data = build_workbook(
        [
            {
                "identifier-label": text,
                "component--field-formatter href": "https://na.example.com",
                "component--field-formatter (5)": text,
            }
        ]
    )

    record = FieldMapper().map_row(SpreadsheetParser().parse(data)[0])

    assert record.company_name == text
    assert record.funding_round == text
    assert record.website_url == "https://na.example.com"


def test_only_first_sheet_is_read() -> None:
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame([{"identifier-label": "First"}]).to_excel(writer, sheet_name="One", index=False)
        pd.DataFrame([{"identifier-label": "Second"}] * 4).to_excel(writer, sheet_name="Two", index=False)

    rows = SpreadsheetParser().parse(buffer.getvalue())

    assert rows == [{"identifier-label": "First"}]


def test_header_only_sheet_is_empty_document() -> None:
    data = build_workbook([], columns=["identifier-label", "component--field-formatter href"])

    with pytest.raises(EmptyDocument):
        SpreadsheetParser().parse(data)


def test_garbage_bytes_are_malformed() -> None:
    with pytest.raises(MalformedDocument):
        SpreadsheetParser().parse(b"this is not a workbook at all")


def test_empty_bytes_are_malformed() -> None:
    with pytest.raises(MalformedDocument):
        SpreadsheetParser().parse(b"")
