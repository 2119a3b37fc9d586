"""Tests for column-to-field mapping."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from leadsync.errors import MappingError
from leadsync.models.leads import MappedRecord
from leadsync.services.field_mapper import FieldMapper, cell_to_text
from tests.conftest import funding_rows


def test_maps_known_columns() -> None:
    record = FieldMapper().map_row(funding_rows(1)[0])

    assert record == MappedRecord(
        company_name="Company 1",
        website_url="https://company1.example.com",
        funding_date="2025-03-14",
        funding_amount="$5M",
        funding_round="Series A",
    )


@pytest.mark.parametrize(
    "row",
    [
        {},
        {"identifier-label": "Only Name"},
        {"unrelated": "value", "component--field-formatter (5)": ""},
    ],
)
def test_missing_columns_map_to_empty_strings(row: dict) -> None:
    record = FieldMapper().map_row(row)
    dumped = record.to_row()

    assert set(dumped) == set(MappedRecord.model_fields)
    assert all(isinstance(value, str) for value in dumped.values())
    assert dumped["funding_round"] == ""


def test_map_rows_preserves_order() -> None:
    records = FieldMapper().map_rows(funding_rows(5))
    assert [r.company_name for r in records] == [f"Company {i}" for i in range(1, 6)]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("", ""),
        (float("nan"), ""),
        (2500000, "2500000"),
        (2500000.0, "2500000"),
        (1.5, "1.5"),
        ("  Seed  ", "Seed"),
        (datetime(2024, 5, 1), "2024-05-01"),
        (datetime(2024, 5, 1, 9, 30), "2024-05-01T09:30:00"),
    ],
)
def test_cell_to_text(value, expected: str) -> None:
    assert cell_to_text(value) == expected


def test_mapped_record_is_immutable() -> None:
    record = FieldMapper().map_row({"identifier-label": "Acme"})
    with pytest.raises(ValidationError):
        record.company_name = "Other"


def test_missing_columns_reports_schema_drift() -> None:
    mapper = FieldMapper()
    missing = mapper.missing_columns(["identifier-label", "component--field-formatter href"])
    assert missing == [
        "component--field-formatter (4)",
        "component--field-formatter (6)",
        "component--field-formatter (5)",
    ]


def test_custom_mapping_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yaml"
    path.write_text(
        "columns:\n"
        "  Organization Name: company_name\n"
        "  Funding Type: funding_round\n",
        encoding="utf-8",
    )

    record = FieldMapper.from_yaml(path).map_row({"Organization Name": "Acme", "Funding Type": "Seed"})

    assert record.company_name == "Acme"
    assert record.funding_round == "Seed"
    assert record.website_url == ""


def test_yaml_without_columns_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(MappingError):
        FieldMapper.from_yaml(path)


def test_missing_mapping_file_is_a_mapping_error(tmp_path: Path) -> None:
    with pytest.raises(MappingError, match="Cannot read column mapping file"):
        FieldMapper.from_yaml(tmp_path / "nope.yaml")


def test_invalid_mapping_yaml_is_a_mapping_error(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yaml"
    path.write_text("columns: {identifier-label: [company_name\n", encoding="utf-8")
    with pytest.raises(MappingError, match="Invalid YAML"):
        FieldMapper.from_yaml(path)


def test_unknown_target_field_is_rejected() -> None:
    with pytest.raises(MappingError):
        FieldMapper({"Name": "company"})
