"""Tests for the headless upload script."""

from __future__ import annotations

from pathlib import Path

import pytest

import upload_leads
from leadsync.config import Settings
from tests.conftest import build_workbook, funding_rows


def test_missing_file_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = upload_leads.main([str(tmp_path / "nope.xlsx")])

    assert code == 1
    assert "File not found" in capsys.readouterr().out


def test_arguments_are_parsed() -> None:
    args = upload_leads.parse_args(["leads.xlsx", "--webhook", "https://hook", "--chunk-size", "10", "--delay", "0"])

    assert args.path == Path("leads.xlsx")
    assert args.webhook == "https://hook"
    assert args.chunk_size == 10
    assert args.delay == 0.0


def test_bad_mapping_file_exits_with_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    workbook = tmp_path / "leads.xlsx"
    workbook.write_bytes(build_workbook(funding_rows(2)))
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        column_mapping_path=tmp_path / "nope.yaml",
    )
    monkeypatch.setattr(upload_leads, "load_settings", lambda: settings)

    code = upload_leads.main([str(workbook)])

    assert code == 1
    assert "Column mapping error" in capsys.readouterr().out
