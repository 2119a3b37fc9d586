from __future__ import annotations

import sys
from datetime import datetime, timedelta
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from leadsync.errors import DatastoreError
from leadsync.services.field_mapper import DEFAULT_COLUMN_MAPPING

SOURCE_HEADERS = list(DEFAULT_COLUMN_MAPPING)


class FakeLeadStore:
    """In-memory stand-in for LeadStore.

    ``fail_on_insert`` is the 1-based insert call that raises; ``fail_select``
    makes every select raise.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, fail_on_insert: Optional[int] = None,
                 fail_select: bool = False) -> None:
        self.rows: List[Dict[str, Any]] = list(rows or [])
        self.insert_calls: List[List[Dict[str, Any]]] = []
        self.select_calls: List[Dict[str, Any]] = []
        self.fail_on_insert = fail_on_insert
        self.fail_select = fail_select

    def insert(self, table: str, rows: Sequence[Dict[str, Any]]) -> None:
        self.insert_calls.append(list(rows))
        if self.fail_on_insert is not None and len(self.insert_calls) == self.fail_on_insert:
            raise DatastoreError("Supabase error: duplicate key value violates unique constraint")
        base = datetime(2026, 1, 1)
        for row in rows:
            stored = dict(row)
            stored["id"] = str(len(self.rows) + 1)
            stored["created_at"] = (base + timedelta(seconds=len(self.rows))).isoformat()
            self.rows.append(stored)

    def select(self, table: str, order_by: str = "created_at", descending: bool = True) -> List[Dict[str, Any]]:
        self.select_calls.append({"table": table, "order_by": order_by, "descending": descending})
        if self.fail_select:
            raise DatastoreError("Supabase error: connection refused")
        return sorted(self.rows, key=lambda row: row[order_by], reverse=descending)


class RecordingSleeper:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def build_workbook(rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> bytes:
    """Write ``rows`` to an in-memory .xlsx with a header row."""
    frame = pd.DataFrame(rows, columns=columns)
    buffer = BytesIO()
    frame.to_excel(buffer, index=False)
    return buffer.getvalue()


def funding_rows(count: int) -> List[Dict[str, Any]]:
    """Rows shaped like the funding export, one company per row."""
    return [
        {
            "identifier-label": f"Company {i}",
            "component--field-formatter href": f"https://company{i}.example.com",
            "component--field-formatter (4)": "2025-03-14",
            "component--field-formatter (5)": "Series A",
            "component--field-formatter (6)": "$5M",
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def store() -> FakeLeadStore:
    return FakeLeadStore()


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()
