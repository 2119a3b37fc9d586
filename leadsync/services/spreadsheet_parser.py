"""Decodes uploaded workbook bytes into loosely typed rows."""

from io import BytesIO
from typing import Any, List

import numpy as np
import pandas as pd

from ..errors import EmptyDocument, MalformedDocument
from ..models.leads import CellValue, RawRow
from ..utils.log import get_logger

logger = get_logger("spreadsheet_parser")


def _clean_cell(value: Any) -> CellValue:
    """Normalize a pandas cell: blanks become "", numpy scalars become Python values."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if pd.isna(value):
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    # Blank cells upcast whole int columns to float
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class SpreadsheetParser:
    """Reads the first sheet of a workbook, using its first row as headers."""

    def parse(self, data: bytes) -> List[RawRow]:
        """
        Decode workbook bytes into rows keyed by header.

        Args:
            data: Raw .xlsx / .xls content

        Returns:
            One RawRow per data row, in sheet order

        Raises:
            MalformedDocument: When the bytes are not a readable workbook
            EmptyDocument: When the first sheet has no data rows
        """
        if not data:
            raise MalformedDocument("Uploaded file is empty")

        try:
            # Only empty cells are missing; text such as "NA" or "null" is data
            df = pd.read_excel(BytesIO(data), sheet_name=0, keep_default_na=False, na_values=[""])
        except Exception as exc:  # noqa: BLE001 - engines raise many unrelated types
            logger.warning("Failed to read workbook: %s", exc)
            raise MalformedDocument(f"Could not read Excel file: {exc}") from exc

        if df.empty:
            raise EmptyDocument("Excel file is empty")

        df.columns = [str(column).strip() for column in df.columns]
        records = df.astype(object).to_dict(orient="records")
        rows = [{header: _clean_cell(value) for header, value in record.items()} for record in records]

        logger.info("Parsed workbook: %d rows, columns=%s", len(rows), list(df.columns))
        return rows
