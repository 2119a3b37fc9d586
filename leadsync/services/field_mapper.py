"""Projects spreadsheet rows onto the MappedRecord shape."""

from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from ..errors import MappingError
from ..models.leads import MappedRecord, RawRow
from ..utils.log import get_logger

logger = get_logger("field_mapper")

# Source column header -> MappedRecord field. Headers are the ones produced by
# the Crunchbase-style funding export the upload form is used with.
DEFAULT_COLUMN_MAPPING: Dict[str, str] = {
    "identifier-label": "company_name",
    "component--field-formatter href": "website_url",
    "component--field-formatter (4)": "funding_date",
    "component--field-formatter (6)": "funding_amount",
    "component--field-formatter (5)": "funding_round",
}

RECORD_FIELDS = tuple(MappedRecord.model_fields)


def cell_to_text(value: Any) -> str:
    """Render a cell value as the string stored in the datastore."""
    if value is None:
        return ""
    if isinstance(value, float):
        if value != value:  # NaN
            return ""
        if value.is_integer():
            return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


class FieldMapper:
    """
    Applies a fixed column-name -> field-name table to raw rows.

    Mapping is total: a column missing from the row maps to an empty string,
    so every MappedRecord carries the full field set.
    """

    def __init__(self, column_mapping: Optional[Mapping[str, str]] = None):
        mapping = dict(column_mapping or DEFAULT_COLUMN_MAPPING)
        unknown = sorted(set(mapping.values()) - set(RECORD_FIELDS))
        if unknown:
            raise MappingError(f"Mapping targets unknown fields: {', '.join(unknown)}")
        self.column_mapping = mapping

    @classmethod
    def from_yaml(cls, path: Path) -> "FieldMapper":
        """
        Load a mapping table from YAML.

        Expected layout::

            columns:
              identifier-label: company_name
              ...

        Raises:
            MappingError: When the file cannot be read, is not valid YAML or
                has no ``columns`` table
        """
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = yaml.safe_load(fh)
        except OSError as e:
            raise MappingError(f"Cannot read column mapping file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise MappingError(f"Invalid YAML in column mapping file {path}: {e}") from e
        if not isinstance(payload, dict) or not isinstance(payload.get("columns"), dict):
            raise MappingError("Invalid mapping YAML structure (expected a 'columns' mapping)")
        logger.info("Loaded column mapping from %s", path)
        return cls({str(k): str(v) for k, v in payload["columns"].items()})

    def map_row(self, row: RawRow) -> MappedRecord:
        values = {field: "" for field in RECORD_FIELDS}
        for header, field in self.column_mapping.items():
            values[field] = cell_to_text(row.get(header))
        return MappedRecord(**values)

    def map_rows(self, rows: Iterable[RawRow]) -> List[MappedRecord]:
        """Map every row, preserving order."""
        return [self.map_row(row) for row in rows]

    def missing_columns(self, headers: Iterable[str]) -> List[str]:
        """Mapped source headers that do not appear in ``headers``."""
        present = set(headers)
        return [header for header in self.column_mapping if header not in present]
