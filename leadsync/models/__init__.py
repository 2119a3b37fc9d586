"""Data models for lead uploads and the records view."""

from .leads import CellValue, RawRow, MappedRecord, PersistedLead
from .upload import UploadedFile, ValidationError, XLSX_MEDIA_TYPE, XLS_MEDIA_TYPE
from .pipeline_state import (
    PipelineStage,
    IngestionOutcome,
    StageData,
    PipelineState,
)

__all__ = [
    "CellValue",
    "RawRow",
    "MappedRecord",
    "PersistedLead",
    "UploadedFile",
    "ValidationError",
    "XLSX_MEDIA_TYPE",
    "XLS_MEDIA_TYPE",
    "PipelineStage",
    "IngestionOutcome",
    "StageData",
    "PipelineState",
]
