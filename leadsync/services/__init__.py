"""Upload pipeline and records view services."""

from .file_validator import FileValidator
from .spreadsheet_parser import SpreadsheetParser
from .field_mapper import FieldMapper, DEFAULT_COLUMN_MAPPING
from .lead_store import LeadStore
from .batch_ingestor import BatchIngestor, chunk
from .notification_dispatcher import NotificationDispatcher
from .record_query import RecordQueryView, Page, page_window, clamp_page
from .ingestion_pipeline import IngestionPipeline

__all__ = [
    "FileValidator",
    "SpreadsheetParser",
    "FieldMapper",
    "DEFAULT_COLUMN_MAPPING",
    "LeadStore",
    "BatchIngestor",
    "chunk",
    "NotificationDispatcher",
    "RecordQueryView",
    "Page",
    "page_window",
    "clamp_page",
    "IngestionPipeline",
]
