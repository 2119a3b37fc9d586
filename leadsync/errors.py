"""Exceptions raised by the LeadSync core."""

from typing import Optional


class LeadSyncError(Exception):
    """Base error for the application."""


class ConfigError(LeadSyncError):
    """Required configuration is missing or invalid."""


class ParseError(LeadSyncError):
    """The uploaded spreadsheet could not be turned into rows."""


class EmptyDocument(ParseError):
    """The first sheet has a header but no data rows."""


class MalformedDocument(ParseError):
    """The byte stream is not a readable spreadsheet workbook."""


class MappingError(LeadSyncError):
    """A column mapping table is invalid."""


class DatastoreError(LeadSyncError):
    """The remote datastore rejected an insert or select."""


class IngestionError(LeadSyncError):
    """Base error for batch ingestion."""


class EmptyInput(IngestionError):
    """There are no records to ingest."""


class ChunkInsertFailed(IngestionError):
    """A chunk insert was rejected; remaining chunks were not attempted."""

    def __init__(self, chunk_index: int, cause: Optional[BaseException] = None):
        self.chunk_index = chunk_index
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Chunk {chunk_index + 1} insert failed{detail}")


class NotificationFailed(LeadSyncError):
    """The completion webhook was unreachable or answered with an error."""


class QueryFailed(LeadSyncError):
    """Fetching persisted leads failed."""


class InvalidTransition(LeadSyncError):
    """A pipeline run tried to move to a stage it cannot reach."""
