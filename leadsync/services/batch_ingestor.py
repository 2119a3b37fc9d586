"""Chunked, throttled insertion of mapped records."""

import time
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar

from ..errors import ChunkInsertFailed, ConfigError, DatastoreError, EmptyInput
from ..models.leads import MappedRecord
from ..models.pipeline_state import IngestionOutcome
from ..utils.log import get_logger
from .base_step import ProgressReporter

logger = get_logger("batch_ingestor")

DEFAULT_CHUNK_SIZE = 50
DEFAULT_CHUNK_DELAY = 0.2

T = TypeVar("T")


class SupportsInsert(Protocol):
    def insert(self, table: str, rows: Sequence[dict]) -> None: ...


def chunk(items: Sequence[T], size: int) -> List[Sequence[T]]:
    """Split ``items`` into contiguous slices of at most ``size``, in order."""
    if size < 1:
        raise ValueError("chunk size must be at least 1")
    return [items[i:i + size] for i in range(0, len(items), size)]


class BatchIngestor(ProgressReporter):
    """
    Persists records one chunk at a time.

    Chunks are submitted strictly in order. Chunk k+1 is only sent after
    chunk k succeeded and the inter-chunk delay elapsed. The first failed
    chunk stops the run; nothing is retried.
    """

    def __init__(
        self,
        store: SupportsInsert,
        table: str = "leads",
        sleep: Callable[[float], None] = time.sleep,
        on_progress: Optional[Callable[[str], None]] = None,
    ):
        super().__init__(on_progress=on_progress)
        self.store = store
        self.table = table
        self._sleep = sleep

    def ingest(
        self,
        records: Sequence[MappedRecord],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        inter_chunk_delay: float = DEFAULT_CHUNK_DELAY,
    ) -> IngestionOutcome:
        """
        Insert ``records`` in chunks of ``chunk_size``.

        Args:
            records: Mapped records in upload order
            chunk_size: Maximum records per insert request
            inter_chunk_delay: Seconds to wait after a successful chunk

        Returns:
            IngestionOutcome; on failure ``error``, ``failure`` and ``failed_chunk_index``
            are set and ``succeeded`` counts only the earlier chunks

        Raises:
            EmptyInput: When ``records`` is empty
            ValueError: For a non-positive chunk size or negative delay
        """
        if not records:
            raise EmptyInput("No records to ingest")
        if inter_chunk_delay < 0:
            raise ValueError("inter_chunk_delay must not be negative")

        chunks = chunk(records, chunk_size)
        outcome = IngestionOutcome()
        logger.info(
            "Ingesting %d records into '%s' in %d chunk(s) of %d",
            len(records), self.table, len(chunks), chunk_size,
        )

        for index, batch in enumerate(chunks):
            self.report_progress(f"Uploading chunk {index + 1}/{len(chunks)} ({len(batch)} records)...")
            outcome.chunks_submitted += 1
            outcome.attempted += len(batch)

            try:
                self.store.insert(self.table, [record.to_row() for record in batch])
            except (DatastoreError, ConfigError) as e:
                failure = ChunkInsertFailed(index, e)
                logger.error("%s; %d records persisted before abort", failure, outcome.succeeded)
                outcome.error = str(failure)
                outcome.failure = failure
                outcome.failed_chunk_index = index
                return outcome

            outcome.succeeded += len(batch)
            logger.info("Chunk %d/%d stored (%d total)", index + 1, len(chunks), outcome.succeeded)

            if index < len(chunks) - 1 and inter_chunk_delay:
                self._sleep(inter_chunk_delay)

        return outcome
