"""Drives one upload run: validate -> parse -> map -> ingest -> notify."""

from typing import Callable, Optional

from ..errors import EmptyInput, LeadSyncError, NotificationFailed
from ..models.pipeline_state import PipelineStage, PipelineState
from ..models.upload import UploadedFile
from ..utils.log import get_logger
from .base_step import ProgressReporter
from .batch_ingestor import BatchIngestor, DEFAULT_CHUNK_DELAY, DEFAULT_CHUNK_SIZE
from .field_mapper import FieldMapper
from .file_validator import FileValidator
from .notification_dispatcher import NotificationDispatcher
from .spreadsheet_parser import SpreadsheetParser

logger = get_logger("ingestion_pipeline")


class IngestionPipeline(ProgressReporter):
    """
    Runs the upload pipeline as an explicit state machine.

    Every failure from the core is caught here and recorded on the returned
    PipelineState; nothing propagates to the UI. A webhook failure after all
    chunks were stored still ends the run in DONE, with the error recorded.
    """

    def __init__(
        self,
        ingestor: BatchIngestor,
        notifier: NotificationDispatcher,
        validator: Optional[FileValidator] = None,
        parser: Optional[SpreadsheetParser] = None,
        mapper: Optional[FieldMapper] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_delay: float = DEFAULT_CHUNK_DELAY,
        on_progress: Optional[Callable[[str], None]] = None,
    ):
        super().__init__(on_progress=on_progress)
        self.ingestor = ingestor
        self.notifier = notifier
        self.validator = validator or FileValidator()
        self.parser = parser or SpreadsheetParser()
        self.mapper = mapper or FieldMapper()
        self.chunk_size = chunk_size
        self.chunk_delay = chunk_delay

        # Chunk progress goes to the same callback as stage progress
        if self.ingestor.on_progress is None:
            self.ingestor.on_progress = self.report_progress

    def run(self, upload: UploadedFile, webhook_url: str) -> PipelineState:
        """
        Execute the full pipeline for one upload.

        Args:
            upload: File selected by the user
            webhook_url: Endpoint notified once all records are stored

        Returns:
            Terminal PipelineState (DONE or FAILED)
        """
        state = PipelineState(file_name=upload.name, webhook_url=webhook_url)
        logger.info("Starting upload run %s for %s (%d bytes)", state.run_id, upload.name, upload.size)

        try:
            self._run_stages(upload, state)
        except LeadSyncError as e:
            logger.warning("Upload run %s failed in stage '%s': %s", state.run_id, state.stage.value, e)
            state.fail(str(e) or "Failed to submit file. Please try again.")

        logger.info("Upload run %s finished: %s", state.run_id, state.stage.value)
        return state

    def _run_stages(self, upload: UploadedFile, state: PipelineState):
        # Validating
        state.advance(PipelineStage.VALIDATING)
        self.report_progress("Validating file...")
        validation_error = self.validator.validate(upload)
        if validation_error is not None:
            state.fail(validation_error.message)
            return
        state.record_stage_complete("validating", input_count=1, output_count=1)

        # Parsing
        state.advance(PipelineStage.PARSING)
        self.report_progress("Reading spreadsheet...")
        rows = self.parser.parse(upload.data)
        state.rows_parsed = len(rows)
        state.record_stage_complete("parsing", output_count=len(rows))

        # Mapping
        state.advance(PipelineStage.MAPPING)
        self.report_progress(f"Mapping {len(rows)} rows...")
        state.missing_columns = self.mapper.missing_columns(rows[0].keys())
        if state.missing_columns:
            logger.warning("Sheet is missing mapped columns: %s", state.missing_columns)
        records = self.mapper.map_rows(rows)
        state.records_mapped = len(records)
        state.record_stage_complete(
            "mapping",
            input_count=len(rows),
            output_count=len(records),
            details={"missing_columns": state.missing_columns},
        )

        # Ingesting
        state.advance(PipelineStage.INGESTING)
        if not records:
            raise EmptyInput("No records to ingest")
        outcome = self.ingestor.ingest(records, chunk_size=self.chunk_size, inter_chunk_delay=self.chunk_delay)
        state.outcome = outcome
        state.record_stage_complete(
            "ingesting",
            input_count=outcome.attempted,
            output_count=outcome.succeeded,
            details={"chunks_submitted": outcome.chunks_submitted},
        )
        if not outcome.is_success:
            state.fail(
                f"{outcome.error}. {outcome.succeeded} of {len(records)} records were saved "
                f"before the upload stopped ({outcome.attempted} attempted)."
            )
            return

        # Notifying
        state.advance(PipelineStage.NOTIFYING)
        self.report_progress("Notifying webhook...")
        try:
            self.notifier.notify(state.webhook_url, outcome.succeeded)
            state.notification_sent = True
        except NotificationFailed as e:
            # Records are already stored; report and keep going
            state.notification_error = str(e)
            state.add_error(str(e))
        state.record_stage_complete("notifying", input_count=1, output_count=int(state.notification_sent))

        state.advance(PipelineStage.DONE)
        state.message = f"Successfully uploaded {outcome.succeeded} records to database!"
        if state.notification_error:
            state.message += f" Webhook notification failed: {state.notification_error}"
