"""Pipeline state tracking models for upload runs."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ChunkInsertFailed, InvalidTransition


class PipelineStage(str, Enum):
    """Stages of a single upload run."""

    IDLE = "idle"
    VALIDATING = "validating"
    PARSING = "parsing"
    MAPPING = "mapping"
    INGESTING = "ingesting"
    NOTIFYING = "notifying"
    DONE = "done"
    FAILED = "failed"


# Forward path; FAILED is reachable from any non-terminal stage.
_NEXT_STAGE: Dict[PipelineStage, PipelineStage] = {
    PipelineStage.IDLE: PipelineStage.VALIDATING,
    PipelineStage.VALIDATING: PipelineStage.PARSING,
    PipelineStage.PARSING: PipelineStage.MAPPING,
    PipelineStage.MAPPING: PipelineStage.INGESTING,
    PipelineStage.INGESTING: PipelineStage.NOTIFYING,
    PipelineStage.NOTIFYING: PipelineStage.DONE,
}

TERMINAL_STAGES = frozenset({PipelineStage.DONE, PipelineStage.FAILED})


class IngestionOutcome(BaseModel):
    """Aggregate result of one batch ingestion."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    attempted: int = Field(0, description="Records in every chunk that was submitted")
    succeeded: int = Field(0, description="Records in chunks the datastore accepted")
    chunks_submitted: int = Field(0, description="Number of insert calls made")
    error: Optional[str] = Field(None, description="First error encountered, if any")
    failed_chunk_index: Optional[int] = Field(None, description="Zero-based index of the failed chunk")
    failure: Optional[ChunkInsertFailed] = Field(
        None, exclude=True, description="Exception for the failed chunk; its cause is the datastore error"
    )

    @property
    def is_success(self) -> bool:
        return self.error is None


class StageData(BaseModel):
    """Data payload for a single pipeline stage."""

    stage_name: str
    timestamp: datetime = Field(default_factory=datetime.now)
    input_count: int = Field(0)
    output_count: int = Field(0)
    duration_seconds: Optional[float] = None
    details: Dict = Field(default_factory=dict)


class PipelineState(BaseModel):
    """Tracks one upload run as an explicit state machine."""

    run_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    stage: PipelineStage = Field(PipelineStage.IDLE)

    file_name: str = Field("", description="Uploaded file name")
    webhook_url: str = Field("", description="Webhook notified on success")

    rows_parsed: int = Field(0)
    records_mapped: int = Field(0)
    missing_columns: List[str] = Field(default_factory=list, description="Mapped headers absent from the sheet")
    outcome: Optional[IngestionOutcome] = None

    notification_sent: bool = Field(False)
    notification_error: Optional[str] = None

    message: str = Field("", description="User-facing summary of the run")

    stage_timestamps: Dict[str, datetime] = Field(default_factory=dict)
    stage_data: List[StageData] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.stage in TERMINAL_STAGES

    @property
    def succeeded(self) -> bool:
        return self.stage == PipelineStage.DONE

    def advance(self, stage: PipelineStage):
        """Move to ``stage``, rejecting anything but the next stage or FAILED."""
        if self.is_terminal:
            raise InvalidTransition(f"Run already finished in stage '{self.stage.value}'")
        if stage != PipelineStage.FAILED and _NEXT_STAGE.get(self.stage) != stage:
            raise InvalidTransition(f"Cannot move from '{self.stage.value}' to '{stage.value}'")

        self.stage = stage
        if stage in TERMINAL_STAGES:
            self.stage_timestamps[stage.value] = datetime.now()
        else:
            self.record_stage_start(stage.value)

    def fail(self, error_message: str):
        """Record an error and move to FAILED."""
        self.add_error(error_message)
        self.message = error_message
        self.advance(PipelineStage.FAILED)

    def record_stage_start(self, stage_name: str):
        """Record when a stage starts."""
        self.stage_timestamps[f"{stage_name}_start"] = datetime.now()

    def record_stage_complete(self, stage_name: str, input_count: int = 0, output_count: int = 0, details: Dict = None):
        """Record when a stage completes with data."""
        end_time = datetime.now()
        self.stage_timestamps[f"{stage_name}_complete"] = end_time

        start_time = self.stage_timestamps.get(f"{stage_name}_start")
        duration = (end_time - start_time).total_seconds() if start_time else None

        self.stage_data.append(StageData(
            stage_name=stage_name,
            timestamp=end_time,
            input_count=input_count,
            output_count=output_count,
            duration_seconds=duration,
            details=details or {}
        ))

    def add_error(self, error_message: str):
        """Record an error."""
        self.errors.append(f"[{datetime.now().strftime('%H:%M:%S')}] {error_message}")
