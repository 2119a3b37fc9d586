"""LeadSync - Upload funding spreadsheets to Supabase and browse stored leads."""

import streamlit as st

from leadsync.config import Settings, load_settings
from leadsync.errors import LeadSyncError
from leadsync.models.pipeline_state import PipelineState
from leadsync.models.upload import UploadedFile
from leadsync.services import (
    BatchIngestor,
    FieldMapper,
    FileValidator,
    IngestionPipeline,
    LeadStore,
    NotificationDispatcher,
    RecordQueryView,
)
from leadsync.ui.records_view import render_records_view
from leadsync.ui.sidebar import render_sidebar
from leadsync.ui.upload_view import render_upload_view
from leadsync.utils.log import get_logger

logger = get_logger("app")

UPLOAD_VIEW = "📤 File Upload"
TABLE_VIEW = "🗄️ Database Table"


# Page configuration
st.set_page_config(
    page_title="LeadSync",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)


def initialize_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        st.session_state["settings"] = load_settings()
    settings: Settings = st.session_state["settings"]

    defaults = {
        "is_processing": False,
        "processing_status": "",
        "last_run": None,
        "active_view": UPLOAD_VIEW,
        "records_loaded": False,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

    if "lead_store" not in st.session_state:
        st.session_state["lead_store"] = LeadStore.from_settings(settings)
    if "records_view" not in st.session_state:
        st.session_state["records_view"] = RecordQueryView(
            st.session_state["lead_store"],
            table=settings.leads_table,
            page_size=settings.rows_per_page,
        )


def update_progress(message: str):
    """Update processing status in session state."""
    st.session_state["processing_status"] = message


def build_pipeline(settings: Settings, options: dict) -> IngestionPipeline:
    """Wire the upload pipeline from settings and sidebar options."""
    mapper = FieldMapper.from_yaml(settings.column_mapping_path) if settings.column_mapping_path else FieldMapper()
    ingestor = BatchIngestor(st.session_state["lead_store"], table=settings.leads_table)
    return IngestionPipeline(
        ingestor=ingestor,
        notifier=NotificationDispatcher(timeout=settings.webhook_timeout),
        validator=FileValidator(settings.max_upload_bytes),
        mapper=mapper,
        chunk_size=options["chunk_size"],
        chunk_delay=options["chunk_delay"],
        on_progress=update_progress,
    )


def run_upload_pipeline(upload: UploadedFile, webhook_url: str, options: dict) -> PipelineState:
    """Execute one upload run and store its final state for display."""
    st.session_state["is_processing"] = True
    settings: Settings = st.session_state["settings"]

    try:
        pipeline = build_pipeline(settings, options)
    except LeadSyncError as e:
        logger.error("Pipeline setup failed: %s", e)
        state = PipelineState(file_name=upload.name, webhook_url=webhook_url)
        state.fail(str(e))
        st.session_state["is_processing"] = False
        st.session_state["last_run"] = state
        return state

    try:
        with st.spinner("Uploading to Database..."):
            state = pipeline.run(upload, webhook_url)
    finally:
        st.session_state["is_processing"] = False

    st.session_state["last_run"] = state
    if state.succeeded:
        # Table view must re-fetch to show the new rows
        st.session_state["records_loaded"] = False
    return state


def main():
    """Main application entry point."""
    initialize_session_state()
    settings: Settings = st.session_state["settings"]

    st.title("📊 LeadSync")
    st.caption("Sync funding spreadsheets with your leads database")

    options = render_sidebar(settings)

    active_view = st.radio(
        "View",
        options=[UPLOAD_VIEW, TABLE_VIEW],
        horizontal=True,
        label_visibility="collapsed",
        key="view_selector"
    )
    if active_view != st.session_state["active_view"]:
        st.session_state["active_view"] = active_view
        if active_view == TABLE_VIEW:
            st.session_state["records_loaded"] = False

    st.divider()

    if active_view == UPLOAD_VIEW:
        submission = render_upload_view(settings)
        if submission:
            run_upload_pipeline(submission["upload"], submission["webhook_url"], options)
            st.rerun()
    else:
        render_records_view(st.session_state["records_view"])


if __name__ == "__main__":
    main()
