"""File Upload tab - select a spreadsheet and sync it to the database."""

from typing import Optional

import streamlit as st

from ..config import Settings
from ..models.pipeline_state import PipelineState
from ..models.upload import UploadedFile
from ..services.file_validator import FileValidator
from ..utils.formatting import format_file_size


def render_upload_view(settings: Settings) -> Optional[dict]:
    """
    Render the upload form.

    Args:
        settings: Loaded application settings (webhook default, size ceiling)

    Returns:
        dict with the selected file and webhook URL when the user submits,
        otherwise None
    """
    st.header("Excel Upload to Supabase")
    st.caption("Upload your Excel file to sync data with database")

    uploaded = st.file_uploader(
        "Upload Excel File",
        type=["xlsx", "xls"],
        key="upload_file_input",
        help="Supports: .xlsx, .xls (Max 10MB)"
    )

    upload: Optional[UploadedFile] = None
    if uploaded is not None:
        candidate = UploadedFile.from_streamlit(uploaded)
        validation_error = FileValidator(settings.max_upload_bytes).validate(candidate)
        if validation_error:
            st.error(validation_error.message)
        else:
            upload = candidate
            st.success(f"📄 {upload.name} ({format_file_size(upload.size)})")

    webhook_url = st.text_input(
        "Webhook URL",
        value=st.session_state.get("webhook_url", settings.webhook_url),
        key="webhook_url_input",
        help="Notified once all records are stored"
    )
    st.session_state["webhook_url"] = webhook_url

    is_processing = st.session_state.get("is_processing", False)
    submit_clicked = st.button(
        "Upload to Supabase",
        type="primary",
        use_container_width=True,
        disabled=is_processing,
        key="upload_submit_button"
    )

    render_last_run(st.session_state.get("last_run"))

    if not submit_clicked:
        return None

    if upload is None:
        st.error("Please select an Excel file to upload")
        return None

    return {"upload": upload, "webhook_url": webhook_url}


def render_last_run(state: Optional[PipelineState]):
    """Show the outcome of the most recent upload run."""
    if state is None:
        return

    if state.succeeded:
        if state.notification_error:
            st.warning(state.message)
        else:
            st.success(state.message)
    else:
        st.error(state.message or "Failed to submit file. Please try again.")

    if state.missing_columns:
        st.warning(
            "These columns were not found and were saved as empty: "
            + ", ".join(state.missing_columns)
        )

    with st.expander("Run Details", expanded=False):
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Rows Parsed", state.rows_parsed)
        with col2:
            st.metric("Records Stored", state.outcome.succeeded if state.outcome else 0)
        with col3:
            st.metric("Chunks Sent", state.outcome.chunks_submitted if state.outcome else 0)

        for stage in state.stage_data:
            duration = f"{stage.duration_seconds:.2f}s" if stage.duration_seconds is not None else "-"
            st.caption(f"{stage.stage_name}: {stage.input_count} → {stage.output_count} ({duration})")

        for error in state.errors:
            st.caption(error)
