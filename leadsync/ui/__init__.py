"""Streamlit UI components."""

from .sidebar import render_sidebar
from .upload_view import render_upload_view, render_last_run
from .records_view import render_records_view, render_leads_table, render_pagination

__all__ = [
    "render_sidebar",
    "render_upload_view",
    "render_last_run",
    "render_records_view",
    "render_leads_table",
    "render_pagination",
]
