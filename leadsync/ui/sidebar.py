"""Sidebar component for system configuration."""

import streamlit as st

from ..config import Settings


def render_sidebar(settings: Settings) -> dict:
    """
    Render the sidebar with connection status and upload options.

    Args:
        settings: Loaded application settings

    Returns:
        dict with the values chosen in the sidebar
    """
    with st.sidebar:
        st.header("System Config")

        st.subheader("Datastore")
        missing = settings.missing_datastore_keys()
        if missing:
            st.error(f"Supabase API keys missing: {', '.join(missing)}. Check your .env file.")
        else:
            st.success(f"Connected to Supabase (table: `{settings.leads_table}`)")

        st.divider()

        st.subheader("Upload Options")

        chunk_size = st.number_input(
            "Chunk Size",
            min_value=1,
            max_value=1000,
            value=st.session_state.get("chunk_size", settings.chunk_size),
            step=10,
            key="chunk_size_input",
            help="Records sent per insert request"
        )
        st.session_state["chunk_size"] = int(chunk_size)

        chunk_delay = st.number_input(
            "Delay Between Chunks (seconds)",
            min_value=0.0,
            max_value=10.0,
            value=float(st.session_state.get("chunk_delay", settings.chunk_delay)),
            step=0.1,
            key="chunk_delay_input",
            help="Pause after each stored chunk to avoid rate limits"
        )
        st.session_state["chunk_delay"] = float(chunk_delay)

        st.divider()

        # Reset button
        if st.button("Clear Session State", type="secondary", use_container_width=True):
            for key in list(st.session_state.keys()):
                del st.session_state[key]
            st.rerun()

        return {
            "chunk_size": int(chunk_size),
            "chunk_delay": float(chunk_delay),
        }
