"""Database Table tab - searchable, paginated view of stored leads."""

from typing import List

import pandas as pd
import streamlit as st

from ..errors import QueryFailed
from ..models.leads import PersistedLead
from ..services.record_query import RecordQueryView, page_window


def render_records_view(view: RecordQueryView):
    """Render the records table with search, refresh and pagination."""
    col1, col2 = st.columns([4, 1])
    with col1:
        st.header("Database Records")
    with col2:
        refresh_clicked = st.button("🔄 Refresh", key="records_refresh", use_container_width=True)

    # Fetch on first display and on refresh; nothing is cached between fetches
    if refresh_clicked or not st.session_state.get("records_loaded", False):
        with st.spinner("Loading records..."):
            try:
                view.load()
                st.session_state["records_loaded"] = True
                st.session_state.pop("records_error", None)
            except QueryFailed as e:
                st.session_state["records_loaded"] = False
                st.session_state["records_error"] = str(e)

    error = st.session_state.get("records_error")
    if error:
        st.error(error)
        if st.button("Try Again", key="records_retry"):
            st.session_state.pop("records_error", None)
            st.rerun()
        return

    search_term = st.text_input(
        "Search records",
        value=view.search_term,
        placeholder="Search records...",
        key="records_search"
    )
    if search_term != view.search_term:
        view.search(search_term)

    page = view.page()
    render_leads_table(list(page.items))

    if page.total_pages > 1:
        render_pagination(view, page.total_pages)
        st.caption(f"Showing {page.first_index} to {page.last_index} of {page.total_items} records")

    st.caption("☁️ Connected to Supabase")


def render_leads_table(leads: List[PersistedLead]):
    """Render one page of leads."""
    if not leads:
        st.info("No records found")
        return

    df = pd.DataFrame([
        {
            "Company Name": lead.company_name,
            "Company Linkedin": lead.linkedin_url,
            "Website": lead.website_url,
            "Funding Round": lead.funding_round,
            "Funding Date": lead.funding_date,
            "Funding Amount": lead.funding_amount,
            "Score": lead.score,
            "Score Ranking": lead.score_detail,
            "Decision Maker Linkedin": lead.decision_maker_linkedin,
            "Decision Maker Email": lead.decision_maker_email,
        }
        for lead in leads
    ])

    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Company Name": st.column_config.TextColumn("Company Name", width="medium"),
            "Company Linkedin": st.column_config.LinkColumn("Company Linkedin"),
            "Website": st.column_config.LinkColumn("Website"),
            "Score": st.column_config.NumberColumn("Score", width="small"),
            "Decision Maker Linkedin": st.column_config.LinkColumn("Decision Maker Linkedin"),
        }
    )


def render_pagination(view: RecordQueryView, total_pages: int):
    """Previous / numbered / next buttons around the current page."""
    numbers = page_window(view.current_page, total_pages)
    cols = st.columns(len(numbers) + 2)

    with cols[0]:
        if st.button("◀", key="page_prev", disabled=view.current_page == 1):
            view.go_to(view.current_page - 1)
            st.rerun()

    for col, number in zip(cols[1:-1], numbers):
        with col:
            if st.button(
                str(number),
                key=f"page_{number}",
                type="primary" if number == view.current_page else "secondary"
            ):
                view.go_to(number)
                st.rerun()

    with cols[-1]:
        if st.button("▶", key="page_next", disabled=view.current_page == total_pages):
            view.go_to(view.current_page + 1)
            st.rerun()
