"""History list — previously saved transcripts, newest first."""

from datetime import datetime

import streamlit as st

from voicelog.ui.api_client import APIError, get_api_client


def format_timestamp(value: str) -> str:
    """Render an ISO timestamp from the API as ``YYYY-MM-DD HH:MM``."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
    except (ValueError, AttributeError):
        return str(value)


def render_history(base_url: str) -> None:
    """Fetch and render the transcript history.

    Re-fetches only when ``history_stale`` is set (after a transcription)
    or nothing has been loaded yet.
    """
    session = st.session_state.recorder
    if st.session_state.get("history_stale", True):
        try:
            session.history = get_api_client(base_url).history()
        except APIError as exc:
            st.warning(f"Could not load history: {exc.message}")
            return
        st.session_state.history_stale = False

    st.subheader("History")
    if st.button("Refresh", key="history_refresh"):
        st.session_state.history_stale = True
        st.rerun()

    if not session.history:
        st.caption("No transcripts yet.")
        return

    for item in session.history:
        with st.container(border=True):
            st.caption(format_timestamp(item.get("createdAt", "")))
            st.write(item.get("text") or "_(silence)_")
