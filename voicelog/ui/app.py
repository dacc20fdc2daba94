"""
VoiceLog Streamlit UI — main entry point.

Run with: ``streamlit run voicelog/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from voicelog.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (voicelog/ui/).
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from voicelog.core.config import get_settings  # noqa: E402
from voicelog.ui.api_client import get_api_client  # noqa: E402
from voicelog.ui.components.history import render_history  # noqa: E402
from voicelog.ui.components.recorder import get_recorder, render_recorder  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="VoiceLog",
    page_icon="\U0001f399\ufe0f",
    layout="centered",
)

if "api_base_url" not in st.session_state:
    st.session_state.api_base_url = get_settings().api_base_url
get_recorder()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399\ufe0f VoiceLog")
    st.caption("Speak, transcribe, keep a log")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Backend API URL",
        value=st.session_state.api_base_url,
        help="URL of the VoiceLog FastAPI backend server",
    )

    _conn_ok, _conn_msg = get_api_client(st.session_state.api_base_url).check_connection()
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
st.header("Transcribe")
render_recorder(st.session_state.api_base_url)
st.divider()
render_history(st.session_state.api_base_url)
