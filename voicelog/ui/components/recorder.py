"""
Recorder component — microphone capture and file upload.

Drives the ``RecorderSession`` state machine stored in
``st.session_state.recorder``: idle -> recording -> captured ->
transcribing -> idle.
"""

import logging

import streamlit as st

from voicelog.ui.api_client import APIError, get_api_client
from voicelog.ui.state import RecorderSession, RecorderState

logger = logging.getLogger(__name__)

_ERROR_MESSAGES = {
    "connection": "Cannot connect to the server. Is the backend running?",
    "timeout": "The server took too long to respond. Please try again.",
    "upstream": "The transcription service failed to process this audio.",
}


def get_recorder() -> RecorderSession:
    """Return the per-browser-session recorder, creating it on first use."""
    if "recorder" not in st.session_state:
        st.session_state.recorder = RecorderSession()
    return st.session_state.recorder


def error_message(session: RecorderSession) -> str | None:
    """Map the session's error annotation to the text shown to the user."""
    if session.error is None:
        return None
    if session.error_category == "rejected":
        return session.error
    return _ERROR_MESSAGES.get(session.error_category or "", f"Processing failed: {session.error}")


def run_transcription(session: RecorderSession, base_url: str) -> None:
    """Upload the captured audio and record the outcome on *session*."""
    audio = session.begin_transcription()
    try:
        text = get_api_client(base_url).transcribe(
            audio.data, filename=audio.filename, content_type=audio.content_type
        )
    except APIError as exc:
        logger.warning("Transcription request failed (%s): %s", exc.category, exc.message)
        session.fail(exc.message, exc.category)
        return
    session.finish(text)
    st.session_state.history_stale = True


def take_mic_clip(session: RecorderSession, clip) -> bool:
    """Capture a newly recorded clip if the recorder is idle.

    Every new clip is marked as seen. A clip that arrives while other audio
    is captured or uploading is dropped rather than picked up on a later rerun.
    """
    if clip is None or st.session_state.get("_last_clip_id") == clip.file_id:
        return False
    st.session_state["_last_clip_id"] = clip.file_id
    if session.state is not RecorderState.idle:
        return False
    session.start_recording()
    session.capture(
        clip.getvalue(), filename="recording.wav", content_type=clip.type or "audio/wav"
    )
    return True


def take_uploaded_file(session: RecorderSession, picked) -> bool:
    """Offer a newly picked file to the session; returns True if accepted."""
    if picked is None or st.session_state.get("_last_file_id") == picked.file_id:
        return False
    st.session_state["_last_file_id"] = picked.file_id
    if session.state not in (RecorderState.idle, RecorderState.captured):
        return False
    return session.select_file(picked.getvalue(), picked.name, picked.type)


def render_recorder(base_url: str) -> None:
    """Render capture controls, the transcribe button, and the transcript."""
    session = get_recorder()

    col_mic, col_file = st.columns(2)
    with col_mic:
        take_mic_clip(session, st.audio_input("Record from microphone", key="mic_clip"))

    with col_file:
        take_uploaded_file(session, st.file_uploader("Or upload an audio file", key="file_pick"))

    message = error_message(session)
    if message:
        st.error(message)

    if session.audio is not None:
        st.audio(session.audio.data, format=session.audio.content_type or "audio/webm")

    if session.state is RecorderState.idle and session.audio is not None and session.error:
        if st.button("Retry", use_container_width=True):
            session.retry()
            st.rerun()

    if st.button(
        "Transcribe",
        type="primary",
        use_container_width=True,
        disabled=session.state is not RecorderState.captured,
    ):
        with st.spinner("Transcribing..."):
            run_transcription(session, base_url)
        st.rerun()

    if session.transcript:
        st.subheader("Transcript")
        st.write(session.transcript)
