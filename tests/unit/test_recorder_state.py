"""Tests for the client-side recorder state machine and upload check."""

import pytest

from voicelog.ui.state import (
    InvalidTransitionError,
    RecorderSession,
    RecorderState,
    UploadRejectedError,
    check_upload_type,
)


@pytest.fixture
def session():
    return RecorderSession()


class TestRecordingFlow:
    def test_full_cycle(self, session):
        session.start_recording()
        assert session.state is RecorderState.recording

        session.capture(b"webm-bytes")
        assert session.state is RecorderState.captured
        assert session.audio.content_type == "audio/webm"

        audio = session.begin_transcription()
        assert audio.data == b"webm-bytes"
        assert session.state is RecorderState.transcribing

        session.finish("hello")
        assert session.state is RecorderState.idle
        assert session.transcript == "hello"
        assert session.audio is None

    def test_cannot_transcribe_from_idle(self, session):
        with pytest.raises(InvalidTransitionError):
            session.begin_transcription()

    def test_cannot_capture_without_recording(self, session):
        with pytest.raises(InvalidTransitionError, match="capture audio"):
            session.capture(b"x")

    def test_cannot_start_twice(self, session):
        session.start_recording()
        with pytest.raises(InvalidTransitionError):
            session.start_recording()


class TestFileUpload:
    def test_audio_file_goes_to_captured(self, session):
        assert session.select_file(b"mp3", "song.mp3", "audio/mpeg") is True
        assert session.state is RecorderState.captured
        assert session.audio.filename == "song.mp3"

    def test_text_file_rejected_before_any_request(self, session):
        """A text/plain pick never leaves idle, so nothing can be uploaded."""
        assert session.select_file(b"notes", "notes.txt", "text/plain") is False

        assert session.state is RecorderState.idle
        assert session.audio is None
        assert session.error == "Invalid file type. Please upload audio."
        assert session.error_category == "rejected"
        with pytest.raises(InvalidTransitionError):
            session.begin_transcription()

    def test_good_file_clears_previous_error(self, session):
        session.select_file(b"notes", "notes.txt", "text/plain")
        session.select_file(b"ogg", "a.ogg", "audio/ogg")
        assert session.error is None


class TestErrors:
    def test_failure_returns_to_idle_with_annotation(self, session):
        session.select_file(b"ogg", "a.ogg", "audio/ogg")
        session.begin_transcription()

        session.fail("Cannot connect", "connection")

        assert session.state is RecorderState.idle
        assert session.error == "Cannot connect"
        assert session.error_category == "connection"
        assert session.audio is not None

    def test_retry_rearms_kept_audio(self, session):
        session.select_file(b"ogg", "a.ogg", "audio/ogg")
        session.begin_transcription()
        session.fail("boom", "upstream")

        session.retry()

        assert session.state is RecorderState.captured
        assert session.begin_transcription().data == b"ogg"
        assert session.error is None

    def test_retry_without_audio_raises(self, session):
        with pytest.raises(InvalidTransitionError):
            session.retry()

    def test_reset(self, session):
        session.select_file(b"ogg", "a.ogg", "audio/ogg")
        session.reset()
        assert session.state is RecorderState.idle
        assert session.audio is None


@pytest.mark.parametrize("content_type", ["audio/webm", "audio/wav", "Audio/MP4"])
def test_check_upload_type_accepts_audio(content_type):
    check_upload_type(content_type)


@pytest.mark.parametrize("content_type", ["text/plain", "video/mp4", "", None])
def test_check_upload_type_rejects_other(content_type):
    with pytest.raises(UploadRejectedError):
        check_upload_type(content_type)
