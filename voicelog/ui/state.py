"""
Recorder state machine for the Streamlit client.

States: idle -> recording -> captured -> transcribing -> idle

A file upload skips ``recording`` and goes straight from idle to
captured. Errors do not have a state of their own: a failed step returns
the machine to idle and leaves a message in ``error`` for the UI to show.
"""

from dataclasses import dataclass, field
from enum import StrEnum

# Mirrors the browser's ``accept="audio/*"`` file picker.
AUDIO_MIME_PREFIX = "audio/"


class RecorderState(StrEnum):
    """Possible states of the recorder widget."""

    idle = "idle"
    recording = "recording"
    captured = "captured"
    transcribing = "transcribing"


class InvalidTransitionError(RuntimeError):
    """Raised when an action is not allowed in the current state."""

    def __init__(self, action: str, state: RecorderState) -> None:
        super().__init__(f"Cannot {action} while {state.value}")
        self.action = action
        self.state = state


class UploadRejectedError(ValueError):
    """Raised by the client-side file check before any request is sent."""


def check_upload_type(content_type: str | None) -> None:
    """Reject files whose MIME type is not ``audio/*``.

    Raises:
        UploadRejectedError: For any non-audio type, including a missing one.
    """
    if not content_type or not content_type.lower().startswith(AUDIO_MIME_PREFIX):
        raise UploadRejectedError("Invalid file type. Please upload audio.")


@dataclass
class CapturedAudio:
    """Audio held by the client between capture and upload."""

    data: bytes
    filename: str
    content_type: str


@dataclass
class RecorderSession:
    """Client-side recorder state plus the data each state owns."""

    state: RecorderState = RecorderState.idle
    audio: CapturedAudio | None = None
    transcript: str = ""
    error: str | None = None
    error_category: str | None = None
    history: list[dict] = field(default_factory=list)

    def _require(self, action: str, *allowed: RecorderState) -> None:
        if self.state not in allowed:
            raise InvalidTransitionError(action, self.state)

    def clear_error(self) -> None:
        self.error = None
        self.error_category = None

    def start_recording(self) -> None:
        self._require("start recording", RecorderState.idle)
        self.clear_error()
        self.audio = None
        self.state = RecorderState.recording

    def capture(
        self, data: bytes, filename: str = "recording.webm", content_type: str = "audio/webm"
    ) -> None:
        """Store microphone audio once recording stops."""
        self._require("capture audio", RecorderState.recording)
        self.audio = CapturedAudio(data=data, filename=filename, content_type=content_type)
        self.state = RecorderState.captured

    def select_file(self, data: bytes, filename: str, content_type: str | None) -> bool:
        """Accept a picked file if it is audio.

        Returns:
            True when the file was accepted. A rejected file leaves the
            machine idle with ``error`` set and nothing sent to the server.
        """
        self._require("select a file", RecorderState.idle, RecorderState.captured)
        self.clear_error()
        try:
            check_upload_type(content_type)
        except UploadRejectedError as exc:
            self.audio = None
            self.state = RecorderState.idle
            self.error = str(exc)
            self.error_category = "rejected"
            return False
        self.audio = CapturedAudio(data=data, filename=filename, content_type=content_type or "")
        self.state = RecorderState.captured
        return True

    def begin_transcription(self) -> CapturedAudio:
        """Move to ``transcribing`` and hand back the audio to upload."""
        self._require("transcribe", RecorderState.captured)
        if self.audio is None:
            raise InvalidTransitionError("transcribe without audio", self.state)
        self.clear_error()
        self.state = RecorderState.transcribing
        return self.audio

    def finish(self, text: str) -> None:
        self._require("finish transcription", RecorderState.transcribing)
        self.transcript = text
        self.audio = None
        self.state = RecorderState.idle

    def fail(self, message: str, category: str = "unknown") -> None:
        """Return to idle after a failed upload, keeping the captured audio."""
        self._require("fail transcription", RecorderState.transcribing)
        self.error = message
        self.error_category = category
        self.state = RecorderState.idle

    def retry(self) -> None:
        """Re-arm the audio kept from a failed upload."""
        self._require("retry", RecorderState.idle)
        if self.audio is None:
            raise InvalidTransitionError("retry without audio", self.state)
        self.state = RecorderState.captured

    def reset(self) -> None:
        self.state = RecorderState.idle
        self.audio = None
        self.clear_error()
