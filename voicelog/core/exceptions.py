"""
VoiceLog exception hierarchy.

All application-specific exceptions inherit from VoiceLogError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class VoiceLogError(Exception):
    """Base exception for all VoiceLog errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICELOG_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class InputRejectedError(VoiceLogError):
    """Raised when an upload is missing, empty, oversized, or not audio."""

    def __init__(self, detail: str = "No audio file uploaded", status_code: int = 400) -> None:
        super().__init__(
            detail=detail,
            code="INPUT_REJECTED",
            status_code=status_code,
        )


class UpstreamError(VoiceLogError):
    """Raised when the speech-to-text provider call fails."""

    def __init__(
        self,
        detail: str = "Transcription service failed",
        status_code: int = 502,
        code: str = "UPSTREAM_ERROR",
    ) -> None:
        super().__init__(detail=detail, code=code, status_code=status_code)


class ExternalServiceError(UpstreamError):
    """The provider answered with an error status.

    Carries the provider's HTTP status and message so they can be
    propagated to the caller unchanged.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.provider_status = status_code
        self.provider_message = message
        super().__init__(
            detail=message,
            status_code=status_code,
            code="EXTERNAL_SERVICE_ERROR",
        )


class PersistenceError(VoiceLogError):
    """Raised when the history store cannot be read or written."""

    def __init__(self, detail: str = "History store unavailable") -> None:
        super().__init__(
            detail=detail,
            code="PERSISTENCE_ERROR",
            status_code=500,
        )
