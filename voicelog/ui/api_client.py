"""
Synchronous HTTP client for the VoiceLog backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "rejected", "upstream", "http",
    "network", "unknown". The UI picks its message from the category, so
    a rejected file and a failing transcription service read differently.
    """

    def __init__(
        self, message: str, category: str = "unknown", status_code: int | None = None
    ) -> None:
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(message)


def _categorize(status_code: int, code: str | None) -> str:
    # Server error code takes precedence over the HTTP status.
    if code == "INPUT_REJECTED":
        return "rejected"
    if code in ("UPSTREAM_ERROR", "EXTERNAL_SERVICE_ERROR"):
        return "upstream"
    if code is None and status_code in (400, 413, 415, 422):
        return "rejected"
    return "http"


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 180.0) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the VoiceLog FastAPI backend.
            timeout: Request timeout; transcription waits on the provider.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Cannot connect to the server. "
                "Start it with: `uvicorn voicelog.api.app:app --port 5000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The transcription service may be busy.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            code = None
            try:
                body = exc.response.json()
                detail = body.get("error", exc.response.text)
                code = body.get("code")
            except ValueError:
                detail = exc.response.text or str(exc)
            raise APIError(
                str(detail), category=_categorize(status, code), status_code=status
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transcription --

    def transcribe(
        self,
        audio: bytes,
        filename: str = "recording.webm",
        content_type: str = "audio/webm",
    ) -> str:
        """Upload audio and return the transcript text."""
        files = {"audio": (filename, audio, content_type)}
        return self._request("post", "/api/transcribe", files=files).json()["text"]

    # -- history --

    def history(self, limit: int | None = None) -> list[dict]:
        params = {"limit": limit} if limit is not None else None
        return self._request("get", "/api/history", params=params).json()


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:5000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    """
    return APIClient(base_url=base_url)
