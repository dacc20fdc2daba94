"""Unit tests for the Streamlit-side APIClient.

Validates request construction for transcribe/history and the mapping of
transport and HTTP failures onto ``APIError`` categories.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from voicelog.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("voicelog.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:5000")
        api._mock_http = mock_http  # expose for assertions
        yield api


def _status_error(status: int, body: dict) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "http://test:5000/api/transcribe")
    response = httpx.Response(status, request=request, json=body)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestTranscribe:
    def test_posts_multipart_audio_field(self, client):
        resp = MagicMock()
        resp.json.return_value = {"text": "hello"}
        client._mock_http.post.return_value = resp

        text = client.transcribe(b"bytes", filename="clip.webm", content_type="audio/webm")

        client._mock_http.post.assert_called_once_with(
            "/api/transcribe",
            files={"audio": ("clip.webm", b"bytes", "audio/webm")},
        )
        resp.raise_for_status.assert_called_once()
        assert text == "hello"

    def test_rejected_upload_category(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(
            400, {"error": "No audio file uploaded", "code": "INPUT_REJECTED"}
        )
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe(b"x")

        assert exc_info.value.category == "rejected"
        assert exc_info.value.message == "No audio file uploaded"
        assert exc_info.value.status_code == 400

    def test_upstream_failure_category(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(
            429, {"error": "Rate limit reached", "code": "EXTERNAL_SERVICE_ERROR"}
        )
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe(b"x")

        assert exc_info.value.category == "upstream"
        assert exc_info.value.status_code == 429

    def test_provider_400_is_upstream_not_rejected(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(
            400, {"error": "file is not a valid media file", "code": "EXTERNAL_SERVICE_ERROR"}
        )
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe(b"x")

        assert exc_info.value.category == "upstream"
        assert exc_info.value.status_code == 400

    def test_status_used_when_body_has_no_code(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(413, {"detail": "too big"})
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe(b"x")

        assert exc_info.value.category == "rejected"

    def test_connection_error(self, client):
        client._mock_http.post.side_effect = httpx.ConnectError("refused")
        with pytest.raises(APIError) as exc_info:
            client.transcribe(b"x")
        assert exc_info.value.category == "connection"

    def test_timeout(self, client):
        client._mock_http.post.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(APIError) as exc_info:
            client.transcribe(b"x")
        assert exc_info.value.category == "timeout"


class TestHistory:
    def test_without_limit(self, client):
        resp = MagicMock()
        resp.json.return_value = [{"id": 1, "text": "a", "createdAt": "2026-01-01T00:00:00Z"}]
        client._mock_http.get.return_value = resp

        items = client.history()

        client._mock_http.get.assert_called_once_with("/api/history", params=None)
        assert items[0]["text"] == "a"

    def test_with_limit(self, client):
        resp = MagicMock()
        resp.json.return_value = []
        client._mock_http.get.return_value = resp

        client.history(limit=10)

        client._mock_http.get.assert_called_once_with("/api/history", params={"limit": 10})

    def test_server_error_category(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(
            500, {"error": "History store unavailable", "code": "PERSISTENCE_ERROR"}
        )
        client._mock_http.get.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.history()
        assert exc_info.value.category == "http"


class TestCheckConnection:
    def test_ok(self, client):
        resp = MagicMock()
        resp.json.return_value = {"status": "ok"}
        client._mock_http.get.return_value = resp
        assert client.check_connection() == (True, "Connected")

    def test_down(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        ok, message = client.check_connection()
        assert ok is False
        assert "Cannot connect" in message
