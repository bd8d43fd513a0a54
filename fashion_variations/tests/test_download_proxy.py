"""
Tests for the image download proxy.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from fashion_variations.api.downloads.service import fetch_remote_image
from fashion_variations.exceptions import DownloadError

SESSION_PATH = "fashion_variations.api.downloads.service.aiohttp.ClientSession"


def mock_session_for(status, body=b"", headers=None):
    """Returns a patched ClientSession class whose GET yields the given response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.headers = headers or {}
    mock_response.read = AsyncMock(return_value=body)

    mock_session = MagicMock()
    mock_session.get.return_value.__aenter__ = AsyncMock(return_value=mock_response)
    mock_session.get.return_value.__aexit__ = AsyncMock(return_value=None)

    mock_client = MagicMock()
    mock_client.return_value.__aenter__ = AsyncMock(return_value=mock_session)
    mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
    return mock_client, mock_session


class TestFetchRemoteImage:

    @pytest.mark.asyncio
    async def test_success_keeps_upstream_content_type(self):
        mock_client, mock_session = mock_session_for(200, b"png-bytes", {"Content-Type": "image/png"})

        with patch(SESSION_PATH, mock_client):
            data, content_type = await fetch_remote_image("https://images.example.com/a.png")

        assert data == b"png-bytes"
        assert content_type == "image/png"
        mock_session.get.assert_called_once_with("https://images.example.com/a.png")

    @pytest.mark.asyncio
    async def test_missing_content_type_defaults_to_jpeg(self):
        mock_client, _ = mock_session_for(200, b"bytes")

        with patch(SESSION_PATH, mock_client):
            _, content_type = await fetch_remote_image("https://images.example.com/a")

        assert content_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        mock_client, _ = mock_session_for(404)

        with patch(SESSION_PATH, mock_client):
            with pytest.raises(DownloadError, match="404"):
                await fetch_remote_image("https://images.example.com/missing.png")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["/fashion-placeholder.svg", "file:///etc/passwd", "ftp://host/a.png"])
    async def test_non_http_url_raises_without_fetching(self, url):
        mock_client, _ = mock_session_for(200)

        with patch(SESSION_PATH, mock_client):
            with pytest.raises(DownloadError):
                await fetch_remote_image(url)

        mock_client.assert_not_called()


class TestDownloadEndpoint:

    def test_streams_image_as_attachment(self, test_client):
        body = b"\x89PNG\r\n\x1a\n" + b"\0" * 128
        mock_client, _ = mock_session_for(200, body, {"Content-Type": "image/png"})

        with patch(SESSION_PATH, mock_client):
            response = test_client.get("/api/download-image", params={"url": "https://images.example.com/a.png"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["content-disposition"] == 'attachment; filename="fashion-variation.jpg"'
        assert int(response.headers["content-length"]) == len(response.content) == len(body)
        assert response.content == body

    def test_upstream_404_returns_json_error(self, test_client):
        mock_client, _ = mock_session_for(404, b"not found")

        with patch(SESSION_PATH, mock_client):
            response = test_client.get("/api/download-image", params={"url": "https://images.example.com/gone.png"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to download image"}
        assert "content-disposition" not in response.headers

    def test_upstream_connection_error_returns_json_error(self, test_client):
        mock_client, mock_session = mock_session_for(200)
        mock_session.get.side_effect = OSError("connection refused")

        with patch(SESSION_PATH, mock_client):
            response = test_client.get("/api/download-image", params={"url": "https://images.example.com/a.png"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to download image"}

    @pytest.mark.parametrize("params", [{}, {"url": ""}])
    def test_missing_url_is_rejected_without_fetch(self, test_client, params):
        mock_client, _ = mock_session_for(200)

        with patch(SESSION_PATH, mock_client):
            response = test_client.get("/api/download-image", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Image URL is required"}
        mock_client.assert_not_called()
