"""
Shared fixtures for the fashion variations test suite.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from fashion_variations.api.variations.provider import get_provider_client
from fashion_variations.api.variations.schemas import UploadedImage
from fashion_variations.main import app


@pytest.fixture
def dress_image():
    return UploadedImage(data=b"fake-dress-bytes", mime_type="image/png", role="dress", filename="dress.png")


@pytest.fixture
def person_image():
    return UploadedImage(data=b"fake-person-bytes", mime_type="image/jpeg", role="person", filename="person.jpg")


@pytest.fixture
def chat_response():
    """Builds an object shaped like an OpenAI chat completion."""
    def _build(content):
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])
    return _build


@pytest.fixture
def image_response():
    """Builds an object shaped like an OpenAI images response."""
    def _build(url):
        return SimpleNamespace(data=[SimpleNamespace(url=url)])
    return _build


@pytest.fixture
def mock_openai_client(chat_response, image_response):
    """AsyncOpenAI stand-in whose calls succeed unless a test says otherwise."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=chat_response("A red silk midi dress; tall person with dark hair."))
    client.images.generate = AsyncMock(
        side_effect=[image_response(f"https://images.example.com/pose-{i}.png") for i in range(1, 6)]
    )
    return client


@pytest.fixture
def test_client():
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def use_provider(test_client):
    """Overrides the provider dependency; pass None to force demo mode."""
    def _use(client):
        app.dependency_overrides[get_provider_client] = lambda: client
    return _use
