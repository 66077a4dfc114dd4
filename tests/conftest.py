"""
Test configuration and fixtures for palette extraction tests.
"""
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palette_extractor.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def two_blocks_png():
    """PNG bytes of a 20×20 image: left half red, right half blue."""
    img = Image.new("RGBA", (20, 20), (0, 0, 255, 255))
    img.paste((255, 0, 0, 255), (0, 0, 10, 20))
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
