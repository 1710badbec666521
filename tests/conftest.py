"""
Test configuration and fixtures for HEXIT tests.
"""
import io
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from hexit.main import app
from hexit.api.routes.colors import get_extractor, get_fetcher, get_ranking_policy
from hexit.core.errors import FetchError
from hexit.models.schemas import Swatch, SwatchName


def make_palette(**swatches):
    """Build a palette from name=(hex, population) keyword arguments"""
    palette = {}
    for key, value in swatches.items():
        name = SwatchName(key)
        palette[name] = None if value is None else Swatch(name=name, hex=value[0], population=value[1])
    return palette


def image_bytes(color=(56, 67, 80), size=(32, 32), fmt="PNG"):
    """Encode a solid image in memory"""
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def transparent_logo_bytes(color=(220, 30, 40), size=(100, 100), square=20):
    """Transparent PNG with one opaque square in the middle"""
    img = Image.new("RGBA", size, (0, 0, 0, 0))
    left = (size[0] - square) // 2
    top = (size[1] - square) // 2
    img.paste(color + (255,), (left, top, left + square, top + square))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class FakeFetcher:
    def __init__(self, content=b"image", error=None):
        self.content = content
        self.error = error
        self.urls = []

    async def fetch(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.content


class FakeExtractor:
    def __init__(self, palette=None, error=None):
        self.palette = palette or {}
        self.error = error
        self.calls = 0

    def extract(self, image_bytes):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.palette


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def override():
    """Swap the fetcher, extractor or ranking policy used by /v2."""
    def _override(fetcher=None, extractor=None, policy=None):
        if fetcher is not None:
            app.dependency_overrides[get_fetcher] = lambda: fetcher
        if extractor is not None:
            app.dependency_overrides[get_extractor] = lambda: extractor
        if policy is not None:
            app.dependency_overrides[get_ranking_policy] = lambda: policy
    yield _override
    app.dependency_overrides.clear()


@pytest.fixture
def not_found_fetcher():
    return FakeFetcher(error=FetchError(404))
