"""
API tests for the /v2 color extraction endpoint.
"""
import httpx
import pytest

from conftest import FakeExtractor, FakeFetcher, image_bytes, make_palette, transparent_logo_bytes
from hexit.core.errors import FetchError, NetworkError, UnsupportedFormatError
from hexit.services.fetcher import ImageFetcher

FETCH_MESSAGE = "Could not fetch the image from the provided URL. Please check the link and try again."
FORMAT_MESSAGE = "Unsupported image format. Please try a different image (e.g., JPEG, PNG, GIF)."
GENERIC_MESSAGE = "Failed to process image from URL."
EMPTY_MESSAGE = "Could not extract any dominant colors from the image."


class TestExtractColors:
    """GET /v2"""

    def test_end_to_end_example(self, test_client, override):
        fetcher = FakeFetcher()
        extractor = FakeExtractor(make_palette(
            Vibrant=("#384350", 500),
            Muted=("#788390", 300),
        ))
        override(fetcher=fetcher, extractor=extractor, policy="priority")

        response = test_client.get("/v2", params={"url": "https://example.com/photo.jpg"})

        assert response.status_code == 200
        assert response.json() == {
            "imageUrl": "https://example.com/photo.jpg",
            "colors": ["#384350", "#788390"],
        }
        assert fetcher.urls == ["https://example.com/photo.jpg"]
        assert extractor.calls == 1

    def test_percent_encoded_url_is_decoded(self, test_client, override):
        fetcher = FakeFetcher()
        override(fetcher=fetcher, extractor=FakeExtractor(make_palette(Vibrant=("#384350", 1))))

        response = test_client.get("/v2?url=https%3A%2F%2Fexample.com%2Fa%20b.png%3Fw%3D200")

        assert response.status_code == 200
        assert response.json()["imageUrl"] == "https://example.com/a b.png?w=200"
        assert fetcher.urls == ["https://example.com/a b.png?w=200"]

    @pytest.mark.parametrize("query", ["", "?url=", "?url=%20%20"])
    def test_missing_url(self, test_client, override, query):
        fetcher = FakeFetcher()
        override(fetcher=fetcher)

        response = test_client.get(f"/v2{query}")

        assert response.status_code == 400
        assert response.json() == {"error": "Image URL is required."}
        assert fetcher.urls == []

    def test_remote_non_2xx(self, test_client, override, not_found_fetcher):
        extractor = FakeExtractor()
        override(fetcher=not_found_fetcher, extractor=extractor)

        response = test_client.get("/v2", params={"url": "https://example.com/missing.jpg"})

        assert response.status_code == 500
        assert response.json() == {"error": FETCH_MESSAGE}
        assert response.json()["error"] != FORMAT_MESSAGE
        assert extractor.calls == 0

    def test_network_failure(self, test_client, override):
        override(fetcher=FakeFetcher(error=NetworkError("connection refused")))

        response = test_client.get("/v2", params={"url": "https://unreachable.invalid/x.png"})

        assert response.status_code == 500
        assert response.json() == {"error": FETCH_MESSAGE}

    def test_unsupported_format(self, test_client, override):
        override(
            fetcher=FakeFetcher(content=b"<html></html>"),
            extractor=FakeExtractor(error=UnsupportedFormatError("cannot identify image file")),
        )

        response = test_client.get("/v2", params={"url": "https://example.com/page.html"})

        assert response.status_code == 500
        assert response.json() == {"error": FORMAT_MESSAGE}

    def test_no_swatches(self, test_client, override):
        override(fetcher=FakeFetcher(), extractor=FakeExtractor(make_palette(Vibrant=None, Muted=None)))

        response = test_client.get("/v2", params={"url": "https://example.com/blank.png"})

        assert response.status_code == 422
        assert response.json() == {"error": EMPTY_MESSAGE}

    def test_unexpected_error_is_not_leaked(self, test_client, override):
        override(fetcher=FakeFetcher(), extractor=FakeExtractor(error=RuntimeError("secret internals")))

        response = test_client.get("/v2", params={"url": "https://example.com/photo.jpg"})

        assert response.status_code == 500
        assert response.json() == {"error": GENERIC_MESSAGE}
        assert "secret" not in response.text

    def test_dominance_policy(self, test_client, override):
        extractor = FakeExtractor(make_palette(Vibrant=("#384350", 100), Muted=("#788390", 900)))
        override(fetcher=FakeFetcher(), extractor=extractor, policy="dominance")

        response = test_client.get("/v2", params={"url": "https://example.com/photo.jpg"})

        assert response.status_code == 200
        assert response.json()["colors"] == ["#788390"]

    def test_real_extractor_on_solid_image(self, test_client, override):
        override(fetcher=FakeFetcher(content=image_bytes(color=(200, 30, 40))))

        response = test_client.get("/v2", params={"url": "https://example.com/red.png"})

        assert response.status_code == 200
        colors = response.json()["colors"]
        assert 1 <= len(colors) <= 2
        assert len(set(colors)) == len(colors)

    def test_redirect_loop_is_a_fetch_failure(self, test_client, override):
        def handler(request):
            return httpx.Response(302, headers={"Location": str(request.url)})

        override(fetcher=ImageFetcher(transport=httpx.MockTransport(handler)))

        response = test_client.get("/v2", params={"url": "https://example.com/loop.jpg"})

        assert response.status_code == 500
        assert response.json() == {"error": FETCH_MESSAGE}

    def test_transparent_logo_ignores_background(self, test_client, override):
        override(fetcher=FakeFetcher(content=transparent_logo_bytes()), policy="dominance")

        response = test_client.get("/v2", params={"url": "https://example.com/logo.png"})

        assert response.status_code == 200
        assert response.json()["colors"] == ["#dc1e28"]


def test_health(test_client):
    response = test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["ranking_policy"] in ("priority", "dominance")


def test_api_root(test_client):
    response = test_client.get("/api")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_fetch_error_keeps_remote_status():
    error = FetchError(403)
    assert error.remote_status == 403
    assert error.status_code == 500
    assert error.message == FETCH_MESSAGE
