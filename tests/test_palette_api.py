"""
API integration tests for palette extraction endpoints.

Tests:
- image upload and raw pixel modes
- parameter validation and error mapping
- response schema and metrics
"""

import base64
import io

from PIL import Image


def solid(color, count):
    return [list(color)] * count


class TestHealth:
    """Test service health endpoints"""

    def test_healthz(self, test_client):
        response = test_client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert "version" in data
        assert data["service"] == "palette-extractor"

    def test_root(self, test_client):
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"


class TestPaletteUpload:
    """Test the /v1/palette upload endpoint"""

    def test_extract_from_png(self, test_client, two_blocks_png):
        response = test_client.post(
            "/v1/palette?k=2&include_swatch=true",
            files={"file": ("two_blocks.png", two_blocks_png, "image/png")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["width"] == 20
        assert data["height"] == 20
        assert data["k"] == 2
        assert data["mood"] == "default"
        assert data["sampled_pixels"] == 400
        assert data["request_id"].startswith("pal-")

        hexes = {color["hex"] for color in data["palette"]}
        assert hexes == {"#FF0000", "#0000FF"}
        assert base64.b64decode(data["swatch_png_b64"]).startswith(b"\x89PNG")

    def test_backfilled_palette(self, test_client, two_blocks_png):
        response = test_client.post(
            "/v1/palette?k=5",
            files={"file": ("two_blocks.png", two_blocks_png, "image/png")}
        )
        data = response.json()
        assert len(data["palette"]) == 5
        assert data["missing_colors"] == 3
        assert data["swatch_png_b64"] is None

    def test_k_out_of_range(self, test_client, two_blocks_png):
        response = test_client.post(
            "/v1/palette?k=11",
            files={"file": ("two_blocks.png", two_blocks_png, "image/png")}
        )
        assert response.status_code == 422

    def test_unsupported_media_type(self, test_client):
        response = test_client.post(
            "/v1/palette",
            files={"file": ("notes.txt", b"hello world", "text/plain")}
        )
        assert response.status_code == 415

    def test_corrupt_png(self, test_client):
        response = test_client.post(
            "/v1/palette",
            files={"file": ("broken.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * 32, "image/png")}
        )
        assert response.status_code == 400

    def test_oversized_image_maps_to_400(self, test_client, monkeypatch, two_blocks_png):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        response = test_client.post(
            "/v1/palette",
            files={"file": ("two_blocks.png", two_blocks_png, "image/png")}
        )
        assert response.status_code == 400
        assert "Failed to load image" in response.json()["detail"]

    def test_too_small_image(self, test_client):
        buffer = io.BytesIO()
        Image.new("RGBA", (5, 5), (255, 0, 0, 255)).save(buffer, format="PNG")
        response = test_client.post(
            "/v1/palette",
            files={"file": ("tiny.png", buffer.getvalue(), "image/png")}
        )
        assert response.status_code == 400
        assert "100 pixels" in response.json()["detail"]


class TestPalettePixels:
    """Test the /v1/palette/pixels JSON endpoint"""

    def test_uniform_pixels(self, test_client):
        response = test_client.post(
            "/v1/palette/pixels",
            json={"pixels": solid([10, 10, 10, 255], 100), "k": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["palette"] == [
            {"red": 10, "green": 10, "blue": 10, "alpha": 255, "hex": "#0A0A0A"}
        ]
        assert data["iterations"] == 1
        assert data["converged"] is True
        assert data["width"] is None

    def test_dark_mood(self, test_client):
        pixels = solid([250, 220, 40, 255], 100) + solid([40, 10, 60, 255], 100)
        response = test_client.post(
            "/v1/palette/pixels",
            json={"pixels": pixels, "k": 1, "mood": "dark"}
        )
        assert response.status_code == 200
        assert response.json()["palette"][0]["hex"] == "#280A3C"

    def test_invalid_k_maps_to_400(self, test_client):
        response = test_client.post(
            "/v1/palette/pixels",
            json={"pixels": solid([10, 10, 10, 255], 100), "k": 0}
        )
        assert response.status_code == 400

    def test_insufficient_colors_maps_to_422(self, test_client):
        response = test_client.post(
            "/v1/palette/pixels",
            json={"pixels": solid([10, 10, 10, 255], 100), "k": 2, "mood": "bright"}
        )
        assert response.status_code == 422

    def test_malformed_pixel_rejected(self, test_client):
        response = test_client.post(
            "/v1/palette/pixels",
            json={"pixels": [[1, 2, 3]] * 100, "k": 1}
        )
        assert response.status_code == 422

    def test_unknown_mood_rejected(self, test_client):
        response = test_client.post(
            "/v1/palette/pixels",
            json={"pixels": solid([10, 10, 10, 255], 100), "mood": "neon"}
        )
        assert response.status_code == 422


class TestMetrics:
    """Test the metrics endpoint"""

    def test_metrics_track_requests_and_failures(self, test_client):
        test_client.post("/v1/palette/pixels", json={"pixels": solid([200, 30, 30, 255], 100), "k": 3})
        test_client.post(
            "/v1/palette/pixels",
            json={"pixels": solid([10, 10, 10, 255], 100), "k": 2, "mood": "bright"}
        )

        summary = test_client.get("/v1/metrics").json()
        counters = summary["counters"]
        assert counters["palette_requests_total"] == 2
        assert counters["palette_mood_total_default"] == 1
        assert counters["palette_mood_total_bright"] == 1
        assert counters["palette_backfilled_total"] == 1
        assert counters["palette_failed_total_InsufficientColors"] == 1
        assert summary["iteration_stats"]["count"] == 1

    def test_metrics_start_empty(self, test_client):
        summary = test_client.get("/v1/metrics").json()
        assert summary["counters"] == {}
