"""
Unit tests for image decoding into RGBA pixels.
"""

import io

import numpy as np
import pytest
from fastapi import HTTPException
from PIL import Image

from palette_extractor import PaletteExtractor
from palette_extractor.errors import ImageLoadError
from palette_extractor.services.imaging import (
    decode_image_bytes, load_image, validate_magic_bytes
)


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


class TestDecodeImageBytes:
    """Test decoding of encoded images"""

    def test_png_pixels_and_dimensions(self, two_blocks_png):
        image = decode_image_bytes(two_blocks_png)

        assert image.width == 20
        assert image.height == 20
        assert image.pixels.shape == (400, 4)
        assert image.pixels.dtype == np.uint8
        assert len(image) == 400

        # Row-major: first pixel is top-left (red), last is bottom-right (blue)
        np.testing.assert_array_equal(image.pixels[0], [255, 0, 0, 255])
        np.testing.assert_array_equal(image.pixels[-1], [0, 0, 255, 255])

    def test_rgb_image_gets_opaque_alpha(self):
        data = encode(Image.new("RGB", (10, 10), (10, 20, 30)))
        image = decode_image_bytes(data)
        assert np.all(image.pixels == [10, 20, 30, 255])

    def test_transparency_is_preserved(self):
        data = encode(Image.new("RGBA", (10, 10), (10, 20, 30, 0)))
        image = decode_image_bytes(data)
        assert np.all(image.pixels[:, 3] == 0)

    def test_invalid_bytes_raise_image_load_error(self):
        with pytest.raises(ImageLoadError, match="Failed to load image"):
            decode_image_bytes(b"definitely not an image")

    def test_decompression_bomb_raises_image_load_error(self, monkeypatch, two_blocks_png):
        # 400 pixels is over twice the lowered limit, so Pillow refuses to open it
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        with pytest.raises(ImageLoadError, match="Failed to load image"):
            decode_image_bytes(two_blocks_png)

    def test_decoded_pixels_feed_extractor(self, two_blocks_png):
        image = decode_image_bytes(two_blocks_png)
        palette = PaletteExtractor(image.pixels, 2).get_color_palette()
        assert {tuple(c.values()) for c in palette} == {(255, 0, 0, 255), (0, 0, 255, 255)}


class TestLoadImage:
    """Test loading from disk"""

    def test_load_from_path(self, tmp_path, two_blocks_png):
        path = tmp_path / "two_blocks.png"
        path.write_bytes(two_blocks_png)
        image = load_image(path)
        assert (image.width, image.height) == (20, 20)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageLoadError):
            load_image(tmp_path / "missing.png")


class TestValidateMagicBytes:
    """Test file signature detection"""

    def test_png_and_jpeg(self, two_blocks_png):
        assert validate_magic_bytes(two_blocks_png) == "image/png"
        jpeg = encode(Image.new("RGB", (10, 10), (1, 2, 3)), "JPEG")
        assert validate_magic_bytes(jpeg) == "image/jpeg"

    def test_rejects_unknown_signature(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_magic_bytes(b"GIF89a\x00\x00\x00\x00")
        assert exc_info.value.status_code == 400

    def test_rejects_tiny_payload(self):
        with pytest.raises(HTTPException):
            validate_magic_bytes(b"\x89PNG")
