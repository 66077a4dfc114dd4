"""
Palette Extractor Imaging Utilities
Turns image files and uploads into flat RGBA pixel sequences for extraction.
"""
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from fastapi import HTTPException, UploadFile
from loguru import logger
from PIL import Image, UnidentifiedImageError

from palette_extractor.config import config
from palette_extractor.errors import ImageLoadError


@dataclass
class PixelImage:
    """Decoded image as row-major RGBA pixels."""
    pixels: np.ndarray
    width: int
    height: int

    def __len__(self) -> int:
        return len(self.pixels)


def decode_image_bytes(file_bytes: bytes) -> PixelImage:
    """
    Decode image bytes into RGBA pixels.

    Args:
        file_bytes: Raw encoded image

    Returns:
        PixelImage with an (width*height, 4) uint8 pixel array

    Raises:
        ImageLoadError: If Pillow cannot decode the data
    """
    try:
        with Image.open(io.BytesIO(file_bytes)) as pil_image:
            rgba = pil_image.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageLoadError(f"Failed to load image: {e}")

    width, height = rgba.size
    pixels = np.asarray(rgba, dtype=np.uint8).reshape(-1, 4)
    logger.debug(f"Decoded {width}×{height} image into {len(pixels)} pixels")

    return PixelImage(pixels=pixels, width=width, height=height)


def load_image(path: Union[str, Path]) -> PixelImage:
    """Read an image file from disk and decode it into RGBA pixels."""
    path = Path(path)
    try:
        file_bytes = path.read_bytes()
    except OSError as e:
        raise ImageLoadError(f"Failed to load image {path}: {e}")
    return decode_image_bytes(file_bytes)


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 8:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid image file. Magic bytes don't match supported formats."
        )


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file metadata before reading it.

    Raises:
        HTTPException: 400 for oversized files, 415 for unsupported formats
    """
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = file.filename.lower().rsplit('.', 1)[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


async def read_upload(file: UploadFile) -> PixelImage:
    """
    Safely read and decode an uploaded image into RGBA pixels.

    Raises:
        HTTPException: 400/415 for rejected uploads
        ImageLoadError: If the bytes pass validation but cannot be decoded
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    validate_magic_bytes(file_bytes)
    return decode_image_bytes(file_bytes)
