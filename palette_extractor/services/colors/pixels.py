"""
Pixel input handling for palette extraction.

Validates raw RGBA pixel data, bounds oversized inputs with uniform stride
sampling and provides the single Euclidean RGBA distance used by every
clustering stage.
"""

import math
from typing import Sequence, Union

import numpy as np
from loguru import logger

from palette_extractor.config import config
from palette_extractor.errors import InvalidInput

PixelLike = Union[Sequence[float], np.ndarray]


def validate_color_count(color_count) -> int:
    """
    Validate the number of colors requested for a palette.

    Raises:
        InvalidInput: If the count is not an integer in [1, 10]
    """
    if not config.validate_color_count(color_count):
        raise InvalidInput(
            f"A palette must be between {config.MIN_COLORS} and {config.MAX_COLORS} colors, "
            f"got {color_count!r}"
        )
    return color_count


def _check_layout(arr: np.ndarray) -> None:
    """Reject pixel arrays that are too small or not shaped (N, 4)."""
    count = arr.shape[0] if arr.ndim > 0 else 0
    if count < config.MIN_PIXELS:
        raise InvalidInput(
            f"Pixel data must contain at least {config.MIN_PIXELS} pixels - 10x10px, got {count}"
        )

    if arr.ndim != 2 or arr.shape[1] != 4:
        raise InvalidInput(
            f"Each pixel must have exactly 4 components (red, green, blue, alpha), "
            f"got array of shape {arr.shape}"
        )


def as_pixel_array(pixels) -> np.ndarray:
    """
    Convert raw pixel data into a float (N, 4) RGBA array.

    Args:
        pixels: Sequence of [red, green, blue, alpha] values or an (N, 4) array

    Returns:
        New float64 array of shape (N, 4); input order is preserved

    Raises:
        InvalidInput: If there are fewer than the minimum number of pixels, a pixel
            does not have exactly four components, or a component is outside [0, 255]
    """
    try:
        arr = np.array(pixels, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Pixel data must be a sequence of [red, green, blue, alpha] values: {e}")

    _check_layout(arr)

    if not np.all(np.isfinite(arr)) or arr.min() < 0 or arr.max() > 255:
        raise InvalidInput("Pixel components must be finite values within [0, 255]")

    return arr


def downsample_pixels(pixels, max_pixels: int = None, target: int = None):
    """
    Reduce an oversized pixel sequence by uniform stride sampling.

    Inputs at or below ``max_pixels`` are returned unchanged. Larger inputs keep
    every ``ceil(len / target)``-th pixel starting at index 0, so the result is
    close to (but not exactly) ``target`` long.
    """
    if max_pixels is None:
        max_pixels = config.MAX_PIXELS
    if target is None:
        target = config.DOWNSAMPLE_TARGET

    count = len(pixels)
    if count <= max_pixels:
        return pixels

    stride = math.ceil(count / target)
    reduced = pixels[::stride]
    logger.debug(f"Downsampled {count} pixels with stride {stride} to {len(reduced)}")
    return reduced


def prepare_pixels(pixels) -> np.ndarray:
    """
    Validate raw pixel data and downsample it into the working set.

    Decoded images arrive as uint8 arrays, which are always within [0, 255];
    those are sampled first so only the working rows are converted to float.
    """
    if isinstance(pixels, np.ndarray) and pixels.dtype == np.uint8:
        _check_layout(pixels)
        return np.array(downsample_pixels(pixels), dtype=np.float64)
    return downsample_pixels(as_pixel_array(pixels))


def pixel_distance(a: PixelLike, b: PixelLike) -> float:
    """Euclidean distance between two RGBA pixels."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.sqrt(np.sum(diff * diff)))


def distances_to(pixels: np.ndarray, reference: PixelLike) -> np.ndarray:
    """Distance from every pixel in an (N, 4) array to one reference pixel."""
    diff = pixels - np.asarray(reference, dtype=np.float64)
    return np.sqrt(np.sum(diff * diff, axis=-1))


def pairwise_distances(pixels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Distance matrix between pixels and centroids.

    Broadcasting: (N, 1, 4) - (1, K, 4) -> (N, K, 4) -> (N, K)
    """
    diff = pixels[:, None, :] - centroids[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))
