"""
Swatch Rendering Module

Provides utilities for presenting extracted palettes: hex and CSS strings for
each color and a horizontal PNG swatch strip for quick visual QA.
"""

import base64
from io import BytesIO
from typing import Dict, List, Mapping

from PIL import Image
from loguru import logger

from palette_extractor.config import config


def color_to_hex(color: Mapping[str, int]) -> str:
    """Convert a color record to a #RRGGBB string (alpha ignored)."""
    return f"#{int(color['red']):02X}{int(color['green']):02X}{int(color['blue']):02X}"


def color_to_css(color: Mapping[str, int]) -> str:
    """Convert a color record to a CSS rgb() value (alpha ignored)."""
    return f"rgb({int(color['red'])}, {int(color['green'])}, {int(color['blue'])})"


def validate_swatch_params(chip_size: int) -> None:
    """Validate swatch rendering parameters."""
    if not config.validate_chip_size(chip_size):
        raise ValueError(f"chip_size must be between 8 and 200, got {chip_size}")


def render_swatch_strip(colors: List[Dict[str, int]], chip_size: int = None) -> str:
    """
    Render a horizontal strip of color swatches.

    Args:
        colors: Palette color records ({red, green, blue, alpha})
        chip_size: Size of each square chip in pixels (default from config)

    Returns:
        Base64-encoded PNG image string
    """
    if not colors:
        raise ValueError("Empty colors list provided")

    if chip_size is None:
        chip_size = config.SWATCH_CHIP_SIZE
    validate_swatch_params(chip_size)

    k = len(colors)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = Image.new("RGB", (chip_size * k, chip_size))
    for i, color in enumerate(colors):
        rgb = (int(color["red"]), int(color["green"]), int(color["blue"]))
        img.paste(rgb, (i * chip_size, 0, (i + 1) * chip_size, chip_size))

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    b64_string = base64.b64encode(buffer.getvalue()).decode("ascii")
    logger.debug(f"Encoded swatch strip: {chip_size * k}×{chip_size} -> {len(b64_string)} chars")

    return b64_string
