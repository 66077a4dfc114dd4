"""
Palette Extractor

Extracts small palettes of representative colors from RGBA pixel data with an
iterative clustering engine, biased toward a requested palette mood.
"""

from loguru import logger

from palette_extractor.errors import (
    ExtractionFailed,
    ImageLoadError,
    InsufficientColors,
    InvalidInput,
    PaletteExtractionError,
)
from palette_extractor.services.colors import (
    ColorRepresentative,
    ExtractionConfig,
    PaletteExtractor,
    PaletteMood,
    PaletteResult,
    extract_palette,
)

__version__ = "1.0.0"

# Library stays silent until the host application opts in
logger.disable("palette_extractor")

__all__ = [
    "ColorRepresentative",
    "ExtractionConfig",
    "ExtractionFailed",
    "ImageLoadError",
    "InsufficientColors",
    "InvalidInput",
    "PaletteExtractionError",
    "PaletteExtractor",
    "PaletteMood",
    "PaletteResult",
    "extract_palette",
]
