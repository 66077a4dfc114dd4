"""
Palette Extractor Colors Module

Provides the clustering engine behind palette extraction: input validation and
downsampling, mood filtering, seed selection, iterative refinement and the
extraction orchestrator, plus swatch rendering for presentation.
"""

from .extraction import (
    ColorRepresentative,
    ExtractionConfig,
    PaletteExtractor,
    PaletteResult,
    extract_palette,
    run_extraction,
)
from .mood import PaletteMood, passes_mood_filter
from .pixels import downsample_pixels, pixel_distance

__all__ = [
    "ColorRepresentative",
    "ExtractionConfig",
    "PaletteExtractor",
    "PaletteResult",
    "PaletteMood",
    "extract_palette",
    "run_extraction",
    "passes_mood_filter",
    "downsample_pixels",
    "pixel_distance",
]
