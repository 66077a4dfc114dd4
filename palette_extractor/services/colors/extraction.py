"""
Palette extraction orchestrator.

This module wires seed selection, cluster assignment and centroid refinement
into one extraction run per palette mood, and backfills palettes whose image
held fewer distinct colors than requested.

Each run is described by an immutable ExtractionConfig and returns a fresh
PaletteResult, so repeated extractions with different moods on the same
pixels never share state.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

import numpy as np
from loguru import logger

from palette_extractor.config import config
from palette_extractor.errors import ExtractionFailed, InvalidInput
from .clustering import ClusteringResult, refine_clusters
from .mood import PaletteMood, resolve_mood
from .pixels import prepare_pixels, validate_color_count
from .seeding import select_seeds

ColorRecord = Dict[str, int]


class ColorRepresentative(str, Enum):
    """Which value stands for a cluster in the output palette."""
    FIRST_MEMBER = "first_member"
    CENTROID = "centroid"


@dataclass(frozen=True)
class ExtractionConfig:
    """Immutable settings for a single extraction run."""
    color_count: int
    mood: PaletteMood = PaletteMood.DEFAULT
    representative: ColorRepresentative = ColorRepresentative.FIRST_MEMBER
    seed_threshold: float = field(default_factory=lambda: config.SEED_GROUPING_THRESHOLD)
    assignment_cutoff: float = field(default_factory=lambda: config.ASSIGNMENT_CUTOFF)
    max_iterations: int = field(default_factory=lambda: config.MAX_ITERATIONS)
    convergence_threshold: float = field(default_factory=lambda: config.CONVERGENCE_THRESHOLD)

    def __post_init__(self):
        validate_color_count(self.color_count)
        object.__setattr__(self, "mood", resolve_mood(self.mood))
        try:
            object.__setattr__(self, "representative", ColorRepresentative(self.representative))
        except ValueError:
            raise InvalidInput(
                f"Unknown color representative {self.representative!r}, expected one of "
                f"{[r.value for r in ColorRepresentative]}"
            )


@dataclass
class PaletteResult:
    """Output palette plus statistics about the run that produced it."""
    colors: List[ColorRecord]
    mood: PaletteMood
    requested_colors: int
    working_colors: int
    missing_colors: int
    iterations: int
    converged: bool
    sampled_pixels: int
    used_fallback: bool = False
    duration_ms: float = 0.0


def color_record(values) -> ColorRecord:
    """Convert four RGBA components to an output color record."""
    red, green, blue, alpha = (int(round(float(c))) for c in values)
    return {"red": red, "green": green, "blue": blue, "alpha": alpha}


def build_palette(pixels: np.ndarray,
                  clustering: ClusteringResult,
                  representative=ColorRepresentative.FIRST_MEMBER) -> List[ColorRecord]:
    """
    Pick one color per non-empty cluster, in centroid order.

    FIRST_MEMBER uses the first pixel assigned to the cluster (an actual image
    color); CENTROID uses the rounded cluster mean.
    """
    representative = ColorRepresentative(representative)
    colors = []
    for i, cluster in enumerate(clustering.clusters(pixels)):
        if len(cluster) == 0:
            continue
        if representative is ColorRepresentative.CENTROID:
            colors.append(color_record(clustering.centroids[i]))
        else:
            colors.append(color_record(cluster[0]))
    return colors


def backfill_palette(colors: List[ColorRecord], requested: int) -> List[ColorRecord]:
    """
    Pad a palette to ``requested`` entries by repeating its last color.

    Raises:
        ExtractionFailed: If there is no color to repeat
    """
    if not colors:
        raise ExtractionFailed("Could not extract any colors from this image")

    palette = list(colors)
    while len(palette) < requested:
        palette.append(dict(palette[-1]))
    return palette


def run_extraction(pixels: np.ndarray, settings: ExtractionConfig) -> PaletteResult:
    """
    Extract a palette from an already validated and downsampled pixel set.

    Args:
        pixels: Working pixel set (N, 4)
        settings: Run configuration

    Returns:
        PaletteResult whose colors list is exactly ``settings.color_count`` long

    Raises:
        InsufficientColors: If no pixel can seed a cluster for the mood
        ExtractionFailed: If every cluster ended up empty
    """
    start_time = time.time()
    logger.debug(
        f"Extracting {settings.color_count} colors ({settings.mood.value}) from {len(pixels)} pixels"
    )

    selection = select_seeds(pixels, settings.color_count, settings.mood, settings.seed_threshold)

    clustering = refine_clusters(
        pixels,
        selection.seeds,
        cutoff=settings.assignment_cutoff,
        max_iterations=settings.max_iterations,
        convergence_threshold=settings.convergence_threshold,
    )

    colors = build_palette(pixels, clustering, settings.representative)
    palette = backfill_palette(colors, settings.color_count)

    duration_ms = (time.time() - start_time) * 1000
    logger.debug(
        f"Extracted {len(colors)} colors, backfilled {len(palette) - len(colors)}, "
        f"{clustering.iterations} iterations in {duration_ms:.1f}ms"
    )

    return PaletteResult(
        colors=palette,
        mood=settings.mood,
        requested_colors=settings.color_count,
        working_colors=selection.working_colors,
        missing_colors=selection.missing_colors,
        iterations=clustering.iterations,
        converged=clustering.converged,
        sampled_pixels=len(pixels),
        used_fallback=selection.used_fallback,
        duration_ms=duration_ms,
    )


def extract_palette(pixels,
                    color_count: int,
                    mood=PaletteMood.DEFAULT,
                    representative=ColorRepresentative.FIRST_MEMBER) -> PaletteResult:
    """
    Validate raw pixels and extract a palette in one call.

    Raises:
        InvalidInput: For a bad color count, mood or pixel data
    """
    settings = ExtractionConfig(color_count=color_count, mood=mood, representative=representative)
    return run_extraction(prepare_pixels(pixels), settings)


class PaletteExtractor:
    """
    Extract dominant color palettes from a fixed set of pixels.

    Input is validated and downsampled once at construction; every palette
    method then runs an independent extraction against that working set.
    """

    def __init__(self, pixels, color_count: int):
        self._color_count = validate_color_count(color_count)
        self._pixels = prepare_pixels(pixels)
        self._pixels.flags.writeable = False

    @property
    def pixels(self) -> np.ndarray:
        """Working pixel set after downsampling."""
        return self._pixels

    @property
    def color_count(self) -> int:
        return self._color_count

    def extract(self, mood=PaletteMood.DEFAULT,
                representative=ColorRepresentative.FIRST_MEMBER) -> PaletteResult:
        settings = ExtractionConfig(
            color_count=self._color_count, mood=mood, representative=representative
        )
        return run_extraction(self._pixels, settings)

    def get_color_palette(self) -> List[ColorRecord]:
        return self.extract(PaletteMood.DEFAULT).colors

    def get_muted_palette(self) -> List[ColorRecord]:
        return self.extract(PaletteMood.MUTED).colors

    def get_dark_palette(self) -> List[ColorRecord]:
        return self.extract(PaletteMood.DARK).colors

    def get_bright_palette(self) -> List[ColorRecord]:
        return self.extract(PaletteMood.BRIGHT).colors
