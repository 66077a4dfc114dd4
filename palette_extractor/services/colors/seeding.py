"""
Seed selection for palette clustering.

Groups mood-filtered pixels into frequency buckets and picks the most frequent
bucket representatives as initial centroids.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from palette_extractor.config import config
from palette_extractor.errors import InsufficientColors
from .mood import PaletteMood, get_thresholds, mood_mask, resolve_mood


@dataclass
class FrequencyBucket:
    """A representative pixel and how many candidate pixels fell near it."""
    pixel: Tuple[float, float, float, float]
    count: int = 1


@dataclass
class SeedSelection:
    """Initial centroids plus the bookkeeping needed for palette backfill."""
    seeds: np.ndarray
    requested_colors: int
    working_colors: int
    missing_colors: int
    buckets: List[FrequencyBucket] = field(default_factory=list)
    used_fallback: bool = False


def build_frequency_buckets(pixels: np.ndarray,
                            threshold: Optional[float] = None) -> List[FrequencyBucket]:
    """
    Group pixels into frequency buckets by proximity.

    Pixels are visited in input order. A pixel closer than ``threshold`` to an
    existing representative increments every such bucket; otherwise it opens a
    new bucket. Buckets are returned sorted by count descending, ties keeping
    the order in which they were opened.

    Args:
        pixels: Candidate pixels (N, 4)
        threshold: Grouping distance (default from config)

    Returns:
        Sorted list of FrequencyBucket
    """
    if threshold is None:
        threshold = config.SEED_GROUPING_THRESHOLD

    representatives = np.empty((len(pixels), 4), dtype=np.float64)
    counts = np.zeros(len(pixels), dtype=np.int64)
    n_buckets = 0

    for pixel in pixels:
        if n_buckets:
            diff = representatives[:n_buckets] - pixel
            matches = np.sqrt(np.sum(diff * diff, axis=1)) < threshold
            if matches.any():
                counts[:n_buckets][matches] += 1
                continue

        representatives[n_buckets] = pixel
        counts[n_buckets] = 1
        n_buckets += 1

    buckets = [
        FrequencyBucket(pixel=tuple(float(c) for c in representatives[i]), count=int(counts[i]))
        for i in range(n_buckets)
    ]
    # list.sort is stable, so equal counts keep first-seen order
    buckets.sort(key=lambda bucket: bucket.count, reverse=True)
    return buckets


def select_seeds(pixels: np.ndarray,
                 color_count: int,
                 mood=PaletteMood.DEFAULT,
                 threshold: Optional[float] = None) -> SeedSelection:
    """
    Choose up to ``color_count`` initial centroids from the working pixel set.

    Only pixels accepted by the mood filter are bucketed. When fewer buckets
    exist than colors were requested, the working color count shrinks to the
    number of buckets and the shortfall is reported as ``missing_colors``.

    Raises:
        InsufficientColors: If no bucket could be formed
    """
    thresholds = get_thresholds(mood)
    candidates = pixels[mood_mask(pixels, mood)]
    used_fallback = False

    if len(candidates) == 0 and thresholds.fallback_to_all:
        logger.debug(f"No pixel passed the {resolve_mood(mood).value} window, seeding from all {len(pixels)} pixels")
        candidates = pixels
        used_fallback = True

    logger.debug(f"Seeding from {len(candidates)}/{len(pixels)} candidate pixels")

    buckets = build_frequency_buckets(candidates, threshold)
    if not buckets:
        raise InsufficientColors(
            f"No pixels match the requested '{resolve_mood(mood).value}' palette mood"
        )

    working_colors = min(color_count, len(buckets))
    missing_colors = color_count - working_colors
    if missing_colors:
        logger.debug(f"Only {len(buckets)} distinct colors found, {missing_colors} slots will be backfilled")

    seeds = np.array([bucket.pixel for bucket in buckets[:working_colors]], dtype=np.float64)

    return SeedSelection(
        seeds=seeds,
        requested_colors=color_count,
        working_colors=working_colors,
        missing_colors=missing_colors,
        buckets=buckets,
        used_fallback=used_fallback,
    )
