"""
Palette mood filtering.

A mood narrows the pixels that may become clustering seeds to a window of
luma brightness and RGB saturation. It never changes which pixels end up in a
cluster, only where the clusters start.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

import numpy as np

from palette_extractor.errors import InvalidInput
from .pixels import PixelLike


class PaletteMood(str, Enum):
    """Requested character of the extracted palette."""
    DEFAULT = "default"
    BRIGHT = "bright"
    DARK = "dark"
    MUTED = "muted"


@dataclass(frozen=True)
class MoodThresholds:
    """Inclusive brightness/saturation acceptance window for one mood."""
    min_brightness: float
    max_brightness: float
    min_saturation: float
    max_saturation: float
    # Seed from every working pixel when nothing passes the window
    fallback_to_all: bool = False

    def accepts(self, brightness: float, saturation: float) -> bool:
        return (
            self.min_brightness <= brightness <= self.max_brightness
            and self.min_saturation <= saturation <= self.max_saturation
        )


MOOD_THRESHOLDS: Dict[PaletteMood, MoodThresholds] = {
    PaletteMood.DEFAULT: MoodThresholds(0.0, 1.0, 0.3, 1.0, fallback_to_all=True),
    PaletteMood.BRIGHT: MoodThresholds(0.5, 1.0, 0.5, 1.0),
    PaletteMood.DARK: MoodThresholds(0.0, 0.4, 0.1, 1.0),
    PaletteMood.MUTED: MoodThresholds(0.2, 1.0, 0.0, 0.4),
}


def resolve_mood(mood) -> PaletteMood:
    """
    Coerce a mood name or enum member to a PaletteMood.

    Raises:
        InvalidInput: If the name is not a known mood
    """
    if isinstance(mood, PaletteMood):
        return mood
    if mood is None:
        return PaletteMood.DEFAULT
    try:
        return PaletteMood(str(mood).lower())
    except ValueError:
        raise InvalidInput(
            f"Unknown palette mood {mood!r}, expected one of {[m.value for m in PaletteMood]}"
        )


def get_thresholds(mood) -> MoodThresholds:
    return MOOD_THRESHOLDS[resolve_mood(mood)]


def pixel_brightness(pixel: PixelLike) -> float:
    """Luma brightness (Rec. 601 weights) of a pixel in [0, 1]."""
    red, green, blue = (float(c) for c in pixel[:3])
    return (red * 0.299 + green * 0.587 + blue * 0.114) / 255


def pixel_saturation(pixel: PixelLike) -> float:
    """Spread between the strongest and weakest RGB channel, in [0, 1]."""
    rgb = [float(c) for c in pixel[:3]]
    return (max(rgb) - min(rgb)) / 255


def passes_mood_filter(pixel: PixelLike, mood=PaletteMood.DEFAULT) -> bool:
    """Check whether a single pixel may seed a cluster under the given mood."""
    return get_thresholds(mood).accepts(pixel_brightness(pixel), pixel_saturation(pixel))


def mood_mask(pixels: np.ndarray, mood=PaletteMood.DEFAULT) -> np.ndarray:
    """
    Vectorised mood filter over an (N, 4) pixel array.

    Returns:
        Boolean array of shape (N,), True where the pixel is a seeding candidate
    """
    thresholds = get_thresholds(mood)
    rgb = pixels[:, :3]
    brightness = (rgb[:, 0] * 0.299 + rgb[:, 1] * 0.587 + rgb[:, 2] * 0.114) / 255
    saturation = (rgb.max(axis=1) - rgb.min(axis=1)) / 255

    return (
        (brightness >= thresholds.min_brightness)
        & (brightness <= thresholds.max_brightness)
        & (saturation >= thresholds.min_saturation)
        & (saturation <= thresholds.max_saturation)
    )
