"""
Palette extraction error taxonomy.

Every failure the engine or its collaborators raise derives from
PaletteExtractionError, so callers can catch the whole family at once while
still matching the builtin ValueError/RuntimeError split.
"""


class PaletteExtractionError(Exception):
    """Base class for palette extraction failures."""
    pass


class InvalidInput(PaletteExtractionError, ValueError):
    """Pixel data or requested color count rejected at construction."""
    pass


class InsufficientColors(PaletteExtractionError, RuntimeError):
    """No pixel survived mood filtering, so no seed could be chosen."""
    pass


class ExtractionFailed(PaletteExtractionError, RuntimeError):
    """Clustering finished without producing a single color."""
    pass


class ImageLoadError(PaletteExtractionError, ValueError):
    """The image source could not be read or decoded."""
    pass
