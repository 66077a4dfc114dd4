"""
Palette Extractor Configuration
Manages environment variables and defaults for the clustering engine and service.
"""
import numbers
import os


class Config:
    """Configuration class for palette extraction."""

    # Input bounds
    MIN_PIXELS: int = int(os.environ.get("PALETTE_MIN_PIXELS", "100"))
    MAX_PIXELS: int = int(os.environ.get("PALETTE_MAX_PIXELS", "100000"))
    DOWNSAMPLE_TARGET: int = int(os.environ.get("PALETTE_DOWNSAMPLE_TARGET", "5000"))
    MIN_COLORS: int = 1
    MAX_COLORS: int = 10
    DEFAULT_COLORS: int = int(os.environ.get("PALETTE_DEFAULT_COLORS", "5"))

    # Clustering thresholds (Euclidean RGBA distance)
    SEED_GROUPING_THRESHOLD: float = float(os.environ.get("PALETTE_SEED_THRESHOLD", "50"))
    ASSIGNMENT_CUTOFF: float = float(os.environ.get("PALETTE_ASSIGNMENT_CUTOFF", "30"))
    MAX_ITERATIONS: int = int(os.environ.get("PALETTE_MAX_ITERATIONS", "100"))
    CONVERGENCE_THRESHOLD: float = float(os.environ.get("PALETTE_CONVERGENCE_THRESHOLD", "0.001"))

    # Uploads
    MAX_FILE_MB: int = int(os.environ.get("PALETTE_MAX_FILE_MB", "10"))
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    # Presentation
    SWATCH_CHIP_SIZE: int = int(os.environ.get("PALETTE_SWATCH_CHIP_SIZE", "40"))

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTE_LOG_LEVEL", "INFO")
    LOG_JSON: bool = bool(int(os.environ.get("PALETTE_LOG_JSON", "0")))

    @classmethod
    def validate_color_count(cls, count) -> bool:
        """Validate requested palette size."""
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            return False
        return cls.MIN_COLORS <= count <= cls.MAX_COLORS

    @classmethod
    def validate_chip_size(cls, chip_size: int) -> bool:
        """Validate swatch chip size."""
        return 8 <= chip_size <= 200


# Global config instance
config = Config()
