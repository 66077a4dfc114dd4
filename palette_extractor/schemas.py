"""
Palette Extractor API Schemas
Pydantic models for palette extraction request/response validation.
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator

from palette_extractor.config import config
from palette_extractor.services.colors.extraction import ColorRepresentative
from palette_extractor.services.colors.mood import PaletteMood


class PaletteColor(BaseModel):
    """Single extracted color."""
    red: int = Field(..., ge=0, le=255, description="Red component")
    green: int = Field(..., ge=0, le=255, description="Green component")
    blue: int = Field(..., ge=0, le=255, description="Blue component")
    alpha: int = Field(..., ge=0, le=255, description="Alpha component")
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB (alpha ignored)"
    )


class PaletteResponse(BaseModel):
    """Palette extraction response."""
    request_id: str = Field(..., description="Request identifier for tracing")
    width: Optional[int] = Field(None, description="Source image width in pixels")
    height: Optional[int] = Field(None, description="Source image height in pixels")
    k: int = Field(..., ge=1, le=10, description="Requested number of colors")
    mood: PaletteMood = Field(..., description="Palette mood used for seeding")
    representative: ColorRepresentative = Field(..., description="Per-cluster color choice")
    sampled_pixels: int = Field(..., description="Pixels in the working set after downsampling")
    palette: List[PaletteColor] = Field(..., description="Extracted colors, exactly k entries")
    missing_colors: int = Field(..., ge=0, description="Slots filled by repeating the last color")
    iterations: int = Field(..., ge=0, description="Refinement iterations run")
    converged: bool = Field(..., description="Whether refinement converged before the cap")
    swatch_png_b64: Optional[str] = Field(None, description="Base64 PNG swatch strip")
    debug: Dict[str, Any] = Field(default_factory=dict, description="Timing information")


class PixelPaletteRequest(BaseModel):
    """Palette extraction from raw RGBA pixels."""
    pixels: List[List[int]] = Field(
        ...,
        min_length=1,
        description="Pixels as [red, green, blue, alpha] lists"
    )
    k: int = Field(config.DEFAULT_COLORS, description="Number of colors to extract")
    mood: PaletteMood = Field(PaletteMood.DEFAULT, description="Palette mood")
    representative: ColorRepresentative = Field(
        ColorRepresentative.FIRST_MEMBER,
        description="Per-cluster color choice"
    )
    include_swatch: bool = Field(False, description="Render a swatch strip")

    @field_validator("pixels")
    @classmethod
    def validate_pixels(cls, v):
        for pixel in v:
            if len(pixel) != 4:
                raise ValueError("each pixel must have exactly 4 components [red, green, blue, alpha]")
        return v


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palette-extractor", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
