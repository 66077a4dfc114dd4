"""
Palette Extractor v1 API Routes
Implements /v1/palette endpoints and supporting routes.
"""
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, File, Query, UploadFile

from palette_extractor.config import config
from palette_extractor.errors import PaletteExtractionError
from palette_extractor.schemas import PaletteColor, PaletteResponse, PixelPaletteRequest
from palette_extractor.services.colors.extraction import (
    ColorRepresentative, ExtractionConfig, run_extraction
)
from palette_extractor.services.colors.mood import PaletteMood
from palette_extractor.services.colors.pixels import prepare_pixels
from palette_extractor.services.colors.swatches import color_to_hex, render_swatch_strip
from palette_extractor.services.imaging import read_upload
from palette_extractor.utils.ids import generate_request_id
from palette_extractor.utils.logging import get_logger
from palette_extractor.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Palette Extraction"])
logger = get_logger()


def _extract(pixels, k: int, mood: PaletteMood, representative: ColorRepresentative,
             include_swatch: bool, request_id: str,
             width: Optional[int] = None, height: Optional[int] = None,
             ms_decode: float = 0.0) -> PaletteResponse:
    """Run one extraction and build the response, recording metrics."""
    metrics = get_metrics()
    metrics.increment_mood_count(mood.value)

    try:
        settings = ExtractionConfig(color_count=k, mood=mood, representative=representative)
        result = run_extraction(prepare_pixels(pixels), settings)
    except PaletteExtractionError as e:
        metrics.increment_failure_count(type(e).__name__)
        logger.warning(f"Palette extraction failed: {e}", extra={"request_id": request_id})
        raise

    metrics.record_timing("extraction", result.duration_ms)
    metrics.record_iterations(result.iterations, result.converged)
    if result.missing_colors:
        metrics.increment_backfill_count()

    swatch = render_swatch_strip(result.colors) if include_swatch else None

    logger.info(
        f"Extracted {len(result.colors)} colors",
        extra={
            "request_id": request_id,
            "mood": mood.value,
            "iterations": result.iterations,
            "ms_extract": round(result.duration_ms, 2),
        }
    )

    return PaletteResponse(
        request_id=request_id,
        width=width,
        height=height,
        k=k,
        mood=result.mood,
        representative=representative,
        sampled_pixels=result.sampled_pixels,
        palette=[PaletteColor(**color, hex=color_to_hex(color)) for color in result.colors],
        missing_colors=result.missing_colors,
        iterations=result.iterations,
        converged=result.converged,
        swatch_png_b64=swatch,
        debug={"ms_decode": round(ms_decode, 2), "ms_extract": round(result.duration_ms, 2)},
    )


@router.post("/palette",
             response_model=PaletteResponse,
             summary="Extract palette from image",
             description="Upload a PNG/JPEG image and extract k representative colors")
async def extract_from_image(
    file: UploadFile = File(..., description="Image file (PNG or JPEG)"),
    k: int = Query(config.DEFAULT_COLORS, ge=1, le=10, description="Number of colors to extract"),
    mood: PaletteMood = Query(PaletteMood.DEFAULT, description="Palette mood"),
    representative: ColorRepresentative = Query(
        ColorRepresentative.FIRST_MEMBER, description="Per-cluster color choice"
    ),
    include_swatch: bool = Query(False, description="Render a swatch strip")
) -> PaletteResponse:
    request_id = generate_request_id("pal")
    get_metrics().increment_request_count()
    logger.info("Starting palette extraction from upload", extra={"request_id": request_id})

    start_time = time.time()
    image = await read_upload(file)
    ms_decode = (time.time() - start_time) * 1000
    get_metrics().record_timing("decode", ms_decode)

    return _extract(
        image.pixels, k, mood, representative, include_swatch, request_id,
        width=image.width, height=image.height, ms_decode=ms_decode
    )


@router.post("/palette/pixels",
             response_model=PaletteResponse,
             summary="Extract palette from raw pixels",
             description="Extract k representative colors from a list of RGBA pixels")
def extract_from_pixels(body: PixelPaletteRequest) -> PaletteResponse:
    request_id = generate_request_id("pal")
    get_metrics().increment_request_count()
    logger.info(
        f"Starting palette extraction from {len(body.pixels)} pixels",
        extra={"request_id": request_id}
    )

    return _extract(
        body.pixels, body.k, body.mood, body.representative, body.include_swatch, request_id
    )


@router.get("/metrics", summary="Extraction metrics")
def metrics_summary() -> Dict[str, Any]:
    return get_metrics().get_summary()
