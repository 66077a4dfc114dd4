from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables before config is read
load_dotenv()

from palette_extractor import __version__
from palette_extractor.api.v1 import router as v1_router
from palette_extractor.errors import (
    ExtractionFailed,
    ImageLoadError,
    InsufficientColors,
    InvalidInput,
)
from palette_extractor.schemas import HealthResponse
from palette_extractor.utils.logging import configure_logging

configure_logging()

app = FastAPI(
    title="Palette Extractor",
    description="Extract representative color palettes from images and raw RGBA pixels",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.exception_handler(InvalidInput)
@app.exception_handler(ImageLoadError)
async def bad_input_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(InsufficientColors)
@app.exception_handler(ExtractionFailed)
async def extraction_failed_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Palette Extractor API",
        "version": __version__,
        "docs": "/docs"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
