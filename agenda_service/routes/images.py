import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..config import IMAGE_SETTLE_DELAY_MS
from ..schemas import ErrorResponse, GenerateImageRequest, GenerateImageResponse
from ..services.renderer import HIGH_DPI_VIEWPORT, RenderError, browser_manager
from ..services.storage import StorageUploadError, upload_image_async
from ..utils.sanitization import sanitize_storage_key

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=error).model_dump(exclude_none=True))


@router.post(
    "/generate-image",
    response_model=GenerateImageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_image(data: GenerateImageRequest):
    """Render the posted HTML to PNG, store it, and return its public URL"""
    started = time.perf_counter()
    logger.info("🖼️ Starting image generation...")

    if not data.htmlContent:
        return _bad_request("htmlContent is required")
    if not data.filename:
        return _bad_request("filename is required")

    try:
        key = sanitize_storage_key(data.filename)
    except ValueError as e:
        return _bad_request(str(e))

    try:
        logger.info("🎨 Rendering HTML to image...")
        image_bytes = await browser_manager.html_to_image(
            data.htmlContent,
            viewport=HIGH_DPI_VIEWPORT,
            settle_delay_ms=IMAGE_SETTLE_DELAY_MS,
        )

        logger.info("☁️ Uploading image...")
        image_url = await upload_image_async(image_bytes, key)
    except (RenderError, StorageUploadError) as e:
        processing_time = _elapsed_ms(started)
        logger.error(f"❌ Image generation failed ({processing_time}ms): {e}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(e), processingTime=processing_time).model_dump(),
        )

    processing_time = _elapsed_ms(started)
    logger.info(f"✅ Image generated in {processing_time}ms")
    return GenerateImageResponse(imageUrl=image_url, processingTime=processing_time)
