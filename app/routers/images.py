# =============================================================================
# app/routers/images.py - Standalone Style Image Endpoint
# =============================================================================
# Regenerates the three-look style image for a photo, outside the paid
# analysis. Upstream OpenAI errors are passed through with their status so
# the client can show what went wrong.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import StylistDep
from app.exceptions import MissingFieldsError, ServiceNotConfiguredError, StylistException
from agents.stylist import StylistError
from core.models.analysis import GenerateImageRequest, GenerateImageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(request: GenerateImageRequest, stylist: StylistDep):
    """
    Generate a style image from a photo.

    Errors:
    - 400: no photo, or the photo is not a decodable image
    - 500: OpenAI not configured
    - OpenAI's status: OpenAI rejected the edit (`details` holds its body)
    """
    if not stylist.configured:
        raise ServiceNotConfiguredError("Missing API key", service="openai")

    if not request.photo:
        raise MissingFieldsError("Missing photo")

    try:
        image = await stylist.generate_style_image(request.photo)
    except StylistError as e:
        logger.error(f"Style image error: {e}")
        if e.code == "INVALID_IMAGE":
            raise StylistException(message=e.message, code=e.code, status_code=400)
        if e.status_code:
            raise StylistException(
                message=f"OpenAI Error: {e.status_code}",
                code=e.code,
                status_code=e.status_code,
                details={"details": e.details.get("body", e.message)},
            )
        raise StylistException(message=e.message, code=e.code, status_code=500)

    return GenerateImageResponse(image=image)
