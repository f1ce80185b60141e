"""
Image routes.

POST /api/generate-image - prompt -> generated image URL
POST /api/analyze-image  - image -> prompt describing it
POST /api/download-image - proxy an image URL back as base64
"""

import base64
import logging

from fastapi import APIRouter, Depends

from relay.config import settings
from relay.models.request import (
    AnalyzeImageRequest,
    DownloadImageRequest,
    GenerateImageRequest,
)
from relay.models.response import (
    AnalyzeImageResponse,
    DownloadImageResponse,
    GenerateImageResponse,
)
from relay.services.image_analysis import analyze_image
from relay.services.image_generator import ImageGenerateOptions, create_image_generator
from relay.utils.exceptions import ConfigurationError, RelayError, ValidationError
from relay.utils.http import HttpClient, get_http_client

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_IMAGE_SIZE = 1024
DEFAULT_CONTENT_TYPE = "image/png"


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(
    request: GenerateImageRequest,
    http: HttpClient = Depends(get_http_client),
):
    """POST /api/generate-image - Generate an image from a text prompt"""
    if not request.prompt:
        raise ValidationError("Prompt cannot be empty")

    generator = create_image_generator(settings.openai_api_key, http=http)
    image_url = await generator.generate(
        request.prompt,
        ImageGenerateOptions(
            width=request.width or DEFAULT_IMAGE_SIZE,
            height=request.height or DEFAULT_IMAGE_SIZE,
            quality="standard",
        ),
    )
    return GenerateImageResponse(image_url=image_url)


@router.post("/analyze-image", response_model=AnalyzeImageResponse)
async def analyze(
    request: AnalyzeImageRequest,
    http: HttpClient = Depends(get_http_client),
):
    """
    POST /api/analyze-image - Turn an image into an image-generation prompt

    Uses an OpenAI vision model; known lead-in phrases and surrounding quotes
    are stripped from the result.
    """
    if not request.image_base64:
        raise ValidationError("Image data cannot be empty")

    if not settings.openai_api_key:
        raise ConfigurationError(
            "OpenAI API key is not configured; add OPENAI_API_KEY to your .env file"
        )

    try:
        prompt = await analyze_image(request.image_base64, settings.openai_api_key, http=http)
    except RelayError as e:
        logger.error(f"Image analysis failed: {e}")
        raise RelayError("Image analysis failed, please try again later") from e

    return AnalyzeImageResponse(prompt=prompt)


@router.post("/download-image", response_model=DownloadImageResponse)
async def download_image(
    request: DownloadImageRequest,
    http: HttpClient = Depends(get_http_client),
):
    """POST /api/download-image - Fetch an image server-side and return it as base64"""
    if not request.image_url:
        raise ValidationError("Image URL cannot be empty")

    try:
        response = await http.get(request.image_url, response_type="bytes")
    except RelayError as e:
        logger.error(f"Image download failed for {request.image_url}: {e}")
        raise RelayError("Image download failed") from e

    return DownloadImageResponse(
        data=base64.b64encode(response.data).decode("ascii"),
        content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
    )
