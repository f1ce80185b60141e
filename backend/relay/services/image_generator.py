"""Image generation through OpenAI's images API (DALL-E)."""

import logging
from typing import Literal, Optional

from pydantic import BaseModel

from relay.providers.base import dig
from relay.providers.registry import OPENAI, PROVIDER_CONFIGS
from relay.utils.exceptions import ConfigurationError, ProviderError
from relay.utils.http import HttpClient, http_client

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "dall-e-3"

# DALL-E 3 only accepts these sizes
SQUARE_SIZE = "1024x1024"
LANDSCAPE_SIZE = "1792x1024"
PORTRAIT_SIZE = "1024x1792"


class ImageGenerateOptions(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None
    quality: Literal["standard", "hd"] = "standard"
    style: Optional[str] = None
    model: Optional[str] = None


def choose_image_size(width: Optional[int] = None, height: Optional[int] = None) -> str:
    """Map the requested dimensions to the closest allowed preset by orientation."""
    if width and height:
        if width > height:
            return LANDSCAPE_SIZE
        if height > width:
            return PORTRAIT_SIZE
    return SQUARE_SIZE


class OpenAIImageGenerator:
    """Generates one image per prompt and returns its URL."""

    def __init__(self, api_key: str, http: Optional[HttpClient] = None):
        self.api_key = api_key
        self._http = http or http_client
        self.base_url = PROVIDER_CONFIGS[OPENAI].endpoint

    async def generate(self, prompt: str, options: Optional[ImageGenerateOptions] = None) -> str:
        options = options or ImageGenerateOptions()
        payload = {
            "model": options.model or DEFAULT_IMAGE_MODEL,
            "prompt": prompt,
            "n": 1,
            "size": choose_image_size(options.width, options.height),
            "quality": options.quality,
        }
        if options.style:
            payload["style"] = options.style

        response = await self._http.post(
            f"{self.base_url}/images/generations",
            payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

        image_url = dig(response.data, "data", 0, "url")
        if not image_url:
            logger.error("Image generation returned no result")
            raise ProviderError("No image was produced")

        return image_url


def create_image_generator(api_key: Optional[str], http: Optional[HttpClient] = None) -> OpenAIImageGenerator:
    """Build the image generator, rejecting a missing API key."""
    if not api_key:
        raise ConfigurationError("OpenAI API key is required; add OPENAI_API_KEY to your .env file")
    return OpenAIImageGenerator(api_key, http=http)
