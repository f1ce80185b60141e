import logging
from typing import Optional, Sequence

from relay.models.request import ChatOptions
from relay.providers.base import BaseChatProvider, MessageInput, dig
from relay.utils.exceptions import EmptyResponseError
from relay.utils.http import HttpClient
from relay.utils.message_helpers import as_message_dicts, format_for_gemini

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1"
GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"


class GeminiProvider(BaseChatProvider):
    name = "gemini"
    display_name = "Google Gemini"
    default_model = GEMINI_DEFAULT_MODEL

    def __init__(
        self,
        api_key: str,
        http: Optional[HttpClient] = None,
        base_url: str = GEMINI_ENDPOINT,
    ):
        super().__init__(api_key, http)
        self.base_url = base_url.rstrip("/")

    async def chat(
        self, messages: Sequence[MessageInput], options: Optional[ChatOptions] = None
    ) -> str:
        """Call generateContent with Gemini's contents/parts schema."""
        model, temperature, max_tokens = self.resolve_options(options)

        # Remap roles and inline images as base64 parts
        contents = [format_for_gemini(msg) for msg in as_message_dicts(messages)]

        payload = {
            "contents": contents,
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }

        url = f"{self.base_url}/models/{model}:generateContent?key={self.api_key}"
        response = await self._http.post(
            url,
            payload,
            headers={"Content-Type": "application/json"},
            retries=self.retries,
        )

        text = dig(response.data, "candidates", 0, "content", "parts", 0, "text")
        if not text:
            logger.error(f"Gemini returned no text for model {model}")
            raise EmptyResponseError("Gemini returned an empty response")

        return text
