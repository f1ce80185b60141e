"""
Chat provider for services that speak OpenAI's chat-completions format
(OpenAI, DeepSeek, Groq, GLM).
"""

import logging
from typing import Optional, Sequence

from relay.models.request import ChatOptions
from relay.providers.base import BaseChatProvider, MessageInput, ProviderConfig, dig
from relay.utils.exceptions import EmptyResponseError
from relay.utils.http import HttpClient
from relay.utils.message_helpers import as_message_dicts

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(BaseChatProvider):
    """Provider for any OpenAI-compatible chat-completions API.

    Endpoint, default model and display name come from a ProviderConfig, so
    one class serves every service sharing the wire format.
    """

    def __init__(
        self,
        api_key: str,
        config: ProviderConfig,
        name: str = "openai-compatible",
        http: Optional[HttpClient] = None,
    ):
        """
        Initialize an OpenAI-compatible provider.

        Args:
            api_key: Bearer token for the service
            config: Endpoint, default model and display name
            name: Provider identifier (e.g. "groq")
            http: HTTP client to use (shared default when omitted)
        """
        super().__init__(api_key, http)
        self.name = name
        self.config = config
        self.display_name = config.display_name
        self.default_model = config.default_model
        self.base_url = config.endpoint.rstrip("/")

    async def chat(
        self, messages: Sequence[MessageInput], options: Optional[ChatOptions] = None
    ) -> str:
        """Send messages verbatim to /chat/completions and return the reply."""
        model, temperature, max_tokens = self.resolve_options(options)
        payload = {
            "model": model,
            "messages": as_message_dicts(messages),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        response = await self._http.post(
            f"{self.base_url}/chat/completions",
            payload,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            retries=self.retries,
        )

        message = dig(response.data, "choices", 0, "message", "content")
        if not message:
            logger.error(f"{self.display_name} returned no content for model {model}")
            raise EmptyResponseError(f"{self.display_name} returned an empty message")

        return message
