from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from relay.config import settings
from relay.models.request import ChatMessage, ChatOptions
from relay.utils.http import HttpClient, http_client

# Defaults applied when ChatOptions leaves a field unset
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000

MessageInput = Union[ChatMessage, dict[str, Any]]


@dataclass(frozen=True)
class ProviderConfig:
    """Static settings of an OpenAI-compatible chat service."""

    endpoint: str
    default_model: str
    display_name: str


class BaseChatProvider(ABC):
    """Abstract base class for chat providers"""

    name: str  # Provider identifier: "openai", "deepseek", "groq", "glm", "gemini"
    display_name: str = ""
    default_model: str = ""

    def __init__(self, api_key: str, http: Optional[HttpClient] = None):
        self.api_key = api_key
        self._http = http or http_client

    @property
    def retries(self) -> int:
        """Number of retries for transient upstream failures."""
        return settings.provider_retries

    def resolve_options(self, options: Optional[ChatOptions]) -> tuple[str, float, int]:
        """Return (model, temperature, max_tokens) with provider defaults filled in."""
        options = options or ChatOptions()
        model = options.model or self.default_model
        temperature = DEFAULT_TEMPERATURE if options.temperature is None else options.temperature
        max_tokens = options.max_tokens or DEFAULT_MAX_TOKENS
        return model, temperature, max_tokens

    @abstractmethod
    async def chat(
        self, messages: Sequence[MessageInput], options: Optional[ChatOptions] = None
    ) -> str:
        """Send the conversation and return the reply text"""
        pass


def dig(data: Any, *path: Union[str, int]) -> Any:
    """
    Walk nested dicts/lists, returning None as soon as a step is missing.

    Examples:
        >>> dig({"choices": [{"message": {"content": "hi"}}]}, "choices", 0, "message", "content")
        "hi"
        >>> dig({"choices": []}, "choices", 0, "message")
        None
    """
    for key in path:
        if isinstance(key, int):
            if not isinstance(data, list) or len(data) <= key:
                return None
        elif not isinstance(data, dict):
            return None
        data = data[key] if isinstance(key, int) else data.get(key)
    return data

