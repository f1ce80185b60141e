from types import MappingProxyType
from typing import List, Mapping, Optional

from relay.config import get_api_key
from relay.providers.base import BaseChatProvider, ProviderConfig
from relay.providers.gemini import GeminiProvider
from relay.providers.openai_compatible import OpenAICompatibleProvider
from relay.utils.exceptions import ConfigurationError
from relay.utils.http import HttpClient

# Provider identifiers
DEEPSEEK = "deepseek"
OPENAI = "openai"
GROQ = "groq"
GEMINI = "gemini"
GLM = "glm"

SERVICE_TYPES = (DEEPSEEK, OPENAI, GROQ, GEMINI, GLM)

# OpenAI-compatible services; Gemini has its own wire format
PROVIDER_CONFIGS: Mapping[str, ProviderConfig] = MappingProxyType({
    DEEPSEEK: ProviderConfig(
        endpoint="https://api.deepseek.com",
        default_model="deepseek-chat",
        display_name="DeepSeek",
    ),
    OPENAI: ProviderConfig(
        endpoint="https://api.openai.com/v1",
        default_model="gpt-3.5-turbo",
        display_name="OpenAI",
    ),
    GROQ: ProviderConfig(
        endpoint="https://api.groq.com/openai/v1",
        default_model="llama-3.3-70b-versatile",
        display_name="Groq",
    ),
    GLM: ProviderConfig(
        endpoint="https://open.bigmodel.cn/api/paas/v4",
        default_model="glm-4-flash",
        display_name="智谱 AI",
    ),
})


def create_chat_provider(
    service_type: str, api_key: str, http: Optional[HttpClient] = None
) -> BaseChatProvider:
    """
    Build the chat provider for a service identifier.

    Raises:
        ConfigurationError: the identifier is not a known chat service
    """
    if service_type == GEMINI:
        return GeminiProvider(api_key, http=http)

    config = PROVIDER_CONFIGS.get(service_type)
    if config is None:
        raise ConfigurationError(
            f"Unsupported chat service type: {service_type}", status_code=400
        )

    return OpenAICompatibleProvider(api_key, config, name=service_type, http=http)


def get_configured_service_types() -> List[str]:
    """Return the services that currently have an API key."""
    return [service for service in SERVICE_TYPES if get_api_key(service)]
