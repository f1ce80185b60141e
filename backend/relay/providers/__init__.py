from relay.providers.base import BaseChatProvider, ProviderConfig
from relay.providers.registry import PROVIDER_CONFIGS, create_chat_provider

__all__ = ["BaseChatProvider", "ProviderConfig", "PROVIDER_CONFIGS", "create_chat_provider"]
