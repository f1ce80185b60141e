"""
Static model catalog: per-model input capabilities, the list of models the
front end can pick from, and model -> chat service resolution.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Literal, Mapping, Optional, Tuple

from relay.providers.gemini import GEMINI_DEFAULT_MODEL
from relay.providers.registry import (
    DEEPSEEK,
    GEMINI,
    GLM,
    GROQ,
    OPENAI,
    PROVIDER_CONFIGS,
)

Speed = Literal["fast", "normal", "slow"]

# ============================================================================
# Capabilities
# ============================================================================


@dataclass(frozen=True)
class ModelCapabilities:
    """Which input modalities a model accepts."""

    name: str
    supports_image: bool
    supported_image_types: Tuple[str, ...]
    supports_document: bool
    supported_document_types: Tuple[str, ...]
    description: str


_GEMINI_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/heic", "image/heif")
_GEMINI_DOCUMENT_TYPES = (
    "application/pdf",
    "text/plain",
    "text/html",
    "text/css",
    "text/javascript",
    "application/json",
)
_OPENAI_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
_BASIC_IMAGE_TYPES = ("image/jpeg", "image/png")


def _text_only(name: str, description: str) -> ModelCapabilities:
    return ModelCapabilities(name, False, (), False, (), description)


def _vision(name: str, image_types: Tuple[str, ...], description: str) -> ModelCapabilities:
    return ModelCapabilities(name, True, image_types, False, (), description)


def _multimodal(name: str, description: str) -> ModelCapabilities:
    return ModelCapabilities(
        name, True, _GEMINI_IMAGE_TYPES, True, _GEMINI_DOCUMENT_TYPES, description
    )


MODEL_CAPABILITIES: Mapping[str, ModelCapabilities] = MappingProxyType({
    # Gemini
    "gemini-1.5-flash": _multimodal(
        "Gemini 1.5 Flash", "Google Gemini fast tier, accepts images and documents"
    ),
    "gemini-1.5-pro": _multimodal(
        "Gemini 1.5 Pro", "Google Gemini pro tier, accepts images and documents"
    ),
    # OpenAI
    "gpt-4o": _vision("GPT-4o", _OPENAI_IMAGE_TYPES, "OpenAI GPT-4o, accepts images"),
    "gpt-4o-mini": _vision(
        "GPT-4o Mini", _OPENAI_IMAGE_TYPES, "OpenAI GPT-4o Mini, accepts images"
    ),
    "gpt-4-vision-preview": _vision(
        "GPT-4 Vision", _OPENAI_IMAGE_TYPES, "OpenAI GPT-4 Vision preview, accepts images"
    ),
    "gpt-4": _text_only("GPT-4", "OpenAI GPT-4, text only"),
    "gpt-3.5-turbo": _text_only("GPT-3.5 Turbo", "OpenAI GPT-3.5 Turbo, text only"),
    # Zhipu GLM
    "glm-4": _text_only("GLM-4", "Zhipu GLM-4, text only"),
    "glm-4-flash": _text_only("GLM-4 Flash", "Zhipu GLM-4 fast tier, text only"),
    "glm-4v": _vision("GLM-4V", _BASIC_IMAGE_TYPES, "Zhipu GLM-4V, accepts images"),
    # Groq
    "llama-3.3-70b-versatile": _text_only("Llama 3.3 70B", "Groq Llama 3.3 70B, text only"),
    "llama-3.1-8b-instant": _text_only("Llama 3.1 8B", "Groq Llama 3.1 8B, text only"),
    "mixtral-8x7b-32768": _text_only("Mixtral 8x7B", "Groq Mixtral 8x7B, text only"),
    "gemma2-9b-it": _text_only("Gemma 2 9B", "Groq Gemma 2 9B, text only"),
    "llama-3.2-11b-vision-preview": _vision(
        "Llama 3.2 11B Vision", _BASIC_IMAGE_TYPES, "Groq Llama 3.2 11B Vision, accepts images"
    ),
    "llama-3.2-90b-vision-preview": _vision(
        "Llama 3.2 90B Vision", _BASIC_IMAGE_TYPES, "Groq Llama 3.2 90B Vision, accepts images"
    ),
    # DeepSeek
    "deepseek-chat": _text_only("DeepSeek Chat", "DeepSeek Chat, text only"),
})


def get_model_capabilities(model_id: str) -> ModelCapabilities:
    """Return the capabilities of a model, or a text-only record for unknown ids."""
    capabilities = MODEL_CAPABILITIES.get(model_id)
    if capabilities is None:
        return _text_only(model_id, "Unknown model")
    return capabilities


def get_supported_file_types(model_id: str) -> str:
    """Comma-separated MIME types for a file input's accept attribute."""
    capabilities = get_model_capabilities(model_id)
    all_types = capabilities.supported_image_types + capabilities.supported_document_types
    return ",".join(dict.fromkeys(all_types))


def supports_file_input(model_id: str) -> bool:
    """Whether the model accepts any file input at all."""
    capabilities = get_model_capabilities(model_id)
    return capabilities.supports_image or capabilities.supports_document


# ============================================================================
# Available models
# ============================================================================


@dataclass(frozen=True)
class AvailableModel:
    """A model the front end can select, with the service that serves it."""

    id: str
    name: str
    service_type: str
    service_name: str
    description: str
    supports_image: bool
    supports_document: bool
    is_free: bool
    speed: Speed


SERVICE_NAMES: Mapping[str, str] = MappingProxyType({
    GROQ: "Groq",
    GEMINI: "Google Gemini",
    GLM: "智谱 AI",
    OPENAI: "OpenAI",
    DEEPSEEK: "DeepSeek",
})

DEFAULT_MODELS: Mapping[str, str] = MappingProxyType({
    **{service: config.default_model for service, config in PROVIDER_CONFIGS.items()},
    GEMINI: GEMINI_DEFAULT_MODEL,
})

# Model used when the configured service type is not recognised
FALLBACK_MODEL = DEFAULT_MODELS[GROQ]

AVAILABLE_MODELS: Tuple[AvailableModel, ...] = (
    # Groq (free, fast)
    AvailableModel("llama-3.3-70b-versatile", "Llama 3.3 70B", GROQ, "Groq",
                   "Meta's latest large model, very fast (free)", False, False, True, "fast"),
    AvailableModel("llama-3.1-8b-instant", "Llama 3.1 8B", GROQ, "Groq",
                   "Lightweight fast model (free)", False, False, True, "fast"),
    AvailableModel("mixtral-8x7b-32768", "Mixtral 8x7B", GROQ, "Groq",
                   "Mixtral mixture-of-experts model (free)", False, False, True, "fast"),
    AvailableModel("gemma2-9b-it", "Gemma 2 9B", GROQ, "Groq",
                   "Google Gemma 2 (free)", False, False, True, "fast"),
    # Gemini (free, multimodal)
    AvailableModel("gemini-1.5-flash", "Gemini 1.5 Flash", GEMINI, "Google",
                   "Google's latest model, accepts images and documents (free)",
                   True, True, True, "fast"),
    AvailableModel("gemini-1.5-pro", "Gemini 1.5 Pro", GEMINI, "Google",
                   "Google pro tier, most capable (free)", True, True, True, "normal"),
    # Zhipu AI (free quota)
    AvailableModel("glm-4-flash", "GLM-4 Flash", GLM, "智谱AI",
                   "Zhipu fast tier, strong Chinese (free quota)", False, False, True, "fast"),
    AvailableModel("glm-4", "GLM-4", GLM, "智谱AI",
                   "Zhipu standard tier, strong Chinese (free quota)", False, False, True, "normal"),
    # OpenAI (paid)
    AvailableModel("gpt-3.5-turbo", "GPT-3.5 Turbo", OPENAI, "OpenAI",
                   "OpenAI classic model (paid)", False, False, False, "fast"),
    AvailableModel("gpt-4", "GPT-4", OPENAI, "OpenAI",
                   "OpenAI strong model (paid)", False, False, False, "normal"),
    AvailableModel("gpt-4o", "GPT-4o", OPENAI, "OpenAI",
                   "OpenAI multimodal model, accepts images (paid)", True, False, False, "normal"),
    # DeepSeek (paid)
    AvailableModel("deepseek-chat", "DeepSeek Chat", DEEPSEEK, "DeepSeek",
                   "DeepSeek model (requires balance)", False, False, False, "normal"),
)


def get_available_models() -> List[AvailableModel]:
    """Return all selectable chat models."""
    return list(AVAILABLE_MODELS)


def get_service_type_by_model(model_id: str) -> Optional[str]:
    """Return the chat service serving a model id, or None if it is not listed."""
    for model in AVAILABLE_MODELS:
        if model.id == model_id:
            return model.service_type
    return None


def get_default_model(service_type: str) -> str:
    """Default model of a service; Groq's default for unknown services."""
    return DEFAULT_MODELS.get(service_type, FALLBACK_MODEL)


def get_service_name(service_type: str) -> str:
    return SERVICE_NAMES.get(service_type, service_type)
