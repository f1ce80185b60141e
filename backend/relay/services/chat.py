"""
Single-turn chat: resolve the model and service for a request, look up the
credential, build the (possibly multimodal) user message and call the
provider.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, List, Optional, Union

from relay.config import api_key_env_var, get_api_key, settings
from relay.models.request import ChatOptions, ChatRequest
from relay.models.response import AvailableModelInfo, ChatConfigResponse
from relay.providers.registry import SERVICE_TYPES, create_chat_provider
from relay.services.model_catalog import (
    ModelCapabilities,
    get_available_models,
    get_default_model,
    get_model_capabilities,
    get_service_name,
    get_service_type_by_model,
    get_supported_file_types,
    supports_file_input,
)
from relay.utils.exceptions import ConfigurationError, ValidationError
from relay.utils.http import HttpClient
from relay.utils.message_helpers import build_user_content

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_PROMPT = "请分析这张图片"
DEFAULT_TEXT_PROMPT = "你好"

IMAGE_UNSUPPORTED_WARNING = (
    "提示：当前使用的 {service_name} ({model_name}) 不支持图片识别功能，已忽略图片。"
    "如需使用图片识别，请切换到 Gemini 或 OpenAI GPT-4o 服务。"
)


@dataclass(frozen=True)
class ChatTarget:
    service_type: str
    model: str


def resolve_chat_target(model_id: Optional[str]) -> ChatTarget:
    """
    Pick the service and model for a request.

    An explicit model id must be in the catalog; otherwise the service comes
    from CHAT_SERVICE_TYPE and the model is that service's default.
    """
    if model_id:
        service_type = get_service_type_by_model(model_id)
        if not service_type:
            raise ValidationError(f"Unsupported model: {model_id}")
        return ChatTarget(service_type, model_id)

    service_type = settings.chat_service_type
    return ChatTarget(service_type, get_default_model(service_type))


def require_api_key(service_type: str) -> str:
    """Return the service's API key, failing with the env var to set."""
    if service_type not in SERVICE_TYPES:
        raise ConfigurationError(
            f"Unsupported chat service type: {service_type}", status_code=400
        )

    api_key = get_api_key(service_type)
    if not api_key:
        raise ConfigurationError(
            f"{get_service_name(service_type)} API key is not configured; "
            f"add {api_key_env_var(service_type)} to your .env file"
        )
    return api_key


def build_message_content(
    message: Optional[str],
    image: Optional[str],
    capabilities: ModelCapabilities,
    service_name: str,
) -> tuple[Union[str, List[dict[str, Any]]], str]:
    """
    Build the user message content and an optional warning.

    An image sent to a model without image support is dropped and a warning
    is returned instead of failing the request.
    """
    if image and capabilities.supports_image:
        return build_user_content(message or DEFAULT_IMAGE_PROMPT, image), ""

    if image:
        warning = IMAGE_UNSUPPORTED_WARNING.format(
            service_name=service_name, model_name=capabilities.name
        )
        logger.info(f"Dropping image for model without image support: {capabilities.name}")
        return message or DEFAULT_TEXT_PROMPT, warning

    return message, ""


async def run_chat(request: ChatRequest, http: Optional[HttpClient] = None) -> str:
    """Handle one /api/chat request and return the reply text."""
    if not request.message and not request.image:
        raise ValidationError("Message cannot be empty")

    target = resolve_chat_target(request.model_id)
    api_key = require_api_key(target.service_type)
    capabilities = get_model_capabilities(target.model)

    provider = create_chat_provider(target.service_type, api_key, http=http)

    content, warning = build_message_content(
        request.message, request.image, capabilities, get_service_name(target.service_type)
    )

    reply = await provider.chat(
        [{"role": "user", "content": content}],
        ChatOptions(model=target.model),
    )

    return f"{warning}\n\n{reply}" if warning else reply


def build_chat_config() -> ChatConfigResponse:
    """Describe the default model and list every selectable model."""
    service_type = settings.chat_service_type
    current_model = get_default_model(service_type)
    capabilities = get_model_capabilities(current_model)

    return ChatConfigResponse(
        current_model=current_model,
        service_type=service_type,
        service_name=get_service_name(service_type),
        model_name=capabilities.name,
        model_description=capabilities.description,
        file_input_supported=supports_file_input(current_model),
        accept_types=get_supported_file_types(current_model),
        supports_image=capabilities.supports_image,
        supported_image_types=list(capabilities.supported_image_types),
        supports_document=capabilities.supports_document,
        supported_document_types=list(capabilities.supported_document_types),
        available_models=[
            AvailableModelInfo(**asdict(model))
            for model in get_available_models()
        ],
    )
