"""Message format conversion utilities for multi-provider image support."""

import logging
import re
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

_DATA_URL_MIME = re.compile(r'data:(image/[^;]+);')

logger = logging.getLogger(__name__)


def as_message_dict(message: Union[BaseModel, dict[str, Any]]) -> dict[str, Any]:
    """
    Normalize a ChatMessage model or a plain dict to a plain dict.

    Unset optional fields (e.g. an image ``detail``) are dropped so the
    payload sent upstream only carries what the caller provided.
    """
    if isinstance(message, BaseModel):
        return message.model_dump(exclude_none=True)
    return message


def as_message_dicts(messages: Iterable[Union[BaseModel, dict[str, Any]]]) -> list[dict[str, Any]]:
    return [as_message_dict(m) for m in messages]


def get_mime_type_from_data_url(data_url: str) -> str:
    """
    Extract the image MIME type from a data URL.

    Examples:
        >>> get_mime_type_from_data_url("data:image/png;base64,iVBORw0...")
        "image/png"
        >>> get_mime_type_from_data_url("invalid")
        "image/jpeg"  # Default fallback
    """
    match = _DATA_URL_MIME.match(data_url)
    if match:
        return match.group(1)
    return DEFAULT_IMAGE_MIME_TYPE


def split_data_url(data_url: str) -> tuple[str, str]:
    """
    Split data URL into MIME type and base64 data.

    Examples:
        >>> split_data_url("data:image/png;base64,iVBORw0...")
        ("image/png", "iVBORw0...")
    """
    parts = data_url.split(',', 1)
    if len(parts) == 2:
        return get_mime_type_from_data_url(data_url), parts[1]
    return DEFAULT_IMAGE_MIME_TYPE, data_url  # Fallback


def to_gemini_role(role: str) -> str:
    """Gemini only knows "user" and "model"."""
    return "model" if role == "assistant" else "user"


def to_gemini_part(item: dict[str, Any]) -> Optional[dict[str, Any]]:
    """
    Convert one OpenAI-style content part to a Gemini part.

    Gemini only takes inline base64 images, so an image given as a remote
    URL is skipped (returns None).
    """
    if item.get("type") == "image_url" and item.get("image_url"):
        url = item["image_url"].get("url", "")
        if not url.startswith("data:"):
            logger.warning(f"Skipping image part Gemini cannot inline: {url[:80]}")
            return None
        mime_type, data = split_data_url(url)
        return {"inlineData": {"mimeType": mime_type, "data": data}}
    if item.get("type") == "text":
        return {"text": item.get("text") or ""}
    return {"text": ""}


def format_for_gemini(message: dict[str, Any]) -> dict[str, Any]:
    """
    Convert message to Gemini's ``contents`` entry.

    Gemini format for images:
    {
        "role": "user",  # "assistant" becomes "model", everything else "user"
        "parts": [
            {"text": "What's in this image?"},
            {
                "inlineData": {
                    "mimeType": "image/jpeg",
                    "data": "iVBORw0KGgoAAAANSUhEUgAA..."  # No data URL prefix
                }
            }
        ]
    }

    Args:
        message: OpenAI-format message dict

    Returns:
        Gemini-formatted message
    """
    content = message.get("content")

    if isinstance(content, list):
        converted = (to_gemini_part(item) for item in content if isinstance(item, dict))
        parts = [part for part in converted if part is not None]
    else:
        parts = [{"text": content or ""}]

    return {"role": to_gemini_role(message.get("role", "user")), "parts": parts}


def build_user_content(
    text: str, image_url: str, detail: Optional[str] = "auto"
) -> list[dict[str, Any]]:
    """Build a text + image multimodal content list in OpenAI format."""
    image: dict[str, Any] = {"url": image_url}
    if detail:
        image["detail"] = detail
    return [
        {"type": "text", "text": text},
        {"type": "image_url", "image_url": image},
    ]
