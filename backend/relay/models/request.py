from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional, Union


class CamelModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TextContent(BaseModel):
    """Text content part of a multimodal message"""
    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    """Remote URL or base64 data URI of an image"""
    url: str
    detail: Optional[Literal["auto", "low", "high"]] = None


class ImageUrlContent(BaseModel):
    """Image content part of a multimodal message"""
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Union[TextContent, ImageUrlContent]


class ChatMessage(BaseModel):
    """Message with either text-only (string) or multimodal (array) content"""
    role: Literal["system", "user", "assistant"]
    content: Union[str, List[ContentPart]]

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "role": "user",
                    "content": "What is the capital of France?"
                },
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": "What's in this image?"},
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": "data:image/jpeg;base64,iVBORw0KGgoAAAANSUhEUgAA...",
                                "detail": "auto"
                            }
                        }
                    ]
                }
            ]
        }
    )


class ChatOptions(BaseModel):
    """Per-call overrides; unset fields fall back to provider defaults"""
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    model: Optional[str] = None


class ChatRequest(CamelModel):
    message: Optional[str] = None
    image: Optional[str] = None  # base64 data URI
    model_id: Optional[str] = None


class GenerateImageRequest(CamelModel):
    prompt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class AnalyzeImageRequest(CamelModel):
    image_base64: Optional[str] = None  # raw base64, no data URI prefix
    width: Optional[int] = None
    height: Optional[int] = None


class DownloadImageRequest(CamelModel):
    image_url: Optional[str] = None
