from typing import List, Literal

from relay.models.request import CamelModel


class ChatResponse(CamelModel):
    message: str


class ErrorResponse(CamelModel):
    error: str


class AvailableModelInfo(CamelModel):
    """Catalog entry shown in the front end's model picker"""
    id: str
    name: str
    service_type: str
    service_name: str
    description: str
    supports_image: bool
    supports_document: bool
    is_free: bool
    speed: Literal["fast", "normal", "slow"]


class ChatConfigResponse(CamelModel):
    current_model: str
    service_type: str
    service_name: str
    model_name: str
    model_description: str
    file_input_supported: bool
    accept_types: str  # value for the file input's accept attribute
    supports_image: bool
    supported_image_types: List[str]
    supports_document: bool
    supported_document_types: List[str]
    available_models: List[AvailableModelInfo]


class GenerateImageResponse(CamelModel):
    image_url: str


class AnalyzeImageResponse(CamelModel):
    prompt: str


class DownloadImageResponse(CamelModel):
    data: str  # base64
    content_type: str


class HealthResponse(CamelModel):
    status: Literal["healthy"]
    providers: List[str]
    default_service: str
