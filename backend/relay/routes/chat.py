"""
Chat routes.

POST /api/chat        - single-turn chat with optional image
GET  /api/chat/config - default model, its capabilities and the model catalog
"""

import logging

from fastapi import APIRouter, Depends

from relay.models.request import ChatRequest
from relay.models.response import ChatConfigResponse, ChatResponse
from relay.services.chat import build_chat_config, run_chat
from relay.utils.http import HttpClient, get_http_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    http: HttpClient = Depends(get_http_client),
):
    """
    POST /api/chat - Send one message to the selected model

    Body: {message, image?, modelId?}. The model's service is resolved from
    modelId, or from CHAT_SERVICE_TYPE when modelId is omitted. An image sent
    to a model without image support is dropped and a warning is prepended
    to the reply.
    """
    reply = await run_chat(request, http=http)
    return ChatResponse(message=reply)


@router.get("/chat/config", response_model=ChatConfigResponse)
async def chat_config():
    """GET /api/chat/config - Current model, accepted file types and all available models"""
    return build_chat_config()
