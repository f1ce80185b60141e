import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relay.config import settings, warn_missing_default_key
from relay.models.response import ErrorResponse
from relay.routes import chat, health, images
from relay.utils.exceptions import RelayError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle events"""
    warn_missing_default_key()
    logger.info(f"Relay started, default chat service: {settings.chat_service_type}")
    yield


app = FastAPI(
    title="AI Relay API",
    description="Chat and image generation proxy for OpenAI, DeepSeek, Groq, Gemini and GLM",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware for the front end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    """Render expected failures as {error} with their status code."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors."""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content=ErrorResponse(error=f"Invalid request: {detail}").model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Last resort: never let an error escape as a bare 500 page."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error").model_dump())


# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(images.router, prefix="/api", tags=["images"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("relay.main:app", host=settings.host, port=settings.port)
