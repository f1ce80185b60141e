import logging
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


def setup_logging():
    """Configure application logging."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# Initialize logging on import
setup_logging()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # API Keys (server-side only), one per chat service
    openai_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    glm_api_key: Optional[str] = None

    # Chat service used when the client does not pick a model
    chat_service_type: str = "groq"

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: List[str] = ["*"]

    # Outbound request settings
    request_timeout: float = 60.0
    provider_retries: int = Field(default=0, ge=0, le=3)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def api_key_env_var(service_type: str) -> str:
    """Name of the environment variable holding the key for a chat service."""
    return f"{service_type.upper()}_API_KEY"


def get_api_key(service_type: str) -> Optional[str]:
    """Return the configured API key for a chat service, or None."""
    key = getattr(settings, f"{service_type}_api_key", None)
    return key or None


def warn_missing_default_key():
    """Log a warning when the default chat service has no API key."""
    service_type = settings.chat_service_type
    if not get_api_key(service_type):
        logger.warning(
            f"No API key for the default chat service \"{service_type}\"; "
            f"set {api_key_env_var(service_type)} in your .env file"
        )


settings = Settings()
