"""
Error types shared by the providers, services and routes.

Every error raised on purpose inherits from RelayError and carries the HTTP
status the API should answer with. The handlers in relay.main render them as
``{"error": message}``.

Usage:
    from relay.utils.exceptions import ValidationError, ConfigurationError

    raise ValidationError("Message cannot be empty")
    raise ConfigurationError("GROQ_API_KEY is not configured")
"""

from typing import Any, Optional

from fastapi import status


class RelayError(Exception):
    """Base exception for all relay errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "", *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(RelayError):
    """Missing or invalid request input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(RelayError):
    """Missing API key, or an unsupported provider or model."""


class ProviderError(RelayError):
    """Upstream provider answered, but not with something usable."""


class EmptyResponseError(ProviderError):
    """Provider response did not contain the expected content field."""


class MalformedResponseError(ProviderError):
    """Provider response body could not be parsed."""


class TransportError(RelayError):
    """Network failure, timeout or non-2xx upstream status.

    ``status`` is the upstream HTTP status (408 for timeouts, None when no
    response was received). ``response`` holds the parsed error body when
    the upstream sent one.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Any = None,
        *,
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.response = response
        self.timed_out = timed_out

    @property
    def retryable(self) -> bool:
        """Network failures, timeouts and 5xx are transient; other 4xx are not."""
        if self.timed_out or self.status is None:
            return True
        return self.status >= 500
