"""
Resilient HTTP client for upstream provider calls.

Wraps httpx with a per-attempt timeout, retries with exponential backoff for
transient failures, and typed errors carrying the upstream status.

Usage:
    from relay.utils.http import HttpClient

    client = HttpClient()
    response = await client.post(url, {"model": "gpt-4o"}, headers=headers, retries=2)
    response.data  # parsed JSON
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Literal, Optional

import httpx
import orjson

from relay.config import settings
from relay.utils.exceptions import MalformedResponseError, TransportError, ValidationError

logger = logging.getLogger(__name__)

ResponseType = Literal["json", "bytes"]

# Base delay in seconds; attempt i waits RETRY_BASE_DELAY * 2**i
RETRY_BASE_DELAY = 1.0


@dataclass
class HttpResponse:
    """Successful upstream response."""

    data: Any
    status: int
    headers: httpx.Headers


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after the given 0-indexed attempt fails."""
    return RETRY_BASE_DELAY * (2 ** attempt)


def _parse_error_body(response: httpx.Response) -> Any:
    """Return the JSON error body if there is one, else the raw text."""
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.text


class HttpClient:
    """JSON HTTP client with timeout, retry and backoff.

    A fresh httpx.AsyncClient is opened per attempt, so instances hold no
    connection state and can be shared across requests.
    """

    def __init__(
        self,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._sleep = sleep

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        timeout: Optional[float] = None,
        retries: int = 0,
        response_type: ResponseType = "json",
    ) -> HttpResponse:
        """
        Send a request, retrying transient failures.

        Args:
            url: Absolute request URL
            method: HTTP method
            headers: Extra headers; override the JSON Content-Type default
            body: dict/list bodies are JSON-encoded, str bodies sent as-is.
                Ignored for GET.
            timeout: Per-attempt timeout in seconds (default: settings.request_timeout)
            retries: Extra attempts after the first for transient failures
            response_type: "json" to parse the body, "bytes" for raw content

        Returns:
            HttpResponse with parsed data, status and headers

        Raises:
            TransportError: network failure, timeout (status 408) or non-2xx status
            MalformedResponseError: 2xx response whose body is not valid JSON
            ValidationError: the URL cannot be parsed (never retried)
            ValueError: retries is negative
        """
        if retries < 0:
            raise ValueError(f"retries must be >= 0, got {retries}")

        method = method.upper()
        timeout = settings.request_timeout if timeout is None else timeout

        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        content: Optional[bytes] = None
        if body is not None and method != "GET":
            content = body.encode() if isinstance(body, str) else orjson.dumps(body)

        last_error: Optional[TransportError] = None
        for attempt in range(retries + 1):
            try:
                return await self._attempt(
                    method, url, request_headers, content, timeout, response_type
                )
            except TransportError as e:
                last_error = e
                if attempt == retries or not e.retryable:
                    break
                delay = backoff_delay(attempt)
                logger.warning(
                    f"{method} {_safe_url(url)} failed ({e}); "
                    f"retrying in {delay:.0f}s ({attempt + 1}/{retries})"
                )
                await self._sleep(delay)

        raise last_error

    async def get(self, url: str, **kwargs: Any) -> HttpResponse:
        return await self.request(url, method="GET", **kwargs)

    async def post(self, url: str, body: Any = None, **kwargs: Any) -> HttpResponse:
        return await self.request(url, method="POST", body=body, **kwargs)

    async def _attempt(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        content: Optional[bytes],
        timeout: float,
        response_type: ResponseType,
    ) -> HttpResponse:
        """Run a single attempt bounded by the timeout."""
        try:
            async with httpx.AsyncClient(
                timeout=timeout, transport=self._transport
            ) as client:
                response = await asyncio.wait_for(
                    client.request(method, url, headers=headers, content=content),
                    timeout=timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise TransportError("Request timed out", 408, timed_out=True) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Network error: {e}") from e
        except httpx.InvalidURL as e:
            raise ValidationError(f"Invalid URL: {_safe_url(url)}") from e

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                response.status_code,
                _parse_error_body(response),
            )

        if response_type == "bytes":
            data = response.content
        else:
            try:
                data = orjson.loads(response.content)
            except orjson.JSONDecodeError as e:
                raise MalformedResponseError(
                    f"Malformed JSON response from {_safe_url(url)}"
                ) from e

        return HttpResponse(data=data, status=response.status_code, headers=response.headers)


def _safe_url(url: str) -> str:
    """Drop the query string so API keys passed as parameters never hit the logs."""
    return url.split("?", 1)[0]


# Shared default instance
http_client = HttpClient()


def get_http_client() -> HttpClient:
    """FastAPI dependency returning the shared client (overridden in tests)."""
    return http_client
