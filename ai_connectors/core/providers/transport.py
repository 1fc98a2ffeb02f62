"""Synchronous HTTP transport used by provider clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Protocol

import httpx

from ai_connectors.core.providers.errors import ProviderTimeoutError, map_connection_error
from ai_connectors.utils.log import get_logger

logger = get_logger()


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str


class HttpTransport(Protocol):
    """POST a JSON body and return the raw status and text.

    Implementations raise ``ProviderConnectionError`` or ``ProviderTimeoutError``
    when no HTTP response was obtained.
    """

    def post(
        self,
        url: str,
        headers: Mapping[str, str],
        json_body: Dict[str, Any],
        timeout: float,
    ) -> HttpResponse: ...


class HttpxTransport:
    """Transport backed by a short-lived ``httpx.Client`` per request."""

    def post(
        self,
        url: str,
        headers: Mapping[str, str],
        json_body: Dict[str, Any],
        timeout: float,
    ) -> HttpResponse:
        try:
            with httpx.Client(timeout=timeout) as client:
                response = client.post(url, headers=dict(headers), json=json_body)
        except httpx.TimeoutException as exc:
            message = str(exc) or f"request timed out after {timeout:g}s"
            logger.warning("[transport] Request timed out", extra={"url": url, "timeout": timeout})
            raise ProviderTimeoutError(message) from exc
        except httpx.HTTPError as exc:
            message = str(exc) or type(exc).__name__
            logger.warning(
                "[transport] Request failed: %s: %s",
                type(exc).__name__,
                message,
                extra={"url": url},
            )
            raise map_connection_error(message) from exc
        return HttpResponse(status_code=response.status_code, body=response.text)


__all__ = ["HttpResponse", "HttpTransport", "HttpxTransport"]
