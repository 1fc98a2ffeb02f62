"""Shared abstractions for provider clients."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote
from typing import Any, Callable, Dict, Optional

from ai_connectors.core.providers.errors import (
    FormatError,
    ProviderMappedError,
    RemoteApiError,
    map_connection_error,
)
from ai_connectors.core.providers.transport import HttpTransport, HttpxTransport
from ai_connectors.utils.json_utils import safe_parse_json
from ai_connectors.utils.log import get_logger

logger = get_logger()

HeaderBuilder = Callable[[str], Dict[str, str]]
BodyBuilder = Callable[[str, str], Dict[str, Any]]
TextExtractor = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class RequestResult:
    """Normalized outcome of one send operation."""

    success: bool
    response: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "RequestResult":
        return cls(success=True, response=text, error=None)

    @classmethod
    def failure(
        cls,
        error: str,
        *,
        response: Any = None,
        error_code: Optional[str] = None,
    ) -> "RequestResult":
        return cls(success=False, response=response, error=error, error_code=error_code)

    @classmethod
    def from_error(cls, exc: ProviderMappedError, *, response: Any = None) -> "RequestResult":
        return cls.failure(str(exc), response=response, error_code=exc.error_code)

    def as_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "response": self.response, "error": self.error}


@dataclass(frozen=True)
class WireFormat:
    """Vendor-specific constants and codecs for one provider endpoint."""

    provider_id: str
    endpoint: str
    build_headers: HeaderBuilder
    build_body: BodyBuilder
    extract_text: TextExtractor
    timeout: float = 60.0

    def url_for(self, model: str) -> str:
        if "{model}" in self.endpoint:
            return self.endpoint.format(model=quote(model, safe=""))
        return self.endpoint


def extract_error_message(payload: Any, status_code: int) -> str:
    """Vendor ``error.message`` when present, a status-based fallback otherwise."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
    return f"unknown error (code {status_code})"


class ProviderClient:
    """Send one prompt to a provider and normalize the reply into a RequestResult."""

    def __init__(self, wire_format: WireFormat, transport: Optional[HttpTransport] = None) -> None:
        self.wire_format = wire_format
        self.transport = transport or HttpxTransport()

    @property
    def provider_id(self) -> str:
        return self.wire_format.provider_id

    def send(
        self,
        prompt: str,
        model: str,
        api_key: str,
        *,
        timeout: Optional[float] = None,
    ) -> RequestResult:
        wire = self.wire_format
        effective_timeout = timeout if timeout and timeout > 0 else wire.timeout
        logger.debug(
            "[provider_client] Sending request",
            extra={
                "provider": wire.provider_id,
                "model": model,
                "timeout": effective_timeout,
                "prompt_length": len(prompt),
            },
        )

        try:
            http_response = self.transport.post(
                wire.url_for(model),
                wire.build_headers(api_key),
                wire.build_body(prompt, model),
                effective_timeout,
            )
        except ProviderMappedError as exc:
            return RequestResult.failure(f"connection error: {exc}", error_code=exc.error_code)
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "[provider_client] Unexpected transport failure",
                extra={"provider": wire.provider_id, "model": model},
            )
            mapped = map_connection_error(f"{type(exc).__name__}: {exc}")
            return RequestResult.failure(f"connection error: {mapped}", error_code=mapped.error_code)

        return self._normalize(http_response.status_code, http_response.body, model)

    def _normalize(self, status_code: int, body: str, model: str) -> RequestResult:
        wire = self.wire_format
        payload = safe_parse_json(body)

        if status_code != 200:
            api_error = RemoteApiError(extract_error_message(payload, status_code), status_code)
            logger.warning(
                "[provider_client] API error",
                extra={"provider": wire.provider_id, "model": model, "status": status_code},
            )
            return RequestResult.failure(
                f"api error: {api_error}", response=payload, error_code=api_error.error_code
            )

        try:
            text = wire.extract_text(payload)
        except (KeyError, IndexError, TypeError, AttributeError):
            text = None
        if not isinstance(text, str):
            logger.warning(
                "[provider_client] Unexpected response format",
                extra={"provider": wire.provider_id, "model": model, "body_length": len(body)},
            )
            return RequestResult.from_error(FormatError(), response=payload)

        logger.debug(
            "[provider_client] Response received",
            extra={"provider": wire.provider_id, "model": model, "response_length": len(text)},
        )
        return RequestResult.ok(text)


__all__ = [
    "ProviderClient",
    "RequestResult",
    "WireFormat",
    "extract_error_message",
]
