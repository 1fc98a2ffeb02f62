"""Error taxonomy shared by provider clients and the dispatcher."""

from __future__ import annotations

CONFIGURATION_ERROR = "configuration_error"
CONNECTION_ERROR = "connection_error"
TIMEOUT = "timeout"
API_ERROR = "api_error"
FORMAT_ERROR = "format_error"

_TIMEOUT_HINTS = ("timed out", "timeout")


class ProviderMappedError(Exception):
    """Normalized provider exception with a stable error code."""

    def __init__(self, error_code: str, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(ProviderMappedError):
    """Provider, model or key missing. Raised before any network call."""

    def __init__(self, message: str) -> None:
        super().__init__(CONFIGURATION_ERROR, message)


class ProviderConnectionError(ProviderMappedError):
    """DNS, TLS or connect failure."""

    def __init__(self, message: str) -> None:
        super().__init__(CONNECTION_ERROR, message)


class ProviderTimeoutError(ProviderMappedError):
    """Request exceeded its timeout."""

    def __init__(self, message: str) -> None:
        super().__init__(TIMEOUT, message)


class RemoteApiError(ProviderMappedError):
    """Non-200 status returned by the vendor."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(API_ERROR, message)
        self.status_code = status_code


class FormatError(ProviderMappedError):
    """200 status, but the body does not have the vendor's known shape."""

    def __init__(self, message: str = "unexpected response format") -> None:
        super().__init__(FORMAT_ERROR, message)


def is_timeout_message(message: str) -> bool:
    """Return True when an error message describes timeout-like behavior."""
    lowered = message.lower()
    return any(hint in lowered for hint in _TIMEOUT_HINTS)


def map_connection_error(message: str) -> ProviderMappedError:
    """Map a transport failure message to a normalized error."""
    if is_timeout_message(message):
        return ProviderTimeoutError(message)
    return ProviderConnectionError(message)
