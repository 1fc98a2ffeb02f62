"""Provider client registry.

Every provider id maps to exactly one wire format; adding a provider means adding
one entry here and one catalog entry.
"""

from __future__ import annotations

from typing import Dict, Optional

from ai_connectors.core.providers.anthropic import ANTHROPIC
from ai_connectors.core.providers.base import ProviderClient, RequestResult, WireFormat
from ai_connectors.core.providers.gemini import GEMINI
from ai_connectors.core.providers.openai import GROK, MISTRAL, OPENAI
from ai_connectors.core.providers.transport import HttpTransport
from ai_connectors.utils.log import get_logger

logger = get_logger()

WIRE_FORMATS: Dict[str, WireFormat] = {
    "openai": OPENAI,
    "anthropic": ANTHROPIC,
    "mistral": MISTRAL,
    "gemini": GEMINI,
    # Older settings used "google" as the Gemini provider id.
    "google": GEMINI,
    "grok": GROK,
}


def get_provider_client(
    provider_id: str, transport: Optional[HttpTransport] = None
) -> Optional[ProviderClient]:
    """Return a client for the provider, or None when no implementation exists."""
    wire_format = WIRE_FORMATS.get(provider_id)
    if wire_format is None:
        logger.warning("[providers] Unsupported provider", extra={"provider": provider_id})
        return None
    return ProviderClient(wire_format, transport=transport)


def build_clients(transport: Optional[HttpTransport] = None) -> Dict[str, ProviderClient]:
    """One client per registered provider id, sharing a transport."""
    return {
        provider_id: ProviderClient(wire_format, transport=transport)
        for provider_id, wire_format in WIRE_FORMATS.items()
    }


__all__ = [
    "ProviderClient",
    "RequestResult",
    "WIRE_FORMATS",
    "WireFormat",
    "build_clients",
    "get_provider_client",
]
