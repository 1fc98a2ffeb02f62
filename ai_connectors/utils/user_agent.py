"""User-Agent generation for outbound provider requests.

Format: ai-connectors/{version} ({source})
"""

from __future__ import annotations

import os
from typing import Literal

from ai_connectors import __version__

UserAgentSource = Literal["cli", "rest", "library"]

AI_CONNECTORS_CLIENT_SOURCE_ENV = "AI_CONNECTORS_CLIENT_SOURCE"

DEFAULT_SOURCE: UserAgentSource = "library"


def get_client_source() -> UserAgentSource:
    """Get the client source type from environment or default."""
    source = os.environ.get(AI_CONNECTORS_CLIENT_SOURCE_ENV, "").lower()
    valid_sources: set[UserAgentSource] = {"cli", "rest", "library"}
    if source in valid_sources:
        return source  # type: ignore
    return DEFAULT_SOURCE


def build_user_agent(source: UserAgentSource | None = None) -> str:
    """Build the User-Agent header value."""
    if source is None:
        source = get_client_source()
    return f"ai-connectors/{__version__} ({source})"
