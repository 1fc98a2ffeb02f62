"""Anthropic Messages API wire format."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ai_connectors.core.providers.base import WireFormat
from ai_connectors.utils.json_utils import dig
from ai_connectors.utils.user_agent import build_user_agent

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"

MAX_TOKENS = 1024
TEMPERATURE = 0.7
SYSTEM_PROMPT = "You are a helpful, precise and well-structured assistant."


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "x-api-key": api_key,
        "anthropic-version": ANTHROPIC_VERSION,
        "Content-Type": "application/json",
        "User-Agent": build_user_agent(),
    }


def build_body(prompt: str, model: str) -> Dict[str, Any]:
    return {
        "model": model,
        "max_tokens": MAX_TOKENS,
        "temperature": TEMPERATURE,
        "system": SYSTEM_PROMPT,
        "messages": [{"role": "user", "content": prompt}],
    }


def extract_text(payload: Any) -> Optional[str]:
    """Text of the first content block (``content[0].text``)."""
    return dig(payload, ["content", 0, "text"])


ANTHROPIC = WireFormat(
    provider_id="anthropic",
    endpoint=ANTHROPIC_MESSAGES_URL,
    build_headers=build_headers,
    build_body=build_body,
    extract_text=extract_text,
    timeout=60.0,
)
