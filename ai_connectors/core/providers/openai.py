"""OpenAI-compatible chat completions: OpenAI, Mistral and Grok (xAI)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ai_connectors.core.providers.base import WireFormat
from ai_connectors.utils.json_utils import dig
from ai_connectors.utils.user_agent import build_user_agent

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
MISTRAL_CHAT_URL = "https://api.mistral.ai/v1/chat/completions"
GROK_CHAT_URL = "https://api.x.ai/v1/chat/completions"

TEMPERATURE = 0.7
MAX_TOKENS = 2048
GROK_SYSTEM_PROMPT = "You are Grok, a helpful assistant."


def bearer_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": build_user_agent(),
    }


def build_chat_body(prompt: str, model: str) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": TEMPERATURE,
        "max_tokens": MAX_TOKENS,
    }


def build_grok_body(prompt: str, model: str) -> Dict[str, Any]:
    messages: List[Dict[str, str]] = [
        {"role": "system", "content": GROK_SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
    return {
        "model": model,
        "messages": messages,
        "temperature": TEMPERATURE,
        "max_tokens": MAX_TOKENS,
        "stream": False,
    }


def extract_chat_text(payload: Any) -> Optional[str]:
    """Text at ``choices[0].message.content``."""
    return dig(payload, ["choices", 0, "message", "content"])


OPENAI = WireFormat(
    provider_id="openai",
    endpoint=OPENAI_CHAT_URL,
    build_headers=bearer_headers,
    build_body=build_chat_body,
    extract_text=extract_chat_text,
    timeout=60.0,
)

MISTRAL = WireFormat(
    provider_id="mistral",
    endpoint=MISTRAL_CHAT_URL,
    build_headers=bearer_headers,
    build_body=build_chat_body,
    extract_text=extract_chat_text,
    timeout=60.0,
)

GROK = WireFormat(
    provider_id="grok",
    endpoint=GROK_CHAT_URL,
    build_headers=bearer_headers,
    build_body=build_grok_body,
    extract_text=extract_chat_text,
    timeout=90.0,
)
