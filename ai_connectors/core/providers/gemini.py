"""Google Gemini generateContent wire format."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ai_connectors.core.providers.base import WireFormat
from ai_connectors.utils.json_utils import dig
from ai_connectors.utils.user_agent import build_user_agent

GEMINI_GENERATE_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 2048


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "X-Goog-Api-Key": api_key,
        "Content-Type": "application/json",
        "User-Agent": build_user_agent(),
    }


def build_body(prompt: str, model: str) -> Dict[str, Any]:
    # The model travels in the URL path, not the body.
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": TEMPERATURE,
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(payload: Any) -> Optional[str]:
    return dig(payload, ["candidates", 0, "content", "parts", 0, "text"])


GEMINI = WireFormat(
    provider_id="gemini",
    endpoint=GEMINI_GENERATE_URL,
    build_headers=build_headers,
    build_body=build_body,
    extract_text=extract_text,
    timeout=60.0,
)
