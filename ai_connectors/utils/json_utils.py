"""JSON helper utilities for ai-connectors."""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence, Union

from ai_connectors.utils.log import get_logger


logger = get_logger()

PathPart = Union[str, int]


def safe_parse_json(json_text: Optional[str], log_error: bool = True) -> Optional[Any]:
    """Best-effort json.loads wrapper that returns None on failure."""
    if not json_text:
        return None
    try:
        return json.loads(json_text)
    except (json.JSONDecodeError, TypeError, ValueError) as exc:
        if log_error:
            logger.debug(
                "[json_utils] Failed to parse JSON: %s: %s",
                type(exc).__name__,
                exc,
                extra={"length": len(json_text)},
            )
        return None


def dig(payload: Any, path: Sequence[PathPart]) -> Optional[Any]:
    """Walk nested dicts/lists along ``path``; None as soon as a step is missing."""
    current = payload
    for part in path:
        if isinstance(part, int):
            if not isinstance(current, list) or not -len(current) <= part < len(current):
                return None
            current = current[part]
        else:
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
    return current
