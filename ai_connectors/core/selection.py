"""Active provider/model selection parsing and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ai_connectors.core.config import (
    ACTIVE_MODEL_KEY,
    LEGACY_ACTIVE_PROVIDER_KEY,
    SettingsStore,
    legacy_model_key,
    read_setting,
)
from ai_connectors.utils.log import get_logger

logger = get_logger()


class InvalidSelectionError(ValueError):
    """Raised when a stored selection is not of the form ``provider:model``."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"invalid active model selection: {raw!r}")


@dataclass(frozen=True)
class ActiveSelection:
    provider_id: str
    model_id: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ActiveSelection":
        parts = (raw or "").split(":")
        if len(parts) != 2:
            raise InvalidSelectionError(raw or "")
        provider_id, model_id = (part.strip() for part in parts)
        if not provider_id or not model_id:
            raise InvalidSelectionError(raw or "")
        return cls(provider_id=provider_id, model_id=model_id)

    def __str__(self) -> str:
        return f"{self.provider_id}:{self.model_id}"


def resolve_selection(store: SettingsStore) -> Optional[ActiveSelection]:
    """Read the persisted selection, falling back to the legacy two-key scheme."""
    raw = read_setting(store, ACTIVE_MODEL_KEY)
    try:
        return ActiveSelection.parse(raw)
    except InvalidSelectionError:
        if raw:
            logger.debug("[selection] Unparsable active model", extra={"active_model": raw})

    provider_id = read_setting(store, LEGACY_ACTIVE_PROVIDER_KEY).strip()
    if not provider_id:
        return None
    # An empty model id is kept so validation can name the provider in its error.
    model_id = read_setting(store, legacy_model_key(provider_id)).strip()
    logger.debug(
        "[selection] Resolved selection from legacy settings",
        extra={"provider": provider_id, "model": model_id},
    )
    return ActiveSelection(provider_id=provider_id, model_id=model_id)


__all__ = ["ActiveSelection", "InvalidSelectionError", "resolve_selection"]
