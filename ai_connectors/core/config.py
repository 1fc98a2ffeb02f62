"""Settings storage for ai-connectors.

This module holds the key/value settings store the dispatcher reads from
(active model, API keys) together with the write-side helpers used by the
settings form and the CLI.
"""

import json
import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from pydantic import BaseModel, Field

from ai_connectors.core.catalog import get_provider, get_providers
from ai_connectors.utils.log import get_logger


logger = get_logger()

SETTINGS_PREFIX = "ai_agent_"
# Older releases stored everything under this prefix. Read-only migration source.
LEGACY_SETTINGS_PREFIX = "ai_redactor_"

ACTIVE_MODEL_KEY = "ai_agent_active_model"
LEGACY_ACTIVE_PROVIDER_KEY = "ai_agent_active_provider"

SETTINGS_PATH_ENV = "AI_CONNECTORS_SETTINGS_PATH"


def legacy_model_key(provider_id: str) -> str:
    """Per-provider setting that held the active model before the combined format."""
    return f"{SETTINGS_PREFIX}{provider_id}_active_model"


def legacy_twin(key: str) -> Optional[str]:
    """Name of the older-generation setting equivalent to ``key``, if any."""
    if key.startswith(SETTINGS_PREFIX):
        return LEGACY_SETTINGS_PREFIX + key[len(SETTINGS_PREFIX) :]
    return None


def api_key_env_candidates(provider_id: str) -> list[str]:
    """Environment variables that may carry an API key for a provider."""
    candidates = {
        "openai": ["OPENAI_API_KEY"],
        "anthropic": ["ANTHROPIC_API_KEY"],
        "mistral": ["MISTRAL_API_KEY"],
        "gemini": ["GEMINI_API_KEY", "GOOGLE_API_KEY"],
        "grok": ["XAI_API_KEY", "GROK_API_KEY"],
    }
    return list(candidates.get(provider_id, [f"{provider_id.upper()}_API_KEY"]))


class SettingsStore(Protocol):
    """Key/value settings service. Values are plain strings."""

    def get(self, key: str, default: str = "") -> str: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def items(self) -> Iterable[Tuple[str, str]]: ...


class InMemorySettingsStore:
    """Dict-backed settings store."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._options: Dict[str, str] = dict(initial or {})

    def get(self, key: str, default: str = "") -> str:
        return self._options.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._options[key] = value

    def delete(self, key: str) -> None:
        self._options.pop(key, None)

    def items(self) -> Iterable[Tuple[str, str]]:
        return list(self._options.items())


class StoredSettings(BaseModel):
    """On-disk layout of the settings file."""

    options: Dict[str, str] = Field(default_factory=dict)


def default_settings_path() -> Path:
    override = os.getenv(SETTINGS_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".ai_connectors" / "settings.json"


class JsonSettingsStore:
    """Settings store persisted to a JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or default_settings_path()
        self._settings: Optional[StoredSettings] = None

    def _load(self) -> StoredSettings:
        if self._settings is None:
            if self.path.exists():
                try:
                    data = json.loads(self.path.read_text(encoding="utf-8"))
                    self._settings = StoredSettings(**data)
                    logger.debug(
                        "[config] Loaded settings",
                        extra={"path": str(self.path), "option_count": len(self._settings.options)},
                    )
                except (
                    json.JSONDecodeError,
                    OSError,
                    UnicodeDecodeError,
                    ValueError,
                    TypeError,
                ) as e:
                    logger.warning(
                        "Error loading settings: %s: %s",
                        type(e).__name__,
                        e,
                        extra={"error": str(e), "path": str(self.path)},
                    )
                    self._settings = StoredSettings()
            else:
                self._settings = StoredSettings()
                logger.debug(
                    "[config] Settings file not found; using defaults",
                    extra={"path": str(self.path)},
                )
        return self._settings

    def _save(self) -> None:
        settings = self._load()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(
            "[config] Saved settings",
            extra={"path": str(self.path), "option_count": len(settings.options)},
        )

    def get(self, key: str, default: str = "") -> str:
        return self._load().options.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._load().options[key] = value
        self._save()

    def delete(self, key: str) -> None:
        if self._load().options.pop(key, None) is not None:
            self._save()

    def items(self) -> Iterable[Tuple[str, str]]:
        return list(self._load().options.items())


class EnvironmentOverlayStore:
    """Answer empty API-key settings from environment variables.

    Writes and every other key go straight to the wrapped store.
    """

    def __init__(self, inner: SettingsStore, environ: Optional[Mapping[str, str]] = None) -> None:
        self.inner = inner
        self._environ = environ if environ is not None else os.environ
        self._env_by_key = {
            provider.api_key_setting: api_key_env_candidates(provider.id)
            for provider in get_providers().values()
        }

    def get(self, key: str, default: str = "") -> str:
        value = self.inner.get(key, "")
        if value:
            return value
        for env_var in self._env_by_key.get(key, []):
            env_value = self._environ.get(env_var, "")
            if env_value:
                return env_value
        return value or default

    def set(self, key: str, value: str) -> None:
        self.inner.set(key, value)

    def delete(self, key: str) -> None:
        self.inner.delete(key)

    def items(self) -> Iterable[Tuple[str, str]]:
        return self.inner.items()


def read_setting(store: SettingsStore, key: str) -> str:
    """Read ``key``, falling back to its older-generation twin when empty."""
    value = store.get(key, "")
    if value:
        return value
    twin = legacy_twin(key)
    if twin is None:
        return ""
    legacy_value = store.get(twin, "")
    if legacy_value:
        logger.debug(
            "[config] Using legacy setting",
            extra={"key": key, "legacy_key": twin},
        )
    return legacy_value


def migrate_legacy_settings(store: SettingsStore) -> List[str]:
    """Copy older-generation settings into empty canonical keys.

    Legacy entries are left in place. Returns the canonical keys written.
    """
    migrated: List[str] = []
    for key, value in list(store.items()):
        if not key.startswith(LEGACY_SETTINGS_PREFIX) or not value:
            continue
        canonical = SETTINGS_PREFIX + key[len(LEGACY_SETTINGS_PREFIX) :]
        if store.get(canonical, ""):
            continue
        store.set(canonical, value)
        migrated.append(canonical)
    if migrated:
        logger.info("[config] Migrated legacy settings", extra={"keys": migrated})
    return migrated


def save_active_selection(store: SettingsStore, raw: str) -> None:
    """Persist the ``provider:model`` string and keep the legacy keys in sync."""
    value = raw.strip()
    store.set(ACTIVE_MODEL_KEY, value)
    parts = value.split(":")
    if len(parts) == 2 and all(part.strip() for part in parts):
        provider_id, model_id = (part.strip() for part in parts)
        store.set(LEGACY_ACTIVE_PROVIDER_KEY, provider_id)
        store.set(legacy_model_key(provider_id), model_id)
    logger.debug("[config] Saved active model", extra={"active_model": value})


def clear_active_selection(store: SettingsStore) -> List[str]:
    """Forget the active model, including the legacy provider key and old-prefix copies.

    Per-provider model keys are kept; without an active provider nothing reads them.
    Returns the keys that held a value.
    """
    cleared: List[str] = []
    for key in (ACTIVE_MODEL_KEY, LEGACY_ACTIVE_PROVIDER_KEY):
        for name in (key, legacy_twin(key)):
            if name is None:
                continue
            if store.get(name, ""):
                cleared.append(name)
            store.delete(name)
    logger.info("[config] Cleared active model", extra={"keys": cleared})
    return cleared


def save_api_key(store: SettingsStore, provider_id: str, api_key: str) -> None:
    """Store an API key under the provider's setting name."""
    provider = get_provider(provider_id)
    if provider is None:
        raise KeyError(f"Unknown provider '{provider_id}'.")
    store.set(provider.api_key_setting, api_key.strip())
    logger.debug(
        "[config] Saved API key",
        extra={"provider": provider_id, "configured": bool(api_key.strip())},
    )


def save_connector_settings(
    store: SettingsStore,
    active_model: Optional[str] = None,
    api_keys: Optional[Mapping[str, str]] = None,
) -> None:
    """Apply a connector settings form submission."""
    if active_model is not None:
        save_active_selection(store, active_model)
    for provider_id, api_key in (api_keys or {}).items():
        save_api_key(store, provider_id, api_key)
