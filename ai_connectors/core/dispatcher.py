"""Route a prompt to the configured provider client.

``send_prompt`` reads the persisted active selection once and hands explicit
provider/model ids to ``dispatch``. ``dispatch`` validates them against the
catalog, reads the API key and forwards exactly one call to the matching client.
Configuration problems are reported without any network call.
"""

from __future__ import annotations

from typing import Dict, Optional

from ai_connectors.core.catalog import ProviderDescriptor, get_providers
from ai_connectors.core.config import SettingsStore, read_setting
from ai_connectors.core.providers import ProviderClient, RequestResult, build_clients
from ai_connectors.core.providers.errors import ConfigurationError
from ai_connectors.core.providers.transport import HttpTransport
from ai_connectors.core.selection import resolve_selection
from ai_connectors.utils.log import get_logger

logger = get_logger()

NO_PROVIDER_SELECTED = "no valid AI provider selected"


class RequestDispatcher:
    def __init__(
        self,
        store: SettingsStore,
        *,
        providers: Optional[Dict[str, ProviderDescriptor]] = None,
        clients: Optional[Dict[str, ProviderClient]] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self.store = store
        self.providers = providers if providers is not None else get_providers()
        self.clients = clients if clients is not None else build_clients(transport)

    def send_prompt(self, prompt: str) -> RequestResult:
        """Send ``prompt`` to the persisted active provider/model."""
        selection = resolve_selection(self.store)
        if selection is None:
            logger.warning("[dispatcher] No active selection configured")
            return RequestResult.from_error(ConfigurationError(NO_PROVIDER_SELECTED))
        return self.dispatch(prompt, selection.provider_id, selection.model_id)

    def dispatch(
        self,
        prompt: str,
        provider_id: str,
        model_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> RequestResult:
        """Send ``prompt`` to an explicit provider/model pair."""
        try:
            provider = self._validate_provider(provider_id)
            self._validate_model(provider, model_id)
            api_key = self._require_api_key(provider)
            client = self._client_for(provider_id)
        except ConfigurationError as exc:
            logger.warning(
                "[dispatcher] Configuration error: %s",
                exc,
                extra={"provider": provider_id, "model": model_id},
            )
            return RequestResult.from_error(exc)

        logger.info(
            "[dispatcher] Dispatching prompt",
            extra={"provider": provider_id, "model": model_id, "prompt_length": len(prompt)},
        )
        return client.send(prompt, model_id, api_key, timeout=timeout)

    def api_key_for(self, provider: ProviderDescriptor) -> str:
        return read_setting(self.store, provider.api_key_setting).strip()

    def _validate_provider(self, provider_id: str) -> ProviderDescriptor:
        provider = self.providers.get(provider_id) if provider_id else None
        if provider is None:
            raise ConfigurationError(NO_PROVIDER_SELECTED)
        return provider

    def _validate_model(self, provider: ProviderDescriptor, model_id: str) -> None:
        if provider.get_model(model_id) is None:
            raise ConfigurationError(f"no valid model selected for {provider.name}")

    def _require_api_key(self, provider: ProviderDescriptor) -> str:
        api_key = self.api_key_for(provider)
        if not api_key:
            raise ConfigurationError(f"API key not configured for {provider.name}")
        return api_key

    def _client_for(self, provider_id: str) -> ProviderClient:
        client = self.clients.get(provider_id)
        if client is None:
            raise ConfigurationError(f"no implementation found for provider: {provider_id}")
        return client


def send_prompt(
    prompt: str, store: SettingsStore, transport: Optional[HttpTransport] = None
) -> RequestResult:
    """Convenience wrapper around ``RequestDispatcher(store).send_prompt``."""
    return RequestDispatcher(store, transport=transport).send_prompt(prompt)


__all__ = ["NO_PROVIDER_SELECTED", "RequestDispatcher", "send_prompt"]
