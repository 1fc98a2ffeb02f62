"""Configuration analysis and batch model diagnostics."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from ai_connectors.core.catalog import ProviderDescriptor, get_providers, iter_models
from ai_connectors.core.config import ACTIVE_MODEL_KEY, SettingsStore, read_setting
from ai_connectors.core.connection_tester import TEST_PROMPT
from ai_connectors.core.dispatcher import RequestDispatcher
from ai_connectors.core.selection import ActiveSelection, resolve_selection
from ai_connectors.utils.log import get_logger

logger = get_logger()


class DiagnosticResult(BaseModel):
    """Outcome of testing one provider/model pair."""

    provider_id: str
    provider_name: str
    model_id: str
    model_label: str
    api_key_setting: str
    api_key_status: Literal["missing", "ok"] = "missing"
    request_status: Literal["not_tested", "success", "error"] = "not_tested"
    response_time_ms: Optional[int] = None
    result: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ConfigurationReport(BaseModel):
    """Static health report of the stored selection and keys."""

    active_model_raw: str = ""
    provider_id: str = ""
    provider_name: str = ""
    model_id: str = ""
    model_label: str = ""
    provider_valid: bool = False
    model_valid: bool = False
    api_key_configured: bool = False
    issues: List[str] = Field(default_factory=list)
    stored_settings: List[Tuple[str, str]] = Field(default_factory=list)

    @property
    def ready(self) -> bool:
        return self.provider_valid and self.model_valid and self.api_key_configured


def _mask(key: str, value: str) -> str:
    if key.endswith("_api_key") and value:
        return f"set ({len(value)} chars)"
    return value


def run_diagnostics(
    dispatcher: RequestDispatcher,
    provider_id: Optional[str] = None,
    model_id: Optional[str] = None,
) -> List[DiagnosticResult]:
    """Test catalog models one after another with the standard test prompt.

    Provider and model are passed explicitly; the stored active selection is
    never modified.
    """
    results: List[DiagnosticResult] = []
    for provider, model in iter_models(provider_id, model_id, providers=dispatcher.providers):
        result = DiagnosticResult(
            provider_id=provider.id,
            provider_name=provider.name,
            model_id=model.id,
            model_label=model.label,
            api_key_setting=provider.api_key_setting,
        )
        if not dispatcher.api_key_for(provider):
            result.result = "API key not configured"
            results.append(result)
            continue

        result.api_key_status = "ok"
        logger.info(
            "[diagnostics] Testing model",
            extra={"provider": provider.id, "model": model.id},
        )
        started = time.monotonic()
        outcome = dispatcher.dispatch(TEST_PROMPT, provider.id, model.id)
        result.response_time_ms = round((time.monotonic() - started) * 1000)
        result.request_status = "success" if outcome.success else "error"
        result.result = outcome.response if outcome.success else outcome.error
        if not outcome.success:
            logger.warning(
                "[diagnostics] Model test failed: %s",
                outcome.error,
                extra={"provider": provider.id, "model": model.id},
            )
        results.append(result)
    return results


def analyze_configuration(
    store: SettingsStore, providers: Optional[Dict[str, ProviderDescriptor]] = None
) -> ConfigurationReport:
    """Explain whether ``send_prompt`` can work with the stored settings."""
    catalog = providers if providers is not None else get_providers()
    report = ConfigurationReport(
        active_model_raw=read_setting(store, ACTIVE_MODEL_KEY),
        stored_settings=[(key, _mask(key, value)) for key, value in sorted(store.items())],
    )

    selection: Optional[ActiveSelection] = resolve_selection(store)
    if selection is None:
        report.issues.append("no active model is configured")
        return report

    report.provider_id = selection.provider_id
    report.model_id = selection.model_id
    provider = catalog.get(selection.provider_id)
    if provider is None:
        report.issues.append(
            f"provider '{selection.provider_id}' is not in the catalog "
            f"(available: {', '.join(catalog)})"
        )
        return report
    report.provider_valid = True
    report.provider_name = provider.name

    model = provider.get_model(selection.model_id)
    if model is None:
        report.issues.append(
            f"model '{selection.model_id}' is not offered by {provider.name} "
            f"(available: {', '.join(provider.models) or 'none'})"
        )
        return report
    report.model_valid = True
    report.model_label = model.label

    if read_setting(store, provider.api_key_setting).strip():
        report.api_key_configured = True
    else:
        report.issues.append(f"API key not configured for {provider.name}")
    return report


__all__ = [
    "ConfigurationReport",
    "DiagnosticResult",
    "analyze_configuration",
    "run_diagnostics",
]
