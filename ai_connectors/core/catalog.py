"""Static provider/model catalog shared by the dispatcher, tester and CLI."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ModelStatus(str, Enum):
    """Availability tag shown next to a model in settings screens."""

    STABLE = "stable"
    PREVIEW = "preview"
    BETA = "beta"
    ERROR = "error"
    MISSING_API_KEY = "missing_api_key"


class ModelDescriptor(BaseModel):
    """Metadata for one model offered by a provider."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str
    label: str
    description: str = ""
    cost: str = ""
    max_tokens: int
    enabled: bool = True
    status: ModelStatus = ModelStatus.STABLE
    use_cases: Tuple[str, ...] = ()


class ProviderDescriptor(BaseModel):
    """A provider, the setting holding its API key, and its models in display order."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    api_key_setting: str
    models: Dict[str, ModelDescriptor] = Field(default_factory=dict)

    def get_model(self, model_id: str) -> Optional[ModelDescriptor]:
        if not model_id:
            return None
        return self.models.get(model_id)

    def first_model_id(self) -> Optional[str]:
        """First non-empty model id, or None when the provider lists no models."""
        for model_id in self.models:
            if model_id:
                return model_id
        return None

    def enabled_models(self) -> Tuple[ModelDescriptor, ...]:
        return tuple(model for model in self.models.values() if model.enabled)


def _provider(
    provider_id: str, name: str, api_key_setting: str, *models: ModelDescriptor
) -> ProviderDescriptor:
    return ProviderDescriptor(
        id=provider_id,
        name=name,
        api_key_setting=api_key_setting,
        models={model.id: model for model in models},
    )


PROVIDER_CATALOG: Dict[str, ProviderDescriptor] = {
    "openai": _provider(
        "openai",
        "OpenAI",
        "ai_agent_openai_api_key",
        ModelDescriptor(
            id="gpt-3.5-turbo",
            label="GPT-3.5 Turbo",
            description="Fast and cheap; good for simple tasks, summaries and short articles.",
            cost="Prompt: $0.50 / 1M tokens, Completion: $1.50 / 1M tokens",
            max_tokens=16385,
            use_cases=("summaries", "short-articles"),
        ),
        ModelDescriptor(
            id="gpt-4o",
            label="GPT-4 Omni (gpt-4o)",
            description="High-end multimodal model for optimized articles, comparisons and sourced writing.",
            cost="Prompt: $5.00 / 1M tokens, Completion: $15.00 / 1M tokens",
            max_tokens=128000,
            use_cases=("long-form", "comparisons"),
        ),
        ModelDescriptor(
            id="gpt-4o-mini",
            label="GPT-4o Mini",
            description="Lightweight GPT-4o for introductions, titles and meta descriptions.",
            cost="Prompt: $1.00 / 1M tokens, Completion: $2.00 / 1M tokens",
            max_tokens=8192,
            use_cases=("titles", "meta-descriptions"),
        ),
        ModelDescriptor(
            id="gpt-4.5-preview",
            label="GPT-4.5 Preview",
            description="Large 128K context for long articles, guides and SEO briefs.",
            cost="Prompt: $15.00 / 1M tokens, Completion: $45.00 / 1M tokens",
            max_tokens=128000,
            use_cases=("long-form", "seo-briefs"),
        ),
    ),
    "anthropic": _provider(
        "anthropic",
        "Anthropic",
        "ai_agent_anthropic_api_key",
        ModelDescriptor(
            id="claude-3-opus-latest",
            label="Claude 3 Opus",
            description="Most capable Claude model; deep analysis and strategic writing.",
            cost="Prompt: $15.00 / 1M tokens, Completion: $75.00 / 1M tokens",
            max_tokens=200000,
        ),
        ModelDescriptor(
            id="claude-3-5-haiku-latest",
            label="Claude 3 Haiku",
            description="Fastest and cheapest Claude model; short or frequent content.",
            cost="Prompt: $0.80 / 1M tokens, Completion: $4.00 / 1M tokens",
            max_tokens=200000,
        ),
        ModelDescriptor(
            id="claude-3-7-sonnet-latest",
            label="Claude 3 Sonnet",
            description="Balanced cost/performance, currently returning errors through the API.",
            cost="Prompt: $3.00 / 1M tokens, Completion: $15.00 / 1M tokens",
            max_tokens=200000,
            enabled=False,
            status=ModelStatus.ERROR,
        ),
    ),
    "mistral": _provider(
        "mistral",
        "Mistral AI",
        "ai_agent_mistral_api_key",
        ModelDescriptor(
            id="mistral-small-latest",
            label="Mistral Small",
            description="Cheap and fast; bulk or simple tasks.",
            cost="Prompt: $0.15 / 1M tokens, Completion: $0.40 / 1M tokens",
            max_tokens=32000,
            enabled=False,
            status=ModelStatus.MISSING_API_KEY,
        ),
        ModelDescriptor(
            id="mistral-medium-latest",
            label="Mistral Medium",
            description="Good value for in-depth articles on a budget.",
            cost="Prompt: $0.60 / 1M tokens, Completion: $1.50 / 1M tokens",
            max_tokens=32000,
            enabled=False,
            status=ModelStatus.MISSING_API_KEY,
        ),
        ModelDescriptor(
            id="mistral-large-latest",
            label="Mistral Large",
            description="State-of-the-art model for analytical or expert-level writing.",
            cost="Prompt: $8.00 / 1M tokens, Completion: $24.00 / 1M tokens",
            max_tokens=32000,
            enabled=False,
            status=ModelStatus.MISSING_API_KEY,
        ),
    ),
    "gemini": _provider(
        "gemini",
        "Google Gemini",
        "ai_agent_google_api_key",
        ModelDescriptor(
            id="gemini-1.5-pro-latest",
            label="Gemini 1.5 Pro (Preview)",
            description="1M-token context; long and complex content.",
            cost="Free (preview)",
            max_tokens=1048576,
            status=ModelStatus.PREVIEW,
        ),
        ModelDescriptor(
            id="gemini-1.5-flash-latest",
            label="Gemini 1.5 Flash (Preview)",
            description="Faster 1.5 Pro variant for short or real-time content.",
            cost="Free (preview)",
            max_tokens=1048576,
            status=ModelStatus.PREVIEW,
        ),
    ),
    "grok": _provider(
        "grok",
        "Grok (xAI)",
        "ai_agent_grok_api_key",
        ModelDescriptor(
            id="grok-2",
            label="Grok 2",
            description="Grok 2 with the latest internal updates; long contextual writing.",
            cost="Prompt: $2.00 / 1M tokens, Completion: $10.00 / 1M tokens",
            max_tokens=131072,
        ),
        ModelDescriptor(
            id="grok-2-latest",
            label="Grok 2 (Latest)",
            description="Recommended stable Grok 2 alias.",
            cost="Prompt: $2.00 / 1M tokens, Completion: $10.00 / 1M tokens",
            max_tokens=131072,
        ),
        ModelDescriptor(
            id="grok-beta",
            label="Grok 3 (Beta)",
            description="Next-generation xAI model in beta with extended context.",
            cost="Not disclosed",
            max_tokens=1048576,
            enabled=False,
            status=ModelStatus.BETA,
        ),
    ),
}


def get_providers() -> Dict[str, ProviderDescriptor]:
    """Return the provider catalog in display order."""
    return PROVIDER_CATALOG


def get_provider(
    provider_id: str, providers: Optional[Dict[str, ProviderDescriptor]] = None
) -> Optional[ProviderDescriptor]:
    if not provider_id:
        return None
    catalog = providers if providers is not None else PROVIDER_CATALOG
    return catalog.get(provider_id)


def iter_models(
    provider_id: Optional[str] = None,
    model_id: Optional[str] = None,
    providers: Optional[Dict[str, ProviderDescriptor]] = None,
) -> Iterator[Tuple[ProviderDescriptor, ModelDescriptor]]:
    """Yield (provider, model) pairs in catalog order, optionally filtered."""
    catalog = providers if providers is not None else PROVIDER_CATALOG
    for pid, provider in catalog.items():
        if provider_id and provider_id != pid:
            continue
        for mid, model in provider.models.items():
            if model_id and model_id != mid:
                continue
            yield provider, model


__all__ = [
    "ModelDescriptor",
    "ModelStatus",
    "PROVIDER_CATALOG",
    "ProviderDescriptor",
    "get_provider",
    "get_providers",
    "iter_models",
]
