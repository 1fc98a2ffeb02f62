"""Tests for active selection parsing and legacy fallback."""

import pytest

from ai_connectors.core.config import InMemorySettingsStore
from ai_connectors.core.selection import ActiveSelection, InvalidSelectionError, resolve_selection


def test_parse_valid_selection_strips_parts():
    selection = ActiveSelection.parse(" openai : gpt-4o ")
    assert selection == ActiveSelection("openai", "gpt-4o")
    assert str(selection) == "openai:gpt-4o"


@pytest.mark.parametrize("raw", ["", None, "openai", "openai:", ":gpt-4o", "a:b:c", " : "])
def test_parse_rejects_malformed_values(raw):
    with pytest.raises(InvalidSelectionError):
        ActiveSelection.parse(raw)


def test_resolve_prefers_combined_setting():
    store = InMemorySettingsStore(
        {
            "ai_agent_active_model": "grok:grok-2",
            "ai_agent_active_provider": "openai",
            "ai_agent_openai_active_model": "gpt-4o",
        }
    )
    assert resolve_selection(store) == ActiveSelection("grok", "grok-2")


def test_resolve_falls_back_to_legacy_two_key_scheme():
    store = InMemorySettingsStore(
        {
            "ai_agent_active_model": "broken",
            "ai_agent_active_provider": "openai",
            "ai_agent_openai_active_model": "gpt-4o",
        }
    )
    assert resolve_selection(store) == ActiveSelection("openai", "gpt-4o")


def test_resolve_reads_previous_generation_prefix():
    store = InMemorySettingsStore({"ai_redactor_active_model": "anthropic:claude-3-opus-latest"})
    assert resolve_selection(store) == ActiveSelection("anthropic", "claude-3-opus-latest")


def test_resolve_keeps_legacy_provider_without_model():
    store = InMemorySettingsStore({"ai_agent_active_provider": "openai"})
    assert resolve_selection(store) == ActiveSelection("openai", "")


def test_resolve_returns_none_when_nothing_configured():
    assert resolve_selection(InMemorySettingsStore()) is None
    assert resolve_selection(InMemorySettingsStore({"ai_agent_active_model": ""})) is None
