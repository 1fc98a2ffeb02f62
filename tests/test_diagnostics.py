"""Tests for batch diagnostics and the configuration report."""

from conftest import StubTransport, openai_reply

from ai_connectors.core.config import InMemorySettingsStore
from ai_connectors.core.connection_tester import TEST_PROMPT
from ai_connectors.core.diagnostics import analyze_configuration, run_diagnostics
from ai_connectors.core.dispatcher import RequestDispatcher


def test_run_diagnostics_covers_one_provider():
    transport = StubTransport(payload=openai_reply("Bonjour"))
    store = InMemorySettingsStore({"ai_agent_openai_api_key": "sk-test"})

    results = run_diagnostics(RequestDispatcher(store, transport=transport), provider_id="openai")

    assert [r.model_id for r in results] == ["gpt-3.5-turbo", "gpt-4o", "gpt-4o-mini", "gpt-4.5-preview"]
    assert all(r.request_status == "success" for r in results)
    assert all(r.api_key_status == "ok" for r in results)
    assert all(r.result == "Bonjour" for r in results)
    assert all(r.response_time_ms is not None and r.response_time_ms >= 0 for r in results)
    assert transport.call_count == 4
    assert {call["json"]["messages"][0]["content"] for call in transport.calls} == {TEST_PROMPT}


def test_missing_key_is_not_tested():
    transport = StubTransport()
    results = run_diagnostics(
        RequestDispatcher(InMemorySettingsStore(), transport=transport), provider_id="grok"
    )

    assert len(results) == 3
    assert {r.request_status for r in results} == {"not_tested"}
    assert {r.api_key_status for r in results} == {"missing"}
    assert {r.result for r in results} == {"API key not configured"}
    assert results[0].api_key_setting == "ai_agent_grok_api_key"
    assert transport.call_count == 0


def test_single_model_failure_is_recorded():
    transport = StubTransport(status_code=500, payload={"error": {"message": "overloaded"}})
    store = InMemorySettingsStore({"ai_agent_anthropic_api_key": "k"})

    results = run_diagnostics(
        RequestDispatcher(store, transport=transport),
        provider_id="anthropic",
        model_id="claude-3-opus-latest",
    )

    assert len(results) == 1
    assert results[0].request_status == "error"
    assert results[0].result == "api error: overloaded"
    assert results[0].model_label == "Claude 3 Opus"


def test_run_diagnostics_keeps_active_selection():
    store = InMemorySettingsStore(
        {"ai_agent_active_model": "grok:grok-2", "ai_agent_openai_api_key": "sk"}
    )
    run_diagnostics(
        RequestDispatcher(store, transport=StubTransport(payload=openai_reply("x"))),
        provider_id="openai",
    )
    assert store.get("ai_agent_active_model") == "grok:grok-2"


def test_analyze_ready_configuration(configured_store):
    report = analyze_configuration(configured_store)

    assert report.ready is True
    assert report.issues == []
    assert report.provider_name == "OpenAI"
    assert report.model_label == "GPT-4 Omni (gpt-4o)"
    assert ("ai_agent_openai_api_key", "set (7 chars)") in report.stored_settings
    assert all("sk-" not in value for _, value in report.stored_settings)


def test_analyze_reports_each_problem():
    empty = analyze_configuration(InMemorySettingsStore())
    assert empty.ready is False
    assert empty.issues == ["no active model is configured"]

    unknown = analyze_configuration(InMemorySettingsStore({"ai_agent_active_model": "cohere:x"}))
    assert unknown.provider_valid is False
    assert unknown.issues[0].startswith("provider 'cohere' is not in the catalog")

    bad_model = analyze_configuration(
        InMemorySettingsStore({"ai_agent_active_model": "gemini:gemini-ultra"})
    )
    assert bad_model.provider_valid is True
    assert bad_model.model_valid is False
    assert "gemini-ultra" in bad_model.issues[0]

    no_key = analyze_configuration(
        InMemorySettingsStore({"ai_agent_active_model": "gemini:gemini-1.5-flash-latest"})
    )
    assert no_key.model_valid is True
    assert no_key.issues == ["API key not configured for Google Gemini"]
