"""Tests for the `ai-connectors` command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner
from rich.console import Console

from conftest import StubTransport, openai_reply

from ai_connectors import __version__
from ai_connectors.cli import cli as cli_module
from ai_connectors.core.config import InMemorySettingsStore
from ai_connectors.utils.log import disable_file_logging


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr(cli_module, "console", Console(width=200))


def _run_cli(args: list[str], store=None, env=None):
    runner = CliRunner()
    obj = {"store": store} if store is not None else None
    return runner.invoke(cli_module.cli, args, obj=obj, env=env)


def _use_transport(monkeypatch, transport: StubTransport) -> None:
    monkeypatch.setattr("ai_connectors.core.providers.base.HttpxTransport", lambda: transport)


def test_help_lists_commands():
    result = _run_cli(["--help"])
    assert result.exit_code == 0
    for name in ("providers", "select", "set-key", "prompt", "test", "diagnose", "doctor", "migrate-settings", "reset"):
        assert name in result.output


def test_version_command():
    result = _run_cli(["version"])
    assert result.exit_code == 0
    assert f"ai-connectors version {__version__}" in result.output


def test_select_and_set_key_persist_to_settings_file(tmp_path):
    settings = tmp_path / "settings.json"

    result = _run_cli(["--settings", str(settings), "select", "anthropic:claude-3-opus-latest"])
    assert result.exit_code == 0, result.output
    result = _run_cli(["--settings", str(settings), "set-key", "anthropic", "ak-123"])
    assert result.exit_code == 0, result.output
    assert "API key saved for Anthropic" in result.output

    options = json.loads(settings.read_text(encoding="utf-8"))["options"]
    assert options["ai_agent_active_model"] == "anthropic:claude-3-opus-latest"
    assert options["ai_agent_active_provider"] == "anthropic"
    assert options["ai_agent_anthropic_active_model"] == "claude-3-opus-latest"
    assert options["ai_agent_anthropic_api_key"] == "ak-123"


@pytest.mark.parametrize(
    ("selection", "message"),
    [
        ("openai", "invalid active model selection"),
        ("cohere:command-r", "unknown provider 'cohere'"),
        ("openai:gpt-9", "OpenAI has no model 'gpt-9'"),
    ],
)
def test_select_rejects_invalid_values(selection, message):
    store = InMemorySettingsStore()
    result = _run_cli(["select", selection], store=store)

    assert result.exit_code == 2
    assert message in result.output
    assert store.get("ai_agent_active_model") == ""


def test_set_key_unknown_provider():
    result = _run_cli(["set-key", "cohere", "k"], store=InMemorySettingsStore())
    assert result.exit_code == 2
    assert "unknown provider 'cohere'" in result.output


def test_providers_table_shows_key_status():
    store = InMemorySettingsStore({"ai_agent_openai_api_key": "sk"})
    result = _run_cli(["providers"], store=store)

    assert result.exit_code == 0
    assert "openai:gpt-4o" in result.output
    assert "grok:grok-beta" in result.output
    assert "configured" in result.output
    assert "missing" in result.output


def test_prompt_prints_response(monkeypatch, configured_store):
    transport = StubTransport(payload=openai_reply("Bonjour le monde"))
    _use_transport(monkeypatch, transport)

    result = _run_cli(["prompt", "Say hello"], store=configured_store)

    assert result.exit_code == 0, result.output
    assert "Bonjour le monde" in result.output
    assert transport.call_count == 1


def test_prompt_failure_exits_non_zero():
    result = _run_cli(["prompt", "hi"], store=InMemorySettingsStore())
    assert result.exit_code == 1
    assert "no valid AI provider selected" in result.output


def test_test_command_reports_outcome(monkeypatch):
    _use_transport(monkeypatch, StubTransport(payload=openai_reply("Salut")))
    store = InMemorySettingsStore({"ai_agent_openai_api_key": "sk"})

    ok = _run_cli(["test", "openai"], store=store)
    assert ok.exit_code == 0
    assert "connection to OpenAI succeeded" in ok.output

    missing = _run_cli(["test", "grok"], store=store)
    assert missing.exit_code == 1
    assert "no API key configured for Grok (xAI)" in missing.output


def test_diagnose_table(monkeypatch):
    transport = StubTransport(payload=openai_reply("Bonjour"))
    _use_transport(monkeypatch, transport)
    store = InMemorySettingsStore({"ai_agent_openai_api_key": "sk"})

    result = _run_cli(["diagnose", "--provider", "openai", "--model", "gpt-4o"], store=store)

    assert result.exit_code == 0, result.output
    assert "gpt-4o" in result.output
    assert "success" in result.output
    assert transport.call_count == 1


def test_diagnose_unknown_provider():
    result = _run_cli(["diagnose", "--provider", "cohere"], store=InMemorySettingsStore())
    assert result.exit_code == 2


def test_doctor_reports_ready(configured_store):
    result = _run_cli(["doctor"], store=configured_store)
    assert result.exit_code == 0
    assert "Ready to send prompts." in result.output
    assert "sk-test" not in result.output


def test_doctor_reports_issues():
    store = InMemorySettingsStore({"ai_agent_active_model": "openai:gpt-4o"})
    result = _run_cli(["doctor"], store=store)
    assert result.exit_code == 0
    assert "API key not configured for OpenAI" in result.output
    assert "Ready to send prompts." not in result.output


def test_migrate_settings_command():
    store = InMemorySettingsStore({"ai_redactor_openai_api_key": "old"})

    result = _run_cli(["migrate-settings"], store=store)
    assert result.exit_code == 0
    assert "ai_agent_openai_api_key" in result.output
    assert store.get("ai_agent_openai_api_key") == "old"

    again = _run_cli(["migrate-settings"], store=store)
    assert "Nothing to migrate." in again.output


def test_reset_clears_active_model():
    store = InMemorySettingsStore(
        {
            "ai_agent_active_model": "openai:gpt-4o",
            "ai_agent_active_provider": "openai",
            "ai_agent_openai_api_key": "sk",
        }
    )

    result = _run_cli(["reset"], store=store)
    assert result.exit_code == 0
    assert "Active model cleared" in result.output
    assert store.get("ai_agent_active_model") == ""

    prompt = _run_cli(["prompt", "hi"], store=store)
    assert prompt.exit_code == 1
    assert "no valid AI provider selected" in prompt.output

    again = _run_cli(["reset"], store=store)
    assert "No active model was set." in again.output


def test_log_file_option_records_dispatcher_activity(tmp_path):
    log_file = tmp_path / "ai_connectors.log"
    try:
        result = _run_cli(["--log-file", str(log_file), "prompt", "hi"], store=InMemorySettingsStore())
    finally:
        disable_file_logging()

    assert result.exit_code == 1
    content = log_file.read_text(encoding="utf-8")
    assert "[dispatcher] No active selection configured" in content
    assert "[cli] Starting CLI invocation" in content
