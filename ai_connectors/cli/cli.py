"""Command-line interface for ai-connectors.

Stands in for the admin screens: connector settings, prompt tester and the
diagnostic page.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ai_connectors import __version__
from ai_connectors.core.catalog import get_provider, get_providers
from ai_connectors.core.config import (
    EnvironmentOverlayStore,
    JsonSettingsStore,
    SettingsStore,
    clear_active_selection,
    migrate_legacy_settings,
    read_setting,
    save_active_selection,
    save_api_key,
)
from ai_connectors.core.connection_tester import ConnectionTester
from ai_connectors.core.diagnostics import (
    ConfigurationReport,
    analyze_configuration,
    run_diagnostics,
)
from ai_connectors.core.dispatcher import RequestDispatcher
from ai_connectors.core.selection import ActiveSelection, InvalidSelectionError
from ai_connectors.utils.log import enable_file_logging, get_logger
from ai_connectors.utils.user_agent import AI_CONNECTORS_CLIENT_SOURCE_ENV

console = Console()
logger = get_logger()


def _store(ctx: click.Context) -> SettingsStore:
    return ctx.obj["store"]


def _dispatcher(ctx: click.Context) -> RequestDispatcher:
    return RequestDispatcher(_store(ctx))


def _status_row(label: str, status: str, detail: str = "") -> Tuple[str, str, str]:
    """Build a (label, status, detail) tuple with icon."""
    icons = {
        "ok": "[green]✓[/green]",
        "warn": "[yellow]![/yellow]",
        "error": "[red]×[/red]",
    }
    icon = icons.get(status, "[yellow]?[/yellow]")
    return (label, icon, detail)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.ai_connectors/settings.json)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write debug logs to this file",
)
@click.pass_context
def cli(ctx: click.Context, settings_path: Optional[Path], log_file: Optional[Path]) -> None:
    """ai-connectors - send prompts to OpenAI, Anthropic, Mistral, Gemini and Grok"""
    os.environ.setdefault(AI_CONNECTORS_CLIENT_SOURCE_ENV, "cli")
    if log_file:
        enable_file_logging(log_file)
    ctx.ensure_object(dict)
    if "store" not in ctx.obj:
        ctx.obj["store"] = EnvironmentOverlayStore(JsonSettingsStore(settings_path))
    logger.debug(
        "[cli] Starting CLI invocation",
        extra={
            "settings_path": str(settings_path) if settings_path else None,
            "command": ctx.invoked_subcommand,
        },
    )


@cli.command(name="providers")
@click.pass_context
def providers_cmd(ctx: click.Context) -> None:
    """List providers, their models and API key status"""
    store = _store(ctx)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("Label")
    table.add_column("Status")
    table.add_column("API key")

    for provider in get_providers().values():
        configured = bool(read_setting(store, provider.api_key_setting).strip())
        key_cell = "[green]configured[/green]" if configured else "[red]missing[/red]"
        for index, model in enumerate(provider.models.values()):
            status = model.status.value if model.enabled else f"{model.status.value} (disabled)"
            table.add_row(
                provider.name if index == 0 else "",
                f"{provider.id}:{model.id}",
                model.label,
                status,
                key_cell if index == 0 else "",
            )
    console.print(table)


@cli.command(name="select")
@click.argument("selection")
@click.pass_context
def select_cmd(ctx: click.Context, selection: str) -> None:
    """Set the active model (PROVIDER:MODEL)"""
    try:
        parsed = ActiveSelection.parse(selection)
    except InvalidSelectionError as exc:
        raise click.BadParameter(str(exc), param_hint="SELECTION") from exc

    provider = get_provider(parsed.provider_id)
    if provider is None:
        raise click.BadParameter(
            f"unknown provider '{parsed.provider_id}' (available: {', '.join(get_providers())})",
            param_hint="SELECTION",
        )
    if provider.get_model(parsed.model_id) is None:
        raise click.BadParameter(
            f"{provider.name} has no model '{parsed.model_id}' "
            f"(available: {', '.join(provider.models)})",
            param_hint="SELECTION",
        )

    save_active_selection(_store(ctx), str(parsed))
    console.print(f"[green]✓[/green] Active model set to [bold]{escape(str(parsed))}[/bold]")


@cli.command(name="reset")
@click.pass_context
def reset_cmd(ctx: click.Context) -> None:
    """Clear the active model so a new one can be selected"""
    cleared = clear_active_selection(_store(ctx))
    if not cleared:
        console.print("No active model was set.")
        return
    console.print(f"[green]✓[/green] Active model cleared ({', '.join(cleared)})")


@cli.command(name="set-key")
@click.argument("provider_id", metavar="PROVIDER")
@click.argument("api_key", metavar="KEY")
@click.pass_context
def set_key_cmd(ctx: click.Context, provider_id: str, api_key: str) -> None:
    """Store the API key for a provider (empty KEY clears it)"""
    try:
        save_api_key(_store(ctx), provider_id, api_key)
    except KeyError as exc:
        raise click.BadParameter(
            f"unknown provider '{provider_id}' (available: {', '.join(get_providers())})",
            param_hint="PROVIDER",
        ) from exc
    provider = get_provider(provider_id)
    state = "saved" if api_key.strip() else "cleared"
    console.print(f"[green]✓[/green] API key {state} for {escape(provider.name if provider else provider_id)}")


@cli.command(name="prompt")
@click.argument("text")
@click.pass_context
def prompt_cmd(ctx: click.Context, text: str) -> None:
    """Send TEXT to the active model and print the reply"""
    result = _dispatcher(ctx).send_prompt(text)
    if not result.success:
        logger.info("[cli] Prompt failed", extra={"error_code": result.error_code})
        raise click.ClickException(result.error or "unknown error")
    console.print(escape(str(result.response)))


@cli.command(name="test")
@click.argument("provider_id", metavar="PROVIDER")
@click.pass_context
def test_cmd(ctx: click.Context, provider_id: str) -> None:
    """Check a provider's API key with a short live request"""
    outcome = ConnectionTester(_dispatcher(ctx)).test_connection(provider_id)
    if outcome.success:
        console.print(f"[green]✓[/green] {escape(outcome.message)}")
        return
    console.print(f"[red]×[/red] {escape(outcome.message)}")
    sys.exit(1)


@cli.command(name="diagnose")
@click.option("--provider", "provider_id", help="Only test this provider")
@click.option("--model", "model_id", help="Only test this model")
@click.pass_context
def diagnose_cmd(ctx: click.Context, provider_id: Optional[str], model_id: Optional[str]) -> None:
    """Test every catalog model and report timings"""
    if provider_id and get_provider(provider_id) is None:
        raise click.BadParameter(f"unknown provider '{provider_id}'", param_hint="--provider")

    results = run_diagnostics(_dispatcher(ctx), provider_id, model_id)
    if not results:
        console.print("[yellow]No matching models.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("API key")
    table.add_column("Request")
    table.add_column("Time", justify="right")
    table.add_column("Result", overflow="fold")

    request_styles = {
        "success": "[green]success[/green]",
        "error": "[red]error[/red]",
        "not_tested": "[dim]not tested[/dim]",
    }
    for result in results:
        table.add_row(
            result.provider_name,
            result.model_id,
            "[green]ok[/green]" if result.api_key_status == "ok" else "[red]missing[/red]",
            request_styles[result.request_status],
            f"{result.response_time_ms} ms" if result.response_time_ms is not None else "-",
            escape(result.result or ""),
        )
    console.print(table)


def _report_rows(report: ConfigurationReport) -> List[Tuple[str, str, str]]:
    rows: List[Tuple[str, str, str]] = []
    if not report.provider_id:
        rows.append(_status_row("Active model", "error", "Not configured"))
        return rows
    raw = report.active_model_raw or f"{report.provider_id}:{report.model_id} (legacy settings)"
    rows.append(_status_row("Active model", "ok", raw))

    if not report.provider_valid:
        rows.append(_status_row("Provider", "error", f"Unknown provider '{report.provider_id}'"))
        return rows
    rows.append(_status_row("Provider", "ok", report.provider_name))

    if not report.model_valid:
        rows.append(_status_row("Model", "error", f"Unknown model '{report.model_id}'"))
        return rows
    rows.append(_status_row("Model", "ok", f"{report.model_label} ({report.model_id})"))

    if report.api_key_configured:
        rows.append(_status_row("API key", "ok", "Configured"))
    else:
        rows.append(_status_row("API key", "error", "Missing"))
    return rows


@cli.command(name="doctor")
@click.pass_context
def doctor_cmd(ctx: click.Context) -> None:
    """Explain whether prompts can be sent with the stored settings"""
    report = analyze_configuration(_store(ctx))

    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("Check")
    table.add_column("")
    table.add_column("Details")
    for label, icon, detail in _report_rows(report):
        table.add_row(label, icon, escape(detail))
    console.print(table)

    if report.stored_settings:
        settings_table = Table(show_header=True, header_style="bold")
        settings_table.add_column("Setting")
        settings_table.add_column("Value")
        for key, value in report.stored_settings:
            settings_table.add_row(key, escape(value))
        console.print(settings_table)

    for issue in report.issues:
        console.print(f"[yellow]![/yellow] {escape(issue)}")
    if report.ready:
        console.print("[green]Ready to send prompts.[/green]")


@cli.command(name="migrate-settings")
@click.pass_context
def migrate_settings_cmd(ctx: click.Context) -> None:
    """Copy ai_redactor_* settings into empty ai_agent_* settings"""
    migrated = migrate_legacy_settings(_store(ctx))
    if not migrated:
        console.print("Nothing to migrate.")
        return
    for key in migrated:
        console.print(f"[green]✓[/green] {key}")
    console.print(f"Migrated {len(migrated)} setting(s).")


@cli.command(name="version")
def version_cmd() -> None:
    """Show version information"""
    console.print(f"ai-connectors version {__version__}")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except SystemExit:
        raise
    except (RuntimeError, ValueError, TypeError, OSError) as e:
        console.print(f"[red]Fatal error: {escape(str(e))}[/red]")
        logger.warning(
            "[cli] Fatal error in main CLI entrypoint: %s: %s",
            type(e).__name__,
            e,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
