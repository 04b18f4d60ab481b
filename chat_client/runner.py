"""
CLI entrypoint for the chat client configuration.
"""
import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from chat_client.logs import configure_logging
from chat_client.probe import ProbeResult, probe_api, probe_websocket
from chat_client.settings import settings
from chat_client.store import ChatConfig

app = typer.Typer(help="Chat client configuration inspector")

HOSTNAME_OPTION = typer.Option(None, "--hostname", help="Host name to run environment detection against")
ENVIRONMENT_OPTION = typer.Option(None, "--environment", "-e", help="Force an environment: development, staging, production")
OVERRIDES_OPTION = typer.Option(None, "--overrides", help="JSON file with a partial configuration to apply")


@app.callback()
def main(log_level: str = typer.Option(settings.LOG_LEVEL, help="Log level for diagnostics on stderr")):
    try:
        configure_logging(log_level)
    except ValueError as e:
        typer.echo(f"Invalid log level {log_level!r}: {e}", err=True)
        raise typer.Exit(2)


def load_config(hostname: Optional[str], environment: Optional[str], overrides_file: Optional[Path]) -> ChatConfig:
    overrides: dict[str, Any] = {}
    if overrides_file is not None:
        try:
            loaded = json.loads(overrides_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            typer.echo(f"Could not read overrides from {overrides_file}: {e}", err=True)
            raise typer.Exit(2)
        if isinstance(loaded, dict):
            overrides.update(loaded)
    if environment:
        overrides["ENVIRONMENT"] = environment
    return ChatConfig.build(hostname=hostname or settings.HOSTNAME, overrides=overrides or None)


def _settings_table(title: str, values: dict[str, Any]) -> Table:
    table = Table(title=title, expand=True)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for key, value in values.items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        table.add_row(key, str(value))
    return table


@app.command()
def show(
    hostname: Optional[str] = HOSTNAME_OPTION,
    environment: Optional[str] = ENVIRONMENT_OPTION,
    overrides: Optional[Path] = OVERRIDES_OPTION,
):
    """Render the active configuration as rich tables."""
    cfg = load_config(hostname, environment, overrides)
    data = cfg.as_dict()
    console = Console()

    color = "green" if cfg.is_production() else "yellow" if cfg.is_development() else "blue"
    console.print(Panel(f"[{color} bold]Environment: {cfg.ENVIRONMENT}[/]", style=color))
    console.print(_settings_table("URLs", {k: v for k, v in cfg.summary().items() if k != "environment"}))
    console.print(_settings_table("WS_CONFIG", data["WS_CONFIG"]))
    console.print(_settings_table("API_CONFIG", data["API_CONFIG"]))
    console.print(_settings_table("APP_CONFIG", data["APP_CONFIG"]))

    features = Table(title="FEATURES", expand=True)
    features.add_column("Feature", style="magenta", no_wrap=True)
    features.add_column("Enabled")
    for name in cfg.FEATURES:
        enabled = cfg.is_feature_enabled(name)
        features.add_row(name, "[green]yes[/]" if enabled else "[red]no[/]")
    console.print(features)


@app.command()
def urls(
    hostname: Optional[str] = HOSTNAME_OPTION,
    environment: Optional[str] = ENVIRONMENT_OPTION,
    overrides: Optional[Path] = OVERRIDES_OPTION,
):
    """Print the derived backend, API and WebSocket URLs."""
    cfg = load_config(hostname, environment, overrides)
    typer.echo(f"environment={cfg.ENVIRONMENT}")
    typer.echo(f"backend={cfg.get_backend_url()}")
    typer.echo(f"api={cfg.get_api_url()}")
    typer.echo(f"ws={cfg.get_websocket_url()}")


@app.command()
def feature(
    name: str = typer.Argument(..., help="Feature flag name, e.g. fileUpload"),
    hostname: Optional[str] = HOSTNAME_OPTION,
    environment: Optional[str] = ENVIRONMENT_OPTION,
    overrides: Optional[Path] = OVERRIDES_OPTION,
):
    """Report a feature flag. Exits 1 when the flag is off."""
    cfg = load_config(hostname, environment, overrides)
    enabled = cfg.is_feature_enabled(name)
    typer.echo(f"{name}: {'enabled' if enabled else 'disabled'}")
    if not enabled:
        raise typer.Exit(1)


def _echo_probe(result: ProbeResult) -> None:
    status = "ok" if result.ok else "FAILED"
    line = f"{result.target} {status} url={result.url} attempts={result.attempts} elapsed_ms={result.elapsed_ms:.1f}"
    if result.status_code is not None:
        line += f" status={result.status_code}"
    if result.error:
        line += f" error={result.error}"
    typer.echo(line)


@app.command()
def check(
    websocket: bool = typer.Option(False, "--websocket", help="Also open a WebSocket to the derived WS URL"),
    path: str = typer.Option("/health", help="Path under the API URL to GET"),
    hostname: Optional[str] = HOSTNAME_OPTION,
    environment: Optional[str] = ENVIRONMENT_OPTION,
    overrides: Optional[Path] = OVERRIDES_OPTION,
):
    """Probe the configured backend. Exits 1 if any probe fails."""
    cfg = load_config(hostname, environment, overrides)
    results = [probe_api(cfg, path=path)]
    if websocket:
        results.append(asyncio.run(probe_websocket(cfg)))

    for result in results:
        _echo_probe(result)
    if not all(r.ok for r in results):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
