"""
NL2Scry CLI

Usage:
    python -m src.nl2scry serve --port 8765
    python -m src.nl2scry translate "red dragons under 5 mana"
    python -m src.nl2scry configure --provider google --api-key ...
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape

from src import __version__
from src.common.logging import configure_sanitized_logging
from src.common.telemetry import init_telemetry, shutdown_telemetry
from src.nl2scry.config import NL2ScryConfig
from src.nl2scry.errors import ConfigurationError
from src.nl2scry.gateway import JsonFileSettingsStore, RequestGateway
from src.nl2scry.llm.factory import parse_provider
from src.nl2scry.models import DEFAULT_MODELS, ProviderConfig

app = typer.Typer(
    name="nl2scry",
    help="Translate natural language card searches into Scryfall queries",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _setup(config: NL2ScryConfig) -> None:
    configure_sanitized_logging(level=config.log_level)
    if config.telemetry_enabled:
        init_telemetry(service_name="nl2scry", otlp_endpoint=config.otlp_endpoint)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: from config)"),
    port: int | None = typer.Option(None, help="Port to bind (default: from config)"),
) -> None:
    """Run the HTTP gateway."""
    from src.nl2scry.gateway.transports.http import run_http_server

    overrides = {}
    if host:
        overrides["host"] = host
    if port:
        overrides["port"] = port
    config = NL2ScryConfig(**overrides)
    _setup(config)

    try:
        asyncio.run(run_http_server(config))
    except KeyboardInterrupt:
        console.print("Shutting down...")
    finally:
        shutdown_telemetry()


@app.command()
def translate(query: str = typer.Argument(..., help="Natural language search")) -> None:
    """Translate one query using the stored provider settings."""
    config = NL2ScryConfig()
    _setup(config)
    gateway = RequestGateway.from_config(config)

    async def _run():
        try:
            return await gateway.handle(query)
        finally:
            close = getattr(gateway.engine.resolver, "close", None)
            if close is not None:
                await close()

    try:
        result = asyncio.run(_run())
    finally:
        shutdown_telemetry()

    if result.ok:
        console.print(result.query, markup=False, highlight=False)
        return

    err_console.print(f"[red]Error:[/red] {escape(result.message or '')}")
    raise typer.Exit(code=1)


@app.command()
def configure(
    provider: str = typer.Option(..., help="google, openai or anthropic"),
    api_key: str = typer.Option(..., prompt=True, hide_input=True, help="Provider API key"),
    model: str | None = typer.Option(None, help="Model identifier (default per provider)"),
) -> None:
    """Write the provider settings file."""
    config = NL2ScryConfig()
    try:
        provider_name = parse_provider(provider)
    except ConfigurationError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e
    model_id = model or DEFAULT_MODELS[provider_name]

    store = JsonFileSettingsStore(config.settings_path)
    store.save(ProviderConfig(provider=provider_name.value, credential=api_key, model_id=model_id))
    console.print(f"Saved [bold]{provider_name.value}[/bold] ({model_id}) to {store.path}")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"nl2scry version {__version__}")


if __name__ == "__main__":
    app()
