"""Command-line interface for folioscrape."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
import uvicorn
from pydantic import ValidationError as ConfigValidationError
from rich.console import Console
from rich.table import Table

from folioscrape import __version__
from folioscrape.config.config import Config, load_config
from folioscrape.exceptions import FetchError, ValidationError
from folioscrape.extractor.engine import extract_portfolio_html
from folioscrape.observability.logging import configure_logging
from folioscrape.service import PortfolioScraper, validate_url

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger(__name__)


def _load(ctx: click.Context) -> Config:
    config_path: Optional[Path] = ctx.obj["config_path"]
    try:
        config = load_config(config_path)
    except (ConfigValidationError, FileNotFoundError) as e:
        err_console.print(f"[red]Invalid configuration: {e}[/red]")
        sys.exit(1)
    config.monitoring.log_level = ctx.obj["log_level"] or config.monitoring.log_level
    configure_logging(config.monitoring)
    return config


def _print_record(data: dict, pretty: bool) -> None:
    if pretty:
        console.print_json(json.dumps(data))
    else:
        click.echo(json.dumps(data, indent=2))


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """folioscrape - extract a candidate profile from a portfolio page."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None
    ctx.obj["log_level"] = log_level


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Start the HTTP API."""
    from folioscrape.web.main import create_app

    config = _load(ctx)
    app = create_app(config)
    console.print(f"[green]Portfolio Scraper API on http://{host or config.web.host}:{port or config.web.port}[/green]")
    uvicorn.run(
        app,
        host=host or config.web.host,
        port=port or config.web.port,
        log_level=config.monitoring.log_level.lower(),
    )


@cli.command()
@click.argument("url")
@click.option("--no-browser", is_flag=True, help="Fetch with a plain HTTP GET instead of headless Chromium")
@click.option("--pretty/--raw", default=True, help="Colourised JSON output")
@click.pass_context
def scrape(ctx: click.Context, url: str, no_browser: bool, pretty: bool) -> None:
    """Fetch URL and print the extracted record as JSON."""
    config = _load(ctx)
    if no_browser:
        config.fetcher.render_javascript = False

    try:
        record = asyncio.run(PortfolioScraper(config).scrape(url))
    except ValidationError as e:
        err_console.print(f"[red]{e}[/red]")
        sys.exit(2)
    except FetchError as e:
        err_console.print(f"[red]Failed to scrape portfolio: {e}[/red]")
        sys.exit(1)

    _print_record(record.to_dict(), pretty)


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--base-url", required=True, help="URL the page was saved from, used to resolve relative links")
@click.option("--pretty/--raw", default=True, help="Colourised JSON output")
def extract(html_file: Path, base_url: str, pretty: bool) -> None:
    """Run the extraction passes over a saved HTML file."""
    try:
        source_url = validate_url(base_url)
    except ValidationError as e:
        err_console.print(f"[red]--base-url: {e}[/red]")
        sys.exit(2)

    html = html_file.read_text(encoding="utf-8", errors="replace")
    record = extract_portfolio_html(html, source_url)
    _print_record(record.to_dict(), pretty)


@cli.command("validate-config")
@click.pass_context
def validate_config(ctx: click.Context) -> None:
    """Validate the current configuration."""
    config = _load(ctx)

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("render_javascript", str(config.fetcher.render_javascript))
    table.add_row("fallback_to_http", str(config.fetcher.fallback_to_http))
    table.add_row("timeout", f"{config.fetcher.timeout}s")
    table.add_row("chromium_executable_path", config.fetcher.chromium_executable_path or "-")
    table.add_row("listen", f"{config.web.host}:{config.web.port}")
    table.add_row("cors_origins", ", ".join(config.web.cors_origins))
    table.add_row("log_level", config.monitoring.log_level)
    console.print(table)
    console.print("[green]Configuration is valid.[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
