"""Command-line interface for SiteProfile."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from siteprofile import __version__
from siteprofile.config.config import Config, load_config
from siteprofile.exceptions import ProfileError
from siteprofile.export import EXPORT_FORMATS, get_exporter
from siteprofile.extractor.models import ExtractionRecord
from siteprofile.observability import configure_logging
from siteprofile.service import BusinessProfileService

console = Console(stderr=True)
logger = structlog.get_logger(__name__)


def _summary_table(record: ExtractionRecord) -> Table:
    table = Table(title="Business Profile")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Title", record.website_title)
    table.add_row("Business type", record.business_type)
    table.add_row("Email", record.email)
    table.add_row("Phone", record.phone)
    table.add_row("Address", record.address)
    table.add_row("Social profiles", str(len(record.social_media)))
    table.add_row("Technologies", ", ".join(record.technologies))
    return table


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """SiteProfile - business profile extraction from websites."""
    ctx.ensure_object(dict)
    try:
        loaded = load_config(Path(config) if config else None)
    except (ValidationError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if log_level:
        loaded.monitoring.log_level = log_level
    configure_logging(loaded.monitoring)
    ctx.obj["config"] = loaded


@cli.command()
@click.argument("url")
@click.option(
    "--format",
    "output_format",
    default="json",
    type=click.Choice(EXPORT_FORMATS),
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Write to this file (or into this directory)")
@click.option("--summary", is_flag=True, help="Print a summary table to stderr")
@click.pass_context
def extract(ctx: click.Context, url: str, output_format: str, output: Optional[str], summary: bool) -> None:
    """Extract the business profile of URL."""
    config: Config = ctx.obj["config"]
    service = BusinessProfileService(config)

    try:
        record = asyncio.run(service.extract_business_profile(url))
    except ProfileError as e:
        console.print(f"[red]Extraction failed: {e}[/red]")
        sys.exit(1)

    if summary:
        console.print(_summary_table(record))

    exporter = get_exporter(output_format)
    if output:
        path = Path(output)
        if path.is_dir():
            path = path / exporter.default_filename()
        exporter.export(record, path)
        console.print(f"[green]Profile saved to {path}[/green]")
    else:
        click.echo(exporter.render(record))


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Start the HTTP API."""
    from siteprofile.web.main import run_web_server

    config: Config = ctx.obj["config"]
    host = host or config.web.host
    port = port or config.web.port
    console.print(f"[green]Starting SiteProfile API at http://{host}:{port}[/green]")
    run_web_server(host=host, port=port)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
