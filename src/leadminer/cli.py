"""Command-line interface for LeadMiner."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

import click
import structlog
from rich.console import Console
from rich.table import Table

from leadminer import __version__
from leadminer.config import Config, settings
from leadminer.crawler import HttpxPageFetcher
from leadminer.errors import ConfigurationError
from leadminer.extractor import ExtractionResult, FetchOutcome, PageDataExtractor
from leadminer.observability import configure_logging

console = Console()
logger = structlog.get_logger(__name__)

_FIELD_LABELS = {
    "extracted_emails": "Emails",
    "extracted_phones": "Phones",
    "extracted_registration_number": "IČO",
    "extracted_company_name": "Company",
    "detected_cms": "CMS",
    "detected_technologies": "Technologies",
    "social_media": "Social",
}


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _load_config(path: Optional[str]) -> Config:
    if path is None:
        return settings
    return Config.from_yaml(Path(path))


def _read_headers(path: Optional[str]) -> Dict[str, Any]:
    if path is None:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise click.BadParameter("header file must contain a JSON object", param_hint="--headers-json")
    return data


async def _extract_url(config: Config, url: str, contact_pages: bool) -> Tuple[Optional[ExtractionResult], str]:
    async with HttpxPageFetcher(config.fetch) as fetcher:
        extractor = PageDataExtractor(fetcher, config.fetch)
        if contact_pages:
            result = await extractor.extract_with_contact_pages(url)
            return result, "" if result is not None else "page could not be fetched"
        outcome: FetchOutcome = await extractor.extract_from_url_with_error(url)
        return outcome.result, outcome.error or ""


def _render_table(source: str, result: ExtractionResult) -> None:
    table = Table(title=f"Extracted from {source}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")

    metadata = result.to_metadata()
    for key, label in _FIELD_LABELS.items():
        value = metadata.get(key)
        if value is None:
            continue
        if isinstance(value, dict):
            text = "\n".join(f"{platform}: {link}" for platform, link in value.items())
        elif isinstance(value, list):
            text = "\n".join(value)
        else:
            text = str(value)
        table.add_row(label, text)

    if not metadata:
        console.print("[yellow]Nothing extracted.[/yellow]")
    else:
        console.print(table)


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
    """LeadMiner - Business contact and technology extraction from web pages."""
    ctx.ensure_object(dict)
    try:
        loaded = _load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    monitoring = loaded.monitoring
    if log_level:
        monitoring = monitoring.model_copy(update={"log_level": log_level})
    configure_logging(monitoring)

    ctx.obj["config"] = loaded


@cli.command()
@click.argument("source")
@click.option(
    "--headers-json",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON object of response headers, used when SOURCE is a file",
)
@click.option("--contact-pages", is_flag=True, help="Visit contact pages when the page has no email")
@click.option("--json", "as_json", is_flag=True, help="Print the metadata projection as JSON")
@click.pass_context
def extract(
    ctx: click.Context,
    source: str,
    headers_json: Optional[str],
    contact_pages: bool,
    as_json: bool,
) -> None:
    """Extract business signals from a URL or a local HTML file."""
    config: Config = ctx.obj["config"]
    structlog.contextvars.bind_contextvars(correlation_id=uuid4().hex)

    try:
        if _is_url(source):
            result, error = asyncio.run(_extract_url(config, source, contact_pages))
            if result is None:
                logger.warning("Extraction failed", source=source, error=error)
                console.print(f"[red]❌ Failed to fetch {source}: {error}[/red]")
                sys.exit(1)
        else:
            path = Path(source)
            if not path.is_file():
                raise click.BadParameter(f"'{source}' is neither a URL nor a file", param_hint="SOURCE")
            html = path.read_text(encoding="utf-8", errors="replace")
            result = PageDataExtractor(config=config.fetch).extract(html, _read_headers(headers_json))
    finally:
        structlog.contextvars.unbind_contextvars("correlation_id")

    if as_json:
        click.echo(json.dumps(result.to_metadata(), ensure_ascii=False, indent=2))
    else:
        _render_table(source, result)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
