"""CLI entry point for efatura."""

import logging
import sys
from pathlib import Path

import click
import yaml

from .adapters.source import YamlDocumentSource
from .config import LoggingConfig, load_settings
from .domain import EFaturaError, Invoice, WorkDocument

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, config: LoggingConfig | None = None) -> None:
    config = config or LoggingConfig()
    level = logging.DEBUG if verbose else logging.getLevelNamesMapping()[config.level]
    logging.basicConfig(
        level=level,
        format=config.format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def describe(document: Invoice | WorkDocument) -> str:
    """One-line summary of a document: kind and number."""
    if isinstance(document, Invoice):
        header = document.invoice_data.invoice_header
        return f"invoice {header.invoice_type.value} {header.invoice_no}"
    header = document.work_data.work_header
    return f"work document {header.work_type.value} {header.document_number}"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """e-Fatura document model tools."""
    settings = load_settings(Path(config) if config else None)
    setup_logging(verbose, settings.logging)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.pass_context
def validate(ctx: click.Context, files: tuple[Path, ...]) -> None:
    """Build documents from YAML files and report rule violations."""
    source = YamlDocumentSource(ctx.obj["settings"].submitter)

    error_count = 0
    for path in files:
        try:
            document = source.load(path)
        except EFaturaError as e:
            error_count += 1
            click.echo(f"✗ {path.name}: {e}", err=True)
            continue
        click.echo(f"✓ {path.name}: {describe(document)}")

    if error_count:
        click.echo(f"\n{error_count} of {len(files)} documents invalid", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    click.echo(yaml.safe_dump(ctx.obj["settings"].model_dump(), sort_keys=False))


if __name__ == "__main__":
    cli()
