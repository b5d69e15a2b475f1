"""Documentation generation command for kitedoc CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from kitedoc.cli.utils import get_config, load_provider, parse_timestamp, reporting_errors
from kitedoc.core.config import normalize_formats
from kitedoc.core.docs import DocGenerator, build_context

console = Console()


def generate(
    ctx: typer.Context,
    provider: Annotated[
        str | None,
        typer.Option("--provider", "-p", help="Provider import path (module.Attr or module:attr)"),
    ] = None,
    definition: Annotated[
        Path | None,
        typer.Option(
            "--definition",
            "-d",
            help="YAML/JSON provider definition file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory (default: output_dir from config)"),
    ] = None,
    formats: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Comma-separated formats: html, markdown, kite, combined-markdown, combined-kite",
        ),
    ] = None,
    version: Annotated[
        str | None,
        typer.Option("--version", help="Publish under a versioned layout ({version}/...)"),
    ] = None,
    known_versions: Annotated[
        list[str] | None,
        typer.Option(
            "--known-version",
            help="Additional version for the version selector (repeatable)",
        ),
    ] = None,
    timestamp: Annotated[
        str | None,
        typer.Option(
            "--timestamp",
            help="ISO-8601 generation timestamp (default: SOURCE_DATE_EPOCH or now)",
        ),
    ] = None,
) -> None:
    """Generate provider documentation in the selected formats."""
    config = get_config(ctx)
    generated_at = parse_timestamp(timestamp)

    with reporting_errors():
        selected = normalize_formats(formats) if formats else config.formats
        prov = load_provider(provider, definition)
        generator = DocGenerator.from_provider(prov, build_context(config, generated_at))
        result = generator.generate(
            output or Path(config.output_dir),
            formats=selected,
            version=version,
            known_versions=known_versions or (),
        )

    table = Table(title=f"{generator.provider.display_name} {generator.provider.version}")
    table.add_column("Format", style="cyan")
    table.add_column("Files", justify="right", style="green")
    for fmt, paths in result.written.items():
        table.add_row(fmt, str(len(paths)))
    console.print(table)
    console.print(f"[green]✓ Wrote {len(result.files)} files to {result.output_dir}[/green]")
