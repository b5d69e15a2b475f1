"""Manifest command for kitedoc CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from kitedoc.cli.utils import get_config, load_provider, parse_timestamp, reporting_errors
from kitedoc.core.docs import DocGenerator, DocumentTree, build_context, write_tree
from kitedoc.core.docs.manifest import manifest_document

console = Console()


def manifest(
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
        typer.Option(
            "--output",
            "-o",
            help="Write the manifest to this file instead of stdout",
            dir_okay=False,
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
    """Print or write the machine-readable manifest of a provider version."""
    config = get_config(ctx)
    generated_at = parse_timestamp(timestamp)

    with reporting_errors():
        prov = load_provider(provider, definition)
        generator = DocGenerator.from_provider(prov, build_context(config, generated_at))
        document = manifest_document(
            generator.provider,
            generator.grouping,
            generator.context,
            path=output.name if output else "manifest.json",
        )

        if output is None:
            typer.echo(document.render(), nl=False)
            return

        write_tree(DocumentTree.of([document]), output.parent)

    console.print(f"[green]✓ Manifest written to {output}[/green]")
