"""Provider inspection command for kitedoc CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from kitedoc.cli.utils import get_config, load_provider, reporting_errors
from kitedoc.core.docs import DocGenerator, build_context
from kitedoc.core.docs.formatting import truncate

console = Console()

DESCRIPTION_WIDTH = 50


def inspect(
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
) -> None:
    """Show the resources of a provider grouped by domain."""
    config = get_config(ctx)

    with reporting_errors():
        prov = load_provider(provider, definition)
        generator = DocGenerator.from_provider(prov, build_context(config))

    info = generator.provider
    table = Table(title=f"{info.display_name} Provider {info.version}")
    table.add_column("Domain", style="cyan")
    table.add_column("Resource", style="bold")
    table.add_column("Properties", justify="right")
    table.add_column("Cloud", justify="right", style="magenta")
    table.add_column("Description", style="dim")

    for group in generator.grouping:
        for index, resource in enumerate(group.resources):
            table.add_row(
                f"{group.icon} {group.title}" if index == 0 else "",
                resource.name,
                str(len(resource.user_properties)),
                str(len(resource.cloud_properties)),
                truncate(resource.description, DESCRIPTION_WIDTH),
            )

    console.print(table)
    console.print(
        f"[dim]{len(generator.resources)} resources in {len(generator.grouping)} domains[/dim]"
    )
