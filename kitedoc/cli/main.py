"""kitedoc CLI - Main entrypoint."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from kitedoc import __version__
from kitedoc.cli.commands import generate_cmd, inspect_cmd, manifest_cmd
from kitedoc.cli.utils import reporting_errors
from kitedoc.core.config import load_config
from kitedoc.core.logging import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Create the main Typer app
app = typer.Typer(
    name="kitedoc",
    help="kitedoc - Documentation generator for Kite infrastructure providers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

# Create console for rich output
console = Console()

app.command("generate", help="Generate provider documentation")(generate_cmd.generate)
app.command("manifest", help="Print or write the provider manifest")(manifest_cmd.manifest)
app.command("inspect", help="Show the resources of a provider grouped by domain")(
    inspect_cmd.inspect
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]kitedoc[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Only log errors")] = False,
    verbose: Annotated[bool, typer.Option("-V", "--verbose", help="Enable debug logging")] = False,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Log level: debug|info|warning|error|critical")
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to kitedoc.toml or pyproject.toml")
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """kitedoc - Documentation generator for Kite infrastructure providers.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    with reporting_errors():
        config = load_config(config_path)

    # Compute effective log level
    effective_level = (log_level or config.logging.level).upper()
    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"
    if effective_level == "WARN":
        effective_level = "WARNING"
    if effective_level not in LOG_LEVELS:
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")

    configure_logging(
        level=effective_level,  # type: ignore[arg-type]
        format=config.logging.format,
        output_file=config.logging.output_file,
        use_color=config.logging.use_color,
        include_timestamp=config.logging.include_timestamp,
    )

    ctx.obj = {"config": config, "log_level": effective_level, "quiet": quiet}


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
