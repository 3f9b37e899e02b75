"""
docsync CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from docsync import __version__
from docsync.cli import sync
from docsync.core.config.env import load_layered_env

app = typer.Typer(
    name="docsync",
    help="Keep generated status sections in the docs in sync with beads",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def configure_logging(debug: bool) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, log at DEBUG level; otherwise only warnings
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    docsync - beads-backed status docs.

    Rewrites the marker-delimited generated sections of the progress
    tracker and the vision document from the beads issue tracker.

    Quick Start:
        docsync sync                 # Refresh the docs
        docsync sync --check         # CI: fail when docs are stale
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    configure_logging(debug)

    ctx.obj = {"debug": debug}


app.command(name="sync")(sync.sync)


@app.command()
def version() -> None:
    """Show docsync version and exit."""
    console.print(f"docsync version {__version__}", highlight=False)
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
