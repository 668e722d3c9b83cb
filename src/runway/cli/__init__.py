"""
Runway CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from runway import __version__
from runway.cli import run, test
from runway.cli.argv import preprocess_argv
from runway.core.config.env import load_layered_env

# Create the main Typer app
app = typer.Typer(
    name="runway",
    help="Build and run programs on the JVM, as linked scripts, or as native binaries",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
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
    Runway - build, run, and rerun programs.

    Quick Start:
        runway run .                 # Build and run
        runway run . -- a b          # Pass arguments to the program
        runway run . --watch         # Rerun on every change
        runway test .                # Run the tests
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    setup_logging(debug)

    ctx.obj = {"debug": debug}


app.command(name="run")(run.run)
app.command(name="test")(test.test)


@app.command()
def version() -> None:
    """Show runway version and exit."""
    console.print(f"runway version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """
    Main CLI entry point.

    The argv preprocessor normalizes common patterns before Typer parses
    them (e.g. ``runway --version``, ``runway help run``,
    ``runway run . -- a b``).
    """
    sys.argv[1:] = preprocess_argv(sys.argv[1:])
    app()


__all__ = ["app", "cli_main"]
