"""
Main CLI entry point for drivesweep.

This module provides the main CLI group and global options.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from drivesweep import __version__
from drivesweep.cli.formatting import console, print_error
from drivesweep.cli.utils import setup_logging


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.quiet: bool = False


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config file (default: drivesweep.yml)",
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Enable verbose logging (can be repeated: -vv)",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="drivesweep")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: int, quiet: bool):
    """
    drivesweep - find duplicate files in a drive snapshot

    Classifies likely duplicates in exported drive file metadata using six
    heuristics (identical checksum, version names, backup names, similar
    names, size/time clusters, identical names) and suggests cleanups.

    \b
    Typical workflow:
      1. drivesweep init                          # Write a default config
      2. drivesweep detect --input files.json     # Analyze a snapshot
    """
    cli_ctx = ctx.ensure_object(CLIContext)
    cli_ctx.config_path = config
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    setup_logging(verbose=verbose, quiet=quiet)


# Commands register at import time so they exist when cli() runs.
from drivesweep.cli.detect import detect  # noqa: E402
from drivesweep.cli.init import init  # noqa: E402

cli.add_command(detect)
cli.add_command(init)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
