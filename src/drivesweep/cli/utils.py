"""
Shared CLI utilities.

This module provides common utilities used across CLI commands.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import click

from drivesweep.core.config import SweepConfig
from drivesweep.core.config import load_config as load_config_file
from drivesweep.cli.formatting import console
from drivesweep.utils.exceptions import ConfigurationError
from drivesweep.utils.logging import setup_logging as configure_logging
from drivesweep.utils.logging import verbosity_to_level

DEFAULT_CONFIG_FILES = ("drivesweep.yml", "config.yml")


def load_config(config_path: Optional[Path] = None) -> SweepConfig:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, looks for
            drivesweep.yml or config.yml in the working directory

    Returns:
        Loaded and validated SweepConfig

    Raises:
        click.ClickException: If config is invalid
    """
    if config_path is None:
        for candidate in DEFAULT_CONFIG_FILES:
            if Path(candidate).exists():
                config_path = Path(candidate)
                break
        else:
            return SweepConfig()

    try:
        return load_config_file(config_path)
    except FileNotFoundError:
        raise click.ClickException(f"Config file not found: {config_path}")
    except ConfigurationError as e:
        raise click.ClickException(str(e))


def generate_run_id() -> str:
    """Generate a timestamp-based run ID.

    Returns:
        Run ID string (e.g., 'sweep_2025-11-15_143022')
    """
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    return f"sweep_{timestamp}"


def save_metadata(
    output_dir: Path,
    metadata: Dict[str, Any],
    filename: str = "metadata.json"
) -> None:
    """Save run metadata to a JSON file next to the reports."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(output_dir / filename, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, default=str)
    except OSError as e:
        console.print(f"[yellow]Warning: Could not save metadata: {e}[/yellow]")


def setup_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Set up logging based on verbosity level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        quiet: If True, suppress all non-error output
    """
    configure_logging(level=verbosity_to_level(verbose, quiet))
