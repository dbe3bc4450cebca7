"""
Config initialization command.

Writes a commented default configuration file.
"""

from pathlib import Path

import click

from drivesweep.cli.formatting import print_error, print_header, print_success
from drivesweep.cli.main import pass_context
from drivesweep.core.config import DetectionConfig

CONFIG_TEMPLATE = """# drivesweep configuration

log_level: WARNING

# Duplicate detection
detection:
  similarity_threshold: {similarity_threshold}  # names must be more similar than this (0-1)
  min_cluster_size: {min_cluster_size}  # bytes; smaller files are never size/time clustered
  max_time_gap_seconds: {max_time_gap_seconds}  # largest gap inside a size/time cluster
  min_base_length: {min_base_length}  # shortest base name for version/backup patterns
  fuzzy_warn_threshold: {fuzzy_warn_threshold}  # warn when fuzzy matching more files than this
  enabled_strategies:
{strategies}

# Report output
output:
  directory: results
  format: json  # Options: json, csv, both
"""


def render_default_config() -> str:
    """Render the config template with the built-in defaults."""
    defaults = DetectionConfig()
    return CONFIG_TEMPLATE.format(
        similarity_threshold=defaults.similarity_threshold,
        min_cluster_size=defaults.min_cluster_size,
        max_time_gap_seconds=defaults.max_time_gap_seconds,
        min_base_length=defaults.min_base_length,
        fuzzy_warn_threshold=defaults.fuzzy_warn_threshold,
        strategies="\n".join(f"    - {k.value}" for k in defaults.enabled_strategies),
    )


@click.command()
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("drivesweep.yml"),
    show_default=True,
    help="Where to write the config file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@pass_context
def init(ctx, config_path: Path, force: bool):
    """Write a default configuration file."""
    print_header("drivesweep", "Configuration setup")

    if config_path.exists() and not force:
        print_error(f"{config_path} already exists (use --force to overwrite)")
        raise click.Abort()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(render_default_config(), encoding="utf-8")
    print_success(f"Wrote {config_path}")
