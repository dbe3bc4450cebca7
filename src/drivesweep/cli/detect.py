"""
Detect command.

Loads a file-metadata snapshot, runs duplicate detection and writes the
resulting groups and recommendations.
"""

import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import click

from drivesweep.cli.formatting import (
    console,
    format_duration,
    format_number,
    print_config,
    print_error,
    print_groups,
    print_header,
    print_recommendations,
    print_section,
    print_statistics,
    print_success,
)
from drivesweep.cli.main import pass_context
from drivesweep.cli.utils import generate_run_id, load_config, save_metadata
from drivesweep.core.models import DuplicateKind
from drivesweep.core.snapshot import load_snapshot
from drivesweep.detection import DuplicateDetector
from drivesweep.export import CSVExporter, JSONExporter
from drivesweep.utils.exceptions import DriveSweepError
from drivesweep.utils.formatting import format_bytes
from drivesweep.utils.logging import setup_logging

KIND_CHOICES = [kind.value for kind in DuplicateKind]


@click.command()
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Snapshot file (.json, .jsonl or .csv)",
)
@click.option(
    "--format",
    "input_format",
    type=click.Choice(["auto", "json", "jsonl", "csv"], case_sensitive=False),
    default="auto",
    help="Input format",
)
@click.option(
    "--similarity-threshold",
    type=click.FloatRange(0.0, 1.0),
    help="Name similarity threshold 0.0-1.0",
)
@click.option(
    "--disable",
    "disabled",
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    multiple=True,
    help="Skip a strategy (repeatable)",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: from config)",
)
@click.option(
    "--export-format",
    type=click.Choice(["json", "csv", "all"], case_sensitive=False),
    help="Report formats (default: from config)",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=20,
    show_default=True,
    help="Number of groups to display",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on the first invalid record instead of skipping it",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show results without writing reports",
)
@pass_context
def detect(
    ctx,
    input_path: Path,
    input_format: str,
    similarity_threshold: Optional[float],
    disabled: Tuple[str, ...],
    output_path: Optional[Path],
    export_format: Optional[str],
    limit: int,
    strict: bool,
    dry_run: bool,
):
    """Find duplicate files in a snapshot.

    \b
    Examples:
      # Analyze a Drive files.list export
      drivesweep detect --input files.json

      # Skip the slow fuzzy name matching
      drivesweep detect --input files.jsonl --disable similar_name

      # Only print results
      drivesweep detect --input files.csv --dry-run
    """
    start_time = time.time()

    print_header("drivesweep", "Duplicate detection")

    config = load_config(ctx.config_path)
    if not ctx.verbose and not ctx.quiet:
        setup_logging(level=config.log_level)

    detection_config = config.detection
    if similarity_threshold is not None:
        detection_config.similarity_threshold = similarity_threshold
    if disabled:
        skip = {d.lower() for d in disabled}
        detection_config.enabled_strategies = [
            k for k in detection_config.enabled_strategies if k.value not in skip
        ]

    console.print("[bold]Loading snapshot...[/bold]")
    try:
        files = load_snapshot(input_path, format=input_format.lower(), strict=strict)
    except DriveSweepError as e:
        raise click.ClickException(str(e))

    if not files:
        print_error("No file records found in input")
        raise click.Abort()

    console.print(f"  Loaded {format_number(len(files))} files\n")

    print_config({
        "Input": str(input_path),
        "Files": format_number(len(files)),
        "Strategies": [k.value for k in detection_config.enabled_strategies] or "none",
        "Similarity threshold": detection_config.similarity_threshold,
    })

    if dry_run:
        console.print("\n[yellow]DRY RUN - No reports will be written[/yellow]")

    detector = DuplicateDetector(files, config=detection_config)
    with console.status("Detecting duplicates..."):
        report = detector.analyze()

    stats = report.statistics
    console.print()
    console.rule()
    print_success("Detection complete!")
    console.print()

    print_statistics({
        "Files analyzed": format_number(stats["total_files"]),
        "Duplicate groups": format_number(stats["duplicate_groups"]),
        "Redundant files": format_number(stats["redundant_files"]),
        "Duplicate rate": stats["duplicate_rate"],
        "Wasted space": format_bytes(stats["wasted_bytes"]),
        "Auto-resolvable groups": format_number(stats["auto_resolvable_groups"]),
    })

    if report.groups:
        console.print()
        print_groups(report.groups, limit=limit)
    else:
        console.print("\n  No duplicates found")

    print_recommendations(report.recommendations)

    if dry_run:
        console.print("\n[yellow]Dry run complete - no files written[/yellow]")
        return

    formats = (export_format or config.output.format).lower()
    run_id = generate_run_id()
    output_dir = (output_path or config.output.directory) / run_id

    print_section("Saving results")
    try:
        if formats in ("json", "both", "all"):
            json_file = JSONExporter(output_dir).export_report(report, "report")
            console.print(f"  ✓ Report (JSON): [cyan]{json_file}[/cyan]")
        if formats in ("csv", "both", "all"):
            csv_file = CSVExporter(output_dir).export_report(report, "groups")
            console.print(f"  ✓ Groups (CSV): [cyan]{csv_file}[/cyan]")
    except DriveSweepError as e:
        raise click.ClickException(str(e))

    save_metadata(output_dir, {
        "run_id": run_id,
        "timestamp": datetime.now().isoformat(),
        "input": str(input_path),
        "config": detection_config.model_dump(mode="json"),
        "statistics": stats,
        "duration_seconds": round(time.time() - start_time, 3),
    })

    console.print()
    console.print(f"  Output: [cyan]{output_dir}[/cyan]")
    console.print(f"  Duration: [cyan]{format_duration(time.time() - start_time)}[/cyan]")
    console.print()
