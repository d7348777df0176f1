"""
Main entry point for workout progression tracking.

Provides CLI interface for fetching the progression sheet, parsing
cells, exporting exercise data, printing summaries and generating
charts.
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Dict, List, Optional

from .config import AppConfig
from .models import Exercise
from .parser import parse_cell
from .cache import SheetCache
from .sheets_client import (
    GoogleSheetsClient,
    SheetsError,
    load_grid,
    load_grid_from_file,
    save_grid_to_file,
)
from .analyzer import (
    ChartViewMode,
    build_exercise_map,
    calculate_exercise_summary,
    filter_exercises,
)
from .exporter import JsonExporter, exercises_error_payload
from .visualizations import plot_exercise_progression, plot_personal_records


logger = logging.getLogger(__name__)


def make_client(config: AppConfig) -> Optional[GoogleSheetsClient]:
    """Create a sheets client if the API is configured."""
    if config.sheets is None:
        return None
    return GoogleSheetsClient(config.sheets, SheetCache(config.cache.ttl_seconds))


def load_rows(config: AppConfig, filepath: Optional[Path] = None) -> List[List[str]]:
    """
    Load the raw grid from a file, or from the API with the local
    snapshot as fallback.

    Parameters:
        config: Application configuration.
        filepath: Explicit TSV/CSV export. Skips the API when given.

    Returns:
        Raw grid rows.
    """
    if filepath is not None:
        return load_grid_from_file(filepath)

    client = make_client(config)
    return load_grid(
        config.paths.sheet_export, use_api=client is not None, client=client
    )


def load_exercises(
    config: AppConfig, filepath: Optional[Path] = None
) -> Dict[str, Exercise]:
    """Load the grid and build the exercise map."""
    return build_exercise_map(load_rows(config, filepath))


def print_summary(exercises: Dict[str, Exercise]) -> None:
    """
    Print summary of every exercise.

    Parameters:
        exercises: Exercise map.
    """
    print("\n" + "=" * 60)
    print("PROGRESSION SUMMARY")
    print("=" * 60)

    if not exercises:
        print("\n   No exercises found")

    for exercise in exercises.values():
        summary = calculate_exercise_summary(exercise)
        print(f"\n🏋️  {summary['name']}")
        print(f"   Sessions: {summary['sessions']} ({summary['total_sets']} sets)")

        unit = "sec" if summary["is_time"] else "kg"
        if summary["best"]:
            best = summary["best"]
            print(
                f"   Best: {best['weight']} {unit} x {best['reps']} "
                f"({best['session']})"
            )
        if summary["latest"]:
            latest = summary["latest"]
            print(f"   Latest: {latest['weight']} {unit} x {latest['reps']}")
        if summary["volume_change"] is not None:
            print(f"   Change: {summary['volume_change']:+.1f}%")
        if summary["parse_errors"]:
            locations = ", ".join(e.location for e in exercise.parse_errors)
            print(f"   Unparsed cells: {locations}")

    print("\n" + "=" * 60)


def cmd_fetch(args: argparse.Namespace, config: AppConfig) -> None:
    """Fetch the sheet from the API and save a local snapshot."""
    client = make_client(config)
    if client is None:
        raise ValueError("Google Sheets not configured. Set GOOGLE_SHEETS_ID and credentials.")

    rows = client.fetch_sheet_data(force_refresh=True)
    save_grid_to_file(rows, config.paths.sheet_export)


def cmd_parse(args: argparse.Namespace, config: AppConfig) -> None:
    """Parse a single cell value and print the result as JSON."""
    entry = parse_cell(args.value)
    print(json.dumps(entry.to_dict() if entry else None, indent=2))


def cmd_export(args: argparse.Namespace, config: AppConfig) -> None:
    """Export exercise data to JSON."""
    output_dir = Path(args.output) if args.output else config.paths.output_dir
    exporter = JsonExporter(output_dir)

    try:
        exercises = load_exercises(config, _file_arg(args))
    except (SheetsError, ValueError, FileNotFoundError) as e:
        exporter.export_error(e)
        raise

    exporter.export_all(exercises)


def cmd_analyze(args: argparse.Namespace, config: AppConfig) -> None:
    """Print progression summary."""
    exercises = load_exercises(config, _file_arg(args))
    print_summary(filter_exercises(exercises, args.filter))


def cmd_visualize(args: argparse.Namespace, config: AppConfig) -> None:
    """Generate progression charts."""
    exercises = filter_exercises(
        load_exercises(config, _file_arg(args)), args.exercise
    )

    output_dir = config.paths.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    show = not args.no_show
    mode = ChartViewMode(args.mode)

    logger.info(f"Generating {mode.value} charts for {len(exercises)} exercises...")
    for i, exercise in enumerate(exercises.values(), start=1):
        plot_exercise_progression(
            exercise, mode, output_dir / f"progression_{i:02d}.png", show
        )

    plot_personal_records(exercises, output_dir / "personal_records.png", show)


def _file_arg(args: argparse.Namespace) -> Optional[Path]:
    """Return the --file argument as a Path, if given."""
    return Path(args.file) if getattr(args, "file", None) else None


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    parser = argparse.ArgumentParser(
        description="Gym log parsing and exercise progression"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # fetch command
    subparsers.add_parser("fetch", help="Fetch sheet and save local snapshot")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse a single cell value")
    parse_parser.add_argument("value", help='Cell text, e.g. "10kg/12"')

    # export command
    export_parser = subparsers.add_parser("export", help="Export exercise JSON")
    export_parser.add_argument("--file", "-f", type=str, help="TSV/CSV sheet export")
    export_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Custom output directory (default: output dir)",
    )

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Show progression summary")
    analyze_parser.add_argument("--file", "-f", type=str, help="TSV/CSV sheet export")
    analyze_parser.add_argument("--filter", type=str, help="Exercise name filter")

    # visualize command
    viz_parser = subparsers.add_parser("visualize", help="Generate charts")
    viz_parser.add_argument("--file", "-f", type=str, help="TSV/CSV sheet export")
    viz_parser.add_argument("--exercise", type=str, help="Exercise name filter")
    viz_parser.add_argument(
        "--mode",
        choices=[m.value for m in ChartViewMode],
        default=ChartViewMode.VOLUME.value,
        help="Series to plot",
    )
    viz_parser.add_argument(
        "--no-show", action="store_true", help="Save plots without displaying"
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = AppConfig.load()

    commands = {
        "fetch": cmd_fetch,
        "parse": cmd_parse,
        "export": cmd_export,
        "analyze": cmd_analyze,
        "visualize": cmd_visualize,
    }

    try:
        commands[args.command](args, config)
    except (SheetsError, ValueError, FileNotFoundError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(json.dumps(exercises_error_payload(e)))
        sys.exit(1)


if __name__ == "__main__":
    main()
