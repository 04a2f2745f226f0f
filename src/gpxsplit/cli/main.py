from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from gpxsplit.config import (
    load_app_config,
    parse_distance_unit,
    parse_pace_distance,
    parse_size,
    resolve_config_path,
    save_app_config,
)
from gpxsplit.errors import GpxError
from gpxsplit.split import DistanceUnit, Split, split_from_gpx
from gpxsplit.tokens import read_gpx

logger = logging.getLogger(__name__)

_DEBUG_VALUES = {"1", "true", "yes", "on"}


def _parse_log_level(value: str | None) -> int | None:
    if not value:
        return None
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else None


def configure_logging() -> None:
    level = _parse_log_level(os.getenv("GPXSPLIT_LOG_LEVEL"))
    if level is None:
        debug = os.getenv("GPXSPLIT_DEBUG", "").lower() in _DEBUG_VALUES
        level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def format_duration(seconds: int) -> str:
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def format_pace(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


def _pace_or_none(split: Split, pace_distance: float) -> int | None:
    if split.distance <= 0:
        return None
    return split.average_pace(pace_distance)


def _pace_label(unit: DistanceUnit, pace_distance: float) -> str:
    if pace_distance == 1:
        return f"Pace (/{unit.value})"
    return f"Pace (/{pace_distance:g} {unit.value})"


def _compute_splits(
    paths: list[Path], unit: DistanceUnit, chunk_size: int
) -> tuple[list[tuple[Path, Split]], int]:
    results: list[tuple[Path, Split]] = []
    failures = 0

    def process(path: Path) -> None:
        nonlocal failures
        try:
            split = split_from_gpx(read_gpx(path), unit, chunk_size)
        except (GpxError, OSError) as exc:
            logger.error("Failed to process %s: %s", path, exc)
            failures += 1
            return
        logger.debug("%s: %s", path, split)
        results.append((path, split))

    if len(paths) < 2:
        for path in paths:
            process(path)
        return results, failures

    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=Console(stderr=True),
        transient=True,
    )
    with progress:
        task_id = progress.add_task("Reading GPX files", total=len(paths))
        for path in paths:
            process(path)
            progress.advance(task_id)
    return results, failures


def handle_summary(args: argparse.Namespace) -> None:
    config = load_app_config(args.config_path)
    unit = DistanceUnit(args.unit or config.distance_unit)
    pace_distance = (
        args.pace_distance if args.pace_distance is not None else config.pace_distance
    )

    results, failures = _compute_splits(args.gpx, unit, config.chunk_size)

    if args.json:
        for path, split in results:
            print(
                json.dumps(
                    {
                        "file": str(path),
                        "distance": round(split.distance, 4),
                        "unit": split.distance_unit.value,
                        "time": split.time,
                        "pace": _pace_or_none(split, pace_distance),
                        "pace_distance": pace_distance,
                    }
                )
            )
    elif results:
        table = Table(title="GPX splits")
        table.add_column("File")
        table.add_column(f"Distance ({unit.value})", justify="right")
        table.add_column("Time", justify="right")
        table.add_column(_pace_label(unit, pace_distance), justify="right")
        for path, split in results:
            pace = _pace_or_none(split, pace_distance)
            table.add_row(
                path.name,
                f"{split.distance:.2f}",
                format_duration(split.time),
                "-" if pace is None else format_pace(pace),
            )
        Console().print(table)

    if failures:
        raise SystemExit(1)


def _prompt_value(label: str, current, *, parser=None):
    while True:
        prompt = f"{label} [{current}]: " if current is not None else f"{label}: "
        value = input(prompt)
        if value == "":
            return current
        if parser:
            try:
                return parser(value)
            except ValueError as exc:
                print(f"Invalid {label}: {exc}")
                continue
        return value


def handle_configure(args: argparse.Namespace) -> None:
    config_path = resolve_config_path(args.config_path)
    current = load_app_config(config_path, include_env=False)

    updates: dict[str, object] = {}

    if args.non_interactive:
        if args.distance_unit is not None:
            updates["distance_unit"] = parse_distance_unit(args.distance_unit)
        if args.pace_distance is not None:
            updates["pace_distance"] = parse_pace_distance(str(args.pace_distance))
        if args.chunk_size is not None:
            updates["chunk_size"] = parse_size(args.chunk_size, current.chunk_size)

        if not updates:
            raise SystemExit("No configuration values provided.")
    else:
        updates["distance_unit"] = (
            parse_distance_unit(args.distance_unit)
            if args.distance_unit is not None
            else _prompt_value(
                "Distance unit (mi|km)",
                current.distance_unit,
                parser=parse_distance_unit,
            )
        )
        updates["pace_distance"] = (
            parse_pace_distance(str(args.pace_distance))
            if args.pace_distance is not None
            else _prompt_value(
                "Pace distance", current.pace_distance, parser=parse_pace_distance
            )
        )
        updates["chunk_size"] = (
            parse_size(args.chunk_size, current.chunk_size)
            if args.chunk_size is not None
            else _prompt_value(
                "Read chunk size",
                current.chunk_size,
                parser=lambda v: parse_size(v, current.chunk_size),
            )
        )

    updated = replace(current, **updates)
    path = save_app_config(updated, config_path)
    print(f"Saved config to {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpxsplit",
        description="Compute distance, time and pace from GPX tracks.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    configure = sub.add_parser(
        "configure", help="Configure default settings (stored on disk)."
    )
    configure.add_argument(
        "--config-path",
        type=Path,
        default=None,
        help="Optional config file path override.",
    )
    configure.add_argument(
        "--distance-unit",
        choices=["mi", "km"],
        default=None,
        help="Default distance unit.",
    )
    configure.add_argument(
        "--pace-distance",
        type=float,
        default=None,
        help="Default distance that pace is reported per.",
    )
    configure.add_argument(
        "--chunk-size",
        type=str,
        default=None,
        help="Bytes fed to the XML parser per step (bytes or KB/MB/GB).",
    )
    configure.add_argument(
        "--non-interactive",
        action="store_true",
        help="Do not prompt; only use provided flags.",
        default=False,
    )

    summary = sub.add_parser(
        "summary", help="Print total distance, time and average pace."
    )
    summary.add_argument("gpx", nargs="+", type=Path, help="GPX file(s).")
    summary.add_argument(
        "--unit",
        choices=["mi", "km"],
        default=None,
        help="Distance unit (defaults to the configured unit).",
    )
    summary.add_argument(
        "--pace-distance",
        type=float,
        default=None,
        help="Report pace as seconds per this many units.",
    )
    summary.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per file instead of a table.",
        default=False,
    )
    summary.add_argument(
        "--config-path",
        type=Path,
        default=None,
        help="Optional config file path override.",
    )

    return parser


def main() -> None:
    load_dotenv()
    configure_logging()
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "configure":
        handle_configure(args)
        return

    if args.command == "summary":
        if args.pace_distance is not None and args.pace_distance <= 0:
            parser.error("--pace-distance must be greater than 0.")
        handle_summary(args)


if __name__ == "__main__":
    main()
