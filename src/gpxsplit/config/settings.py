from __future__ import annotations

import configparser
import io
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from gpxsplit.split import DistanceUnit
from gpxsplit.tokens import DEFAULT_CHUNK_SIZE


DEFAULT_DISTANCE_UNIT = DistanceUnit.MILES.value
DEFAULT_PACE_DISTANCE = 1.0
DISTANCE_UNITS = tuple(unit.value for unit in DistanceUnit)


@dataclass(frozen=True)
class AppConfig:
    distance_unit: str
    pace_distance: float
    chunk_size: int


def _default_config_dir() -> Path:
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "gpxsplit"


def resolve_config_path(explicit: Path | None = None) -> Path:
    if explicit is not None:
        return explicit.expanduser()
    env_path = os.getenv("GPXSPLIT_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return _default_config_dir() / "config.ini"


def parse_size(value: str | None, default: int) -> int:
    if not value:
        return default
    text = value.strip().lower()
    if not text:
        return default
    if text.isdigit():
        return max(1, int(text))
    units = {"kb": 1024, "mb": 1024**2, "gb": 1024**3}
    for suffix, multiplier in units.items():
        if text.endswith(suffix):
            number = text[: -len(suffix)].strip()
            if not number:
                raise ValueError("Missing size value.")
            return max(1, int(float(number) * multiplier))
    raise ValueError(f"Unrecognized size '{value}'. Use bytes or KB/MB/GB.")


def parse_distance_unit(value: str) -> str:
    lowered = value.strip().lower()
    if lowered not in DISTANCE_UNITS:
        raise ValueError("Distance unit must be 'mi' or 'km'.")
    return lowered


def parse_pace_distance(value: str) -> float:
    parsed = float(value)
    if parsed <= 0:
        raise ValueError("Value must be greater than 0.")
    return parsed


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_field(value: str | None, name: str, parser, default):
    text = _clean(value)
    if text is None:
        return default
    try:
        return parser(text)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {value!r} ({exc})") from None


def load_app_config(
    config_path: Path | None = None, include_env: bool = True
) -> AppConfig:
    path = resolve_config_path(config_path)
    parser = configparser.ConfigParser()
    if path.is_file():
        parser.read(path)
    section = parser["default"] if parser.has_section("default") else {}

    distance_unit = _parse_field(
        section.get("distance_unit"),
        "distance_unit",
        parse_distance_unit,
        DEFAULT_DISTANCE_UNIT,
    )
    pace_distance = _parse_field(
        section.get("pace_distance"),
        "pace_distance",
        parse_pace_distance,
        DEFAULT_PACE_DISTANCE,
    )
    chunk_size = _parse_field(
        section.get("chunk_size"),
        "chunk_size",
        lambda v: parse_size(v, DEFAULT_CHUNK_SIZE),
        DEFAULT_CHUNK_SIZE,
    )

    if include_env:
        distance_unit = _parse_field(
            os.getenv("GPXSPLIT_DISTANCE_UNIT"),
            "distance_unit",
            parse_distance_unit,
            distance_unit,
        )
        pace_distance = _parse_field(
            os.getenv("GPXSPLIT_PACE_DISTANCE"),
            "pace_distance",
            parse_pace_distance,
            pace_distance,
        )
        chunk_size = _parse_field(
            os.getenv("GPXSPLIT_CHUNK_SIZE"),
            "chunk_size",
            lambda v: parse_size(v, chunk_size),
            chunk_size,
        )

    return AppConfig(
        distance_unit=distance_unit,
        pace_distance=pace_distance,
        chunk_size=chunk_size,
    )


def save_app_config(config: AppConfig, config_path: Path | None = None) -> Path:
    path = resolve_config_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    parser = configparser.ConfigParser()
    parser["default"] = {
        "distance_unit": config.distance_unit,
        "pace_distance": str(config.pace_distance),
        "chunk_size": str(config.chunk_size),
    }
    buffer = io.StringIO()
    parser.write(buffer)
    content = buffer.getvalue()
    if os.name == "posix":
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path
