import os
from pathlib import Path

import pytest

from gpxsplit.config import (
    AppConfig,
    load_app_config,
    parse_size,
    resolve_config_path,
    save_app_config,
)
from gpxsplit.tokens import DEFAULT_CHUNK_SIZE


def test_defaults_without_file(tmp_path):
    config = load_app_config(tmp_path / "missing.ini")
    assert config == AppConfig(
        distance_unit="mi", pace_distance=1.0, chunk_size=DEFAULT_CHUNK_SIZE
    )


def test_load_from_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(
        "[default]\ndistance_unit = KM\npace_distance = 5\nchunk_size = 1MB\n",
        encoding="utf-8",
    )
    config = load_app_config(path)
    assert config.distance_unit == "km"
    assert config.pace_distance == 5.0
    assert config.chunk_size == 1024**2


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.ini"
    path.write_text("[default]\ndistance_unit = km\n", encoding="utf-8")
    monkeypatch.setenv("GPXSPLIT_DISTANCE_UNIT", "mi")
    monkeypatch.setenv("GPXSPLIT_PACE_DISTANCE", "0.5")
    monkeypatch.setenv("GPXSPLIT_CHUNK_SIZE", "4096")
    config = load_app_config(path)
    assert config == AppConfig(distance_unit="mi", pace_distance=0.5, chunk_size=4096)


def test_env_ignored_when_disabled(tmp_path, monkeypatch):
    monkeypatch.setenv("GPXSPLIT_DISTANCE_UNIT", "km")
    config = load_app_config(tmp_path / "missing.ini", include_env=False)
    assert config.distance_unit == "mi"


@pytest.mark.parametrize(
    "line",
    ["distance_unit = furlongs", "pace_distance = -1", "pace_distance = fast", "chunk_size = lots"],
)
def test_invalid_values_raise(tmp_path, line):
    path = tmp_path / "config.ini"
    path.write_text(f"[default]\n{line}\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_app_config(path)


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "config.ini"
    saved = save_app_config(AppConfig("km", 2.0, 8192), path)
    assert saved == path
    assert load_app_config(path) == AppConfig("km", 2.0, 8192)
    if os.name == "posix":
        assert path.stat().st_mode & 0o777 == 0o600


def test_resolve_config_path_precedence(tmp_path, monkeypatch):
    explicit = tmp_path / "explicit.ini"
    monkeypatch.setenv("GPXSPLIT_CONFIG_PATH", str(tmp_path / "env.ini"))
    assert resolve_config_path(explicit) == explicit
    assert resolve_config_path() == tmp_path / "env.ini"

    monkeypatch.delenv("GPXSPLIT_CONFIG_PATH")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    path = resolve_config_path()
    assert path.name == "config.ini"
    assert path.parent.name == "gpxsplit"


@pytest.mark.parametrize(
    "value, expected",
    [(None, 100), ("", 100), ("2048", 2048), ("64KB", 65536), ("1.5 mb", 1572864), ("0", 1)],
)
def test_parse_size(value, expected):
    assert parse_size(value, 100) == expected


def test_parse_size_rejects_unknown_suffix():
    with pytest.raises(ValueError):
        parse_size("12 parsecs", 100)
    with pytest.raises(ValueError):
        parse_size("kb", 100)


def test_config_path_is_path_type(tmp_path):
    assert isinstance(resolve_config_path(tmp_path / "x.ini"), Path)
