from .settings import (
    AppConfig,
    load_app_config,
    parse_distance_unit,
    parse_pace_distance,
    parse_size,
    resolve_config_path,
    save_app_config,
)

__all__ = [
    "AppConfig",
    "load_app_config",
    "parse_distance_unit",
    "parse_pace_distance",
    "parse_size",
    "resolve_config_path",
    "save_app_config",
]
