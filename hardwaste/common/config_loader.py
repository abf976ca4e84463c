"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from hardwaste.common.constants import (
    ADDRESS_SEARCH_URL,
    DIRECTORY_BASE_URL,
    DIRECTORY_URL,
    GEOJSON_PATH,
    WASTE_SERVICES_URL,
)
from hardwaste.common.errors import ConfigError
from hardwaste.common.fs import read_yaml
from hardwaste.common.schema import validate_run_config


def default_config() -> dict:
    return {
        "source": {
            "directory_url": DIRECTORY_URL,
            "base_url": DIRECTORY_BASE_URL,
            "address_search_url": ADDRESS_SEARCH_URL,
            "waste_services_url": WASTE_SERVICES_URL,
        },
        "streets": {"max_per_region": None},
        "http": {"connect_timeout": 20, "read_timeout": 120, "max_attempts": 1},
        "export": {"geojson_enabled": False, "geojson_path": GEOJSON_PATH},
    }


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _read_mapping(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    loaded = read_yaml(path)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return loaded


def load_run_config(
    config_path: Path | None = None,
    *,
    overlay_path: Path | None = None,
    allow_unknown: bool = False,
) -> dict:
    """Build the run config from built-in defaults, the config file and an optional overlay.

    Keys missing from the files fall back to the defaults; the merged result
    is validated strictly.
    """
    cfg = default_config()
    if config_path is not None:
        cfg = _deep_merge(cfg, _read_mapping(config_path))
    if overlay_path is not None and overlay_path.exists():
        cfg = _deep_merge(cfg, _read_mapping(overlay_path))
    return validate_run_config(cfg, allow_unknown=allow_unknown)


def apply_cli_overrides(
    cfg: dict,
    *,
    max_streets_per_region: int | None = None,
    geojson_path: str | None = None,
) -> dict:
    overrides: dict = {}
    if max_streets_per_region is not None:
        overrides["streets"] = {"max_per_region": max_streets_per_region}
    if geojson_path is not None:
        overrides["export"] = {"geojson_enabled": True, "geojson_path": geojson_path}
    if not overrides:
        return cfg
    return validate_run_config(_deep_merge(cfg, overrides), allow_unknown=True)
