"""Minimal strict schema for the YAML run config."""

from __future__ import annotations

from hardwaste.common.errors import ConfigError

SECTION_KEYS = {
    "source": {"directory_url", "base_url", "address_search_url", "waste_services_url"},
    "streets": {"max_per_region"},
    "http": {"connect_timeout", "read_timeout", "max_attempts"},
    "export": {"geojson_enabled", "geojson_path"},
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value: object, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number, got {value!r}")


def validate_run_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("run config must be a mapping")

    _assert_required_keys(cfg, set(SECTION_KEYS), "run config")
    _assert_no_unknown_keys(cfg, set(SECTION_KEYS), "run config", allow_unknown)

    for section, keys in SECTION_KEYS.items():
        if not isinstance(cfg[section], dict):
            raise ConfigError(f"{section} must be a mapping")
        _assert_required_keys(cfg[section], keys, section)
        _assert_no_unknown_keys(cfg[section], keys, section, allow_unknown)

    for key in SECTION_KEYS["source"]:
        value = cfg["source"][key]
        if not isinstance(value, str) or not value.startswith(("http://", "https://")):
            raise ConfigError(f"source.{key} must be an http(s) URL")

    max_per_region = cfg["streets"]["max_per_region"]
    if max_per_region is not None:
        if isinstance(max_per_region, bool) or not isinstance(max_per_region, int) or max_per_region < 1:
            raise ConfigError("streets.max_per_region must be null or an integer >= 1")

    _assert_positive_number(cfg["http"]["connect_timeout"], "http.connect_timeout")
    _assert_positive_number(cfg["http"]["read_timeout"], "http.read_timeout")
    max_attempts = cfg["http"]["max_attempts"]
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        raise ConfigError("http.max_attempts must be an integer >= 1")

    if not isinstance(cfg["export"]["geojson_enabled"], bool):
        raise ConfigError("export.geojson_enabled must be a boolean")
    if not isinstance(cfg["export"]["geojson_path"], str) or not cfg["export"]["geojson_path"]:
        raise ConfigError("export.geojson_path must be a non-empty string")

    return cfg
