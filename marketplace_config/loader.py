"""
Configuration Loader (``marketplace_config.loader``).

Responsibility
--------------
Reads the packaged ``defaults.yaml``, overlays an optional YAML file and
then environment overrides, and parses the result into a frozen
``MarketplaceSettings``.  Runtime code goes through
``marketplace_config.get_active_config()`` rather than calling this
module directly.

Failure modes
-------------
* Missing override file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong types or out-of-range values  -> ``ValueError``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from marketplace_config.schema import MarketplaceSettings

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "DATABASE_URL": ("database", "url"),
    "MARKETPLACE_LOG_LEVEL": ("logging", "level"),
    "MARKETPLACE_TRANSFER_ISOLATION": ("transfer", "isolation_level"),
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; ``overlay`` wins on conflicting leaves."""
    result = dict(base)
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge(result[key], value)
        else:
            result[key] = value
    return result


def apply_env_overrides(
    data: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    overlay: dict[str, dict[str, Any]] = {}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            overlay.setdefault(section, {})[key] = value
    return merge(data, overlay)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def parse_ratio(value: Any) -> Decimal:
    """Parse a ratio from YAML (string, int or float) into an exact Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"threshold_ratio must be numeric, got {value!r}")
    try:
        # str() first so 0.25 (float) becomes Decimal("0.25").
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"threshold_ratio must be numeric, got {value!r}") from exc


def parse_settings(data: Mapping[str, Any]) -> MarketplaceSettings:
    """Build MarketplaceSettings from merged configuration data."""
    database = _section(data, "database")
    transfer = _section(data, "transfer")
    deposit = _section(data, "deposit")
    logging_ = _section(data, "logging")

    if "url" not in database:
        raise ValueError("database.url is required")

    return MarketplaceSettings(
        database_url=str(database["url"]),
        echo=bool(database.get("echo", False)),
        pool_size=database.get("pool_size", 20),
        max_overflow=database.get("max_overflow", 10),
        pool_timeout=database.get("pool_timeout", 30),
        transfer_isolation_level=str(transfer.get("isolation_level", "SERIALIZABLE")).upper(),
        deposit_threshold_ratio=parse_ratio(deposit.get("threshold_ratio", "0.25")),
        log_level=str(logging_.get("level", "INFO")).upper(),
    )


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> MarketplaceSettings:
    """defaults.yaml, then ``config_path`` (if given), then the environment."""
    data = load_yaml_file(DEFAULTS_PATH)
    if config_path is not None:
        data = merge(data, load_yaml_file(Path(config_path)))
    return parse_settings(apply_env_overrides(data, environ))
