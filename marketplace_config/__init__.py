"""
marketplace_config -- single public entrypoint for runtime configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``MarketplaceSettings``.

Architecture position:
    Configuration -- sits beside ``marketplace_kernel``.  The kernel takes
    plain values (URLs, ratios, isolation levels) and never imports the
    loader; ``marketplace_api`` wires the two together.

Failure modes:
    - ``FileNotFoundError`` -- ``config_path`` does not exist.
    - ``yaml.YAMLError`` -- malformed YAML.
    - ``ValueError`` -- invalid values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from marketplace_config.loader import load_settings
from marketplace_config.schema import MarketplaceSettings

_logger = logging.getLogger("marketplace_kernel.config")


def get_active_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> MarketplaceSettings:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Optional YAML file overlaid on the packaged defaults.
        environ: Environment mapping for overrides.  Defaults to os.environ.

    Returns:
        MarketplaceSettings.
    """
    settings = load_settings(
        Path(config_path) if config_path is not None else None,
        environ,
    )
    _logger.info(
        "config_loaded",
        extra={
            "config_path": str(config_path) if config_path is not None else None,
            "transfer_isolation_level": settings.transfer_isolation_level,
            "deposit_threshold_ratio": str(settings.deposit_threshold_ratio),
            "log_level": settings.log_level,
        },
    )
    return settings


__all__ = ["MarketplaceSettings", "get_active_config"]
