"""
MarketplaceSettings schema.

The runtime configuration artifact.  The loader parses YAML plus
environment overrides into this frozen dataclass; nothing downstream
reads configuration any other way.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# Isolation levels accepted for the transfer write scope (PostgreSQL).
ISOLATION_LEVELS = frozenset({"READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"})

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class MarketplaceSettings:
    """Validated runtime settings."""

    database_url: str
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30
    transfer_isolation_level: str = "SERIALIZABLE"
    deposit_threshold_ratio: Decimal = Decimal("0.25")
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.database_url:
            raise ValueError("database_url must not be empty")
        for name in ("pool_size", "pool_timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if (
            isinstance(self.max_overflow, bool)
            or not isinstance(self.max_overflow, int)
            or self.max_overflow < 0
        ):
            raise ValueError(f"max_overflow must be a non-negative integer, got {self.max_overflow!r}")
        if self.transfer_isolation_level not in ISOLATION_LEVELS:
            raise ValueError(
                f"transfer_isolation_level must be one of {sorted(ISOLATION_LEVELS)}, "
                f"got {self.transfer_isolation_level!r}"
            )
        if not isinstance(self.deposit_threshold_ratio, Decimal) or self.deposit_threshold_ratio < 0:
            raise ValueError(
                f"deposit_threshold_ratio must be a non-negative Decimal, "
                f"got {self.deposit_threshold_ratio!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {self.log_level!r}")
