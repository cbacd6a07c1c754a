"""
Deposit threshold policy.

Pure arithmetic for the Deposit Guard: a client may deposit at most
``ratio`` times the total price of their unpaid jobs.  Computed with
``Decimal`` so 25% of 1000 is exactly 250 and never 249.99999.

No unpaid jobs means an outstanding total of 0 and therefore a threshold
of 0: every positive deposit is rejected.
"""

from dataclasses import dataclass
from decimal import Decimal

DEFAULT_THRESHOLD_RATIO = Decimal("0.25")


@dataclass(frozen=True)
class DepositDecision:
    outstanding: int
    threshold: Decimal
    amount: int

    @property
    def allowed(self) -> bool:
        return Decimal(self.amount) <= self.threshold


def deposit_threshold(outstanding: int, ratio: Decimal = DEFAULT_THRESHOLD_RATIO) -> Decimal:
    """Maximum depositable amount for ``outstanding`` minor units of unpaid work."""
    if outstanding < 0:
        raise ValueError(f"outstanding must be non-negative, got {outstanding}")
    return Decimal(outstanding) * ratio


def evaluate_deposit(
    amount: int,
    outstanding: int,
    ratio: Decimal = DEFAULT_THRESHOLD_RATIO,
) -> DepositDecision:
    return DepositDecision(
        outstanding=outstanding,
        threshold=deposit_threshold(outstanding, ratio),
        amount=amount,
    )
