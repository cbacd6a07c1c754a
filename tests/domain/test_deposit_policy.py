"""Tests for the deposit threshold arithmetic."""

from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from marketplace_kernel.domain.deposit_policy import (
    DEFAULT_THRESHOLD_RATIO,
    deposit_threshold,
    evaluate_deposit,
)


class TestDepositThreshold:

    def test_quarter(self):
        assert deposit_threshold(1000) == Decimal("250")

    def test_zero_outstanding(self):
        assert deposit_threshold(0) == 0

    def test_exact_fraction(self):
        assert deposit_threshold(10) == Decimal("2.5")

    def test_negative_outstanding_rejected(self):
        with pytest.raises(ValueError):
            deposit_threshold(-1)

    def test_custom_ratio(self):
        assert deposit_threshold(1000, Decimal("0.1")) == Decimal("100")


class TestEvaluateDeposit:

    def test_boundary(self):
        assert evaluate_deposit(250, 1000).allowed
        assert not evaluate_deposit(251, 1000).allowed

    def test_nothing_owed(self):
        decision = evaluate_deposit(1, 0)
        assert not decision.allowed
        assert decision.threshold == 0

    @given(
        amount=st.integers(min_value=1, max_value=10**12),
        outstanding=st.integers(min_value=0, max_value=10**12),
    )
    def test_matches_integer_rule(self, amount, outstanding):
        """amount <= outstanding / 4, with no float rounding."""
        decision = evaluate_deposit(amount, outstanding, DEFAULT_THRESHOLD_RATIO)
        assert decision.allowed == (4 * amount <= outstanding)
