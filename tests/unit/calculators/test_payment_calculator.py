"""Unit tests for payment statistics and splits."""

from decimal import Decimal

import pytest

from studio_metrics.calculators.payment_calculator import (
    PaymentSplit,
    split_payment,
    summarize_payments,
)
from studio_metrics.models.payment import Payment


class TestSummarizePayments:
    """Test received/pending partitioning."""

    def test_advance_paid_final_pending(self):
        """Test the basic advance/final scenario."""
        payments = [
            Payment(id="pay-1", type="advance", amount=4000, status="paid"),
            Payment(id="pay-2", type="final", amount=6000, status="pending"),
        ]

        stats = summarize_payments(payments)

        assert stats.total_received == Decimal("4000")
        assert stats.total_pending == Decimal("6000")

    def test_empty(self):
        """Test no payments gives zero totals."""
        stats = summarize_payments([])

        assert stats.total_received == Decimal("0")
        assert stats.total_pending == Decimal("0")

    def test_malformed_amount_counts_as_zero(self):
        """Test a malformed amount contributes nothing."""
        payments = [
            Payment(id="pay-1", type="advance", amount="n/a", status="paid"),
            Payment(id="pay-2", type="final", amount=100, status="paid"),
        ]

        assert summarize_payments(payments).total_received == Decimal("100")

    def test_unknown_status_counts_as_pending(self):
        """Test unknown statuses land in the pending bucket."""
        payments = [Payment(id="pay-1", type="final", amount=250, status="overdue")]

        assert summarize_payments(payments).total_pending == Decimal("250")


class TestSplitPayment:
    """Test advance/final splits."""

    def test_default_forty_sixty(self):
        """Test the default 40/60 split."""
        assert split_payment(10000) == PaymentSplit(
            advance=Decimal("4000"), final=Decimal("6000")
        )

    def test_custom_share(self):
        """Test a configurable advance share."""
        split = split_payment("8000", advance_percentage=50)

        assert split.advance == Decimal("4000")
        assert split.final == Decimal("4000")

    def test_parts_sum_to_price(self):
        """Test the final payment absorbs any remainder."""
        split = split_payment("999.99", advance_percentage="33.3")

        assert split.advance + split.final == Decimal("999.99")

    def test_malformed_price_is_zero(self):
        """Test an unusable price splits into zeros."""
        split = split_payment(None)

        assert split.advance == Decimal("0")
        assert split.final == Decimal("0")

    @pytest.mark.parametrize("share", [-1, "100.5", 250])
    def test_out_of_range_share(self, share):
        """Test shares outside 0-100 are rejected."""
        with pytest.raises(ValueError, match="advance_percentage"):
            split_payment(1000, advance_percentage=share)

    @pytest.mark.parametrize("share", ["abc", "", "NaN", float("nan"), "Infinity"])
    def test_non_numeric_share(self, share):
        """Test shares that are not finite numbers raise ValueError."""
        with pytest.raises(ValueError, match="advance_percentage"):
            split_payment(1000, advance_percentage=share)
