"""
Tests for loan installment calculations.
"""

import pytest
from propscope.calculations.amortization import amortize, calculate_payment


class TestAmortize:
    """Test the monthly installment and first-month split."""

    def test_known_payment(self):
        """RM500k at 4.5% over 35 years."""
        result = amortize(500000, 4.5, 35)
        assert result.monthly_payment == pytest.approx(2366.28, abs=0.05)

    def test_first_month_interest(self):
        """First month's interest is principal x monthly rate."""
        result = amortize(500000, 4.5, 35)
        assert result.first_month_interest == pytest.approx(500000 * 0.045 / 12)

    @pytest.mark.parametrize(
        "principal,rate,years",
        [(500000, 4.5, 35), (120000, 0, 10), (1, 0.01, 1), (750000, 4.0, 30), (300000, 12, 5)],
    )
    def test_split_adds_up(self, principal, rate, years):
        """Principal + interest equals the payment."""
        result = amortize(principal, rate, years)
        assert result.monthly_payment > 0
        assert result.first_month_principal + result.first_month_interest == pytest.approx(
            result.monthly_payment
        )

    def test_zero_rate(self):
        """Zero interest spreads principal evenly, all of it principal."""
        result = amortize(120000, 0, 10)
        assert result.monthly_payment == 1000
        assert result.first_month_principal == 1000
        assert result.first_month_interest == 0

    @pytest.mark.parametrize(
        "principal,rate,years",
        [(0, 4.5, 35), (-100, 4.5, 35), (500000, -1, 35), (500000, 4.5, 0), (500000, 4.5, -5)],
    )
    def test_no_viable_loan_returns_zero(self, principal, rate, years):
        """Degenerate loans give an all-zero result instead of raising."""
        result = amortize(principal, rate, years)
        assert result.monthly_payment == 0
        assert result.first_month_principal == 0
        assert result.first_month_interest == 0

    def test_higher_rate_costs_more(self):
        """Payment increases with the interest rate."""
        assert amortize(500000, 5.0, 35).monthly_payment > amortize(500000, 4.0, 35).monthly_payment

    def test_payment_is_not_rounded(self):
        """No rounding is applied internally."""
        payment = amortize(500000, 4.5, 35).monthly_payment
        assert payment != round(payment, 2)


class TestCalculatePayment:
    """Test the raw PMT helper."""

    def test_matches_excel_pmt(self):
        """$1M at 5% for 30 years, as Excel's PMT(0.05/12, 360, -1000000)."""
        payment = calculate_payment(1000000, 0.05 / 12, 360)
        assert payment == pytest.approx(5368.22, abs=0.01)

    def test_zero_rate(self):
        assert calculate_payment(1200, 0, 12) == 100
