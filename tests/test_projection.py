"""
Tests for cash flow projections.
"""

import math
from dataclasses import replace

import pytest
from propscope.calculations.amortization import amortize
from propscope.calculations.errors import InvalidInputError
from propscope.calculations.projection import (
    LPPSA_LOAN_CAP,
    AirbnbCalculations,
    ProjectionMode,
    StandardCalculations,
    project,
    project_all,
)


class TestPriceBases:
    """Test price derivation from PSF figures."""

    def test_price_bases(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        assert result.price_as_per_valuation == 500000
        assert result.net_price == 480000

    def test_zero_size_rejected(self, sample_property, settings):
        """Size must be positive for PSF-derived figures."""
        prop = replace(sample_property, size=0)
        with pytest.raises(InvalidInputError):
            project(prop, settings, ProjectionMode.whole_unit, 90, 70)

    def test_non_finite_input_rejected(self, sample_property, settings):
        prop = replace(sample_property, net_psf=math.nan)
        with pytest.raises(InvalidInputError):
            project(prop, settings, ProjectionMode.whole_unit, 90, 70)

    def test_mode_accepts_string(self, sample_property, settings):
        result = project(sample_property, settings, "coLiving", 90, 70)
        assert result.mode == ProjectionMode.co_living


class TestWholeUnit:
    """Whole-unit rental projection."""

    def test_nett_scenario(self, sample_property, settings):
        """480k net price at 4.5% over 35 years with 350 maintenance."""
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        assert isinstance(result, StandardCalculations)

        nett = result.normal_mortgage
        assert nett.commitment == pytest.approx(2271.63, abs=0.05)
        assert nett.total_commitment_monthly == pytest.approx(2621.63, abs=0.05)
        assert nett.cashflow == pytest.approx(-121.63, abs=0.05)
        assert nett.cashback == 0

    def test_nett_loan_breakdown(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        expected = amortize(480000, 4.5, 35)
        assert result.nett_loan.monthly_installment == expected.monthly_payment
        assert result.nett_loan.principal == expected.first_month_principal
        assert result.nett_loan.interest == expected.first_month_interest

    def test_expenses(self, sample_property, settings):
        """No management fee or wifi for whole-unit rentals."""
        prop = replace(sample_property, wifi=150)
        result = project(prop, settings, ProjectionMode.whole_unit, 90, 70)
        assert result.rental_income == 2500
        assert result.management_fee == 0
        assert result.other_expenses == 0
        assert result.total_expenses == 350

    def test_cashflow_excluding_principal(self, sample_property, settings):
        """Adds back the first month's principal portion."""
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        loan = amortize(450000, 4.5, 35)
        scenario = result.loan_scenario_1
        assert scenario.cashflow_excluding_principal == pytest.approx(
            scenario.cashflow + loan.first_month_principal
        )

    def test_percentage_loans(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        assert result.loan_scenario_1.loan_amount == pytest.approx(450000)
        assert result.loan_scenario_2.loan_amount == pytest.approx(350000)
        assert result.loan_scenario_1.commitment == pytest.approx(
            amortize(450000, 4.5, 35).monthly_payment
        )


class TestCashback:
    """Cashback sign follows loan amount vs net price."""

    def test_over_financing_is_positive(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.whole_unit, 100, 70)
        assert result.loan_scenario_1.cashback == pytest.approx(20000)
        assert result.loan_scenario_1.cashback > 0

    def test_under_financing_is_negative(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        assert result.loan_scenario_1.cashback == pytest.approx(-30000)
        assert result.loan_scenario_2.cashback == pytest.approx(-130000)

    def test_nett_is_zero(self, sample_property, settings):
        for mode in (ProjectionMode.whole_unit, ProjectionMode.co_living, ProjectionMode.self_manage):
            result = project(sample_property, settings, mode, 90, 70)
            assert result.normal_mortgage.cashback == 0


class TestLppsa:
    """Government loan scenario."""

    def test_uses_spa_price_and_lppsa_rate(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.whole_unit, 90, 70)
        assert result.lppsa.loan_amount == 500000
        assert result.lppsa.commitment == pytest.approx(amortize(500000, 4.0, 35).monthly_payment)
        assert result.lppsa.cashback == pytest.approx(20000)

    def test_capped(self, sample_property, settings):
        prop = replace(sample_property, spa_price=1200000)
        result = project(prop, settings, ProjectionMode.whole_unit, 90, 70)
        assert result.lppsa.loan_amount == LPPSA_LOAN_CAP
        assert result.lppsa.commitment == pytest.approx(
            amortize(750000, 4.0, 35).monthly_payment
        )


class TestCoLivingAndSelfManage:
    """Room-by-room rental modes."""

    def test_co_living(self, sample_property, settings):
        prop = replace(sample_property, wifi=150)
        result = project(prop, settings, ProjectionMode.co_living, 90, 70)
        assert result.rental_income == 3000
        assert result.management_fee == pytest.approx(360)
        assert result.other_expenses == 150
        assert result.total_expenses == pytest.approx(860)
        assert result.normal_mortgage.cashflow == pytest.approx(
            3000 - result.normal_mortgage.commitment - 860
        )

    def test_self_manage(self, sample_property, settings):
        """Co-living rent without the operator's management fee."""
        prop = replace(sample_property, wifi=150)
        result = project(prop, settings, ProjectionMode.self_manage, 90, 70)
        assert result.rental_income == 3000
        assert result.management_fee == 0
        assert result.other_expenses == 150
        assert result.total_expenses == 500


class TestAirbnb:
    """Short-stay projections at three occupancy tiers."""

    def test_result_shape(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.airbnb, 90, 70)
        assert isinstance(result, AirbnbCalculations)
        assert result.mode == ProjectionMode.airbnb

    def test_current_tier(self, sample_property, settings):
        """RM200/night at 65% occupancy with a 20% operator fee."""
        prop = replace(sample_property, wifi=150)
        result = project(prop, settings, ProjectionMode.airbnb, 90, 70)

        current = result.current
        assert current.occupancy_percent == 65
        assert current.total_income == pytest.approx(3900)
        assert current.operator_fee == pytest.approx(780)
        assert result.fixed_expenses == 500
        assert current.cashflow_nett == pytest.approx(
            3900 - result.installments.nett - 500 - 780
        )
        assert current.cashflow_lppsa == pytest.approx(
            3900 - result.installments.lppsa - 500 - 780
        )

    def test_tiers_ordered(self, sample_property, settings):
        result = project(sample_property, settings, ProjectionMode.airbnb, 90, 70)
        assert result.worst.total_income < result.current.total_income < result.best.total_income
        assert result.worst.cashflow_loan1 < result.current.cashflow_loan1 < result.best.cashflow_loan1

    def test_total_commitment_at_nett(self, sample_property, settings):
        """Independent of occupancy."""
        prop = replace(sample_property, wifi=150)
        result = project(prop, settings, ProjectionMode.airbnb, 90, 70)
        assert result.total_commitment_at_nett == pytest.approx(result.installments.nett + 500)


class TestProjectAll:
    def test_preserves_order(self, sample_property, settings):
        props = [sample_property, replace(sample_property, id=2, size=800)]
        results = project_all(props, settings, ProjectionMode.whole_unit, 90, 70)
        assert [r.net_price for r in results] == [480000, 384000]

    def test_is_repeatable(self, sample_property, settings):
        first = project(sample_property, settings, ProjectionMode.co_living, 90, 70)
        second = project(sample_property, settings, ProjectionMode.co_living, 90, 70)
        assert first == second
