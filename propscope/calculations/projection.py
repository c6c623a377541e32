"""
Cash Flow Projections

Derives valuation figures and monthly cash flows for one property across
four financing scenarios:

- Nett: loan principal equals the net price
- Loan 1 / Loan 2: a percentage of the price as per valuation
- LPPSA: the SPA price capped at the scheme's statutory ceiling

and either a rental income mode (whole unit, co-living, self-managed) or
short-stay (Airbnb) income at three occupancy tiers.

All money values are unrounded floats; display layers round.
"""

import enum
import math
from dataclasses import dataclass
from typing import List, Union

from propscope.calculations.amortization import Amortization, amortize
from propscope.calculations.errors import InvalidInputError
from propscope.calculations.properties import GlobalSettings, Property

LPPSA_LOAN_CAP = 750_000.0
NIGHTS_PER_MONTH = 30


class ProjectionMode(str, enum.Enum):
    """Income mode a property is projected under."""

    whole_unit = "wholeUnit"
    co_living = "coLiving"
    self_manage = "selfManage"
    airbnb = "airbnb"


@dataclass(frozen=True)
class NettLoan:
    """The Nett loan's installment and first-month split."""

    monthly_installment: float
    principal: float
    interest: float


@dataclass(frozen=True)
class LoanScenario:
    """Monthly commitment and cash flow for one financing scenario."""

    loan_amount: float
    commitment: float
    total_commitment_monthly: float
    cashflow: float
    cashflow_excluding_principal: float
    cashback: float


@dataclass(frozen=True)
class StandardCalculations:
    """Projection result for wholeUnit, coLiving and selfManage modes."""

    mode: ProjectionMode
    price_as_per_valuation: float
    net_price: float
    rental_income: float
    management_fee: float
    other_expenses: float
    total_expenses: float
    nett_loan: NettLoan
    normal_mortgage: LoanScenario
    loan_scenario_1: LoanScenario
    loan_scenario_2: LoanScenario
    lppsa: LoanScenario


@dataclass(frozen=True)
class AirbnbScenario:
    """Short-stay income and cash flows at one occupancy tier."""

    occupancy_percent: float
    total_income: float
    operator_fee: float
    cashflow_nett: float
    cashflow_loan1: float
    cashflow_loan2: float
    cashflow_lppsa: float


@dataclass(frozen=True)
class AirbnbInstallments:
    nett: float
    loan1: float
    loan2: float
    lppsa: float


@dataclass(frozen=True)
class AirbnbCalculations:
    """Projection result for airbnb mode."""

    mode: ProjectionMode
    price_as_per_valuation: float
    net_price: float
    nett_loan: NettLoan
    installments: AirbnbInstallments
    fixed_expenses: float
    total_commitment_at_nett: float
    current: AirbnbScenario
    best: AirbnbScenario
    worst: AirbnbScenario


ProjectionResult = Union[StandardCalculations, AirbnbCalculations]


def _validate(prop: Property, settings: GlobalSettings, loan_pct_1: float, loan_pct_2: float):
    if prop.size <= 0:
        raise InvalidInputError(
            f"Property size must be greater than zero (got {prop.size})"
        )

    numbers = {
        "size": prop.size,
        "spa_price": prop.spa_price,
        "valuation_psf": prop.valuation_psf,
        "net_psf": prop.net_psf,
        "whole_unit_rental": prop.whole_unit_rental,
        "co_living_rental": prop.co_living_rental,
        "airbnb_rental_per_night": prop.airbnb_rental_per_night,
        "maintenance_sinking": prop.maintenance_sinking,
        "wifi": prop.wifi,
        "interest_rate": settings.interest_rate,
        "loan_tenure": settings.loan_tenure,
        "lppsa_interest_rate": settings.lppsa_interest_rate,
        "loan_percentage_1": loan_pct_1,
        "loan_percentage_2": loan_pct_2,
    }
    for name, value in numbers.items():
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be a finite number (got {value})")


def _loan_scenario(
    loan_amount: float,
    loan: Amortization,
    net_price: float,
    rental_income: float,
    total_expenses: float,
) -> LoanScenario:
    total_commitment = loan.monthly_payment + total_expenses
    cashflow = rental_income - total_commitment
    return LoanScenario(
        loan_amount=loan_amount,
        commitment=loan.monthly_payment,
        total_commitment_monthly=total_commitment,
        cashflow=cashflow,
        cashflow_excluding_principal=cashflow + loan.first_month_principal,
        cashback=loan_amount - net_price,
    )


def _airbnb_scenario(
    prop: Property,
    settings: GlobalSettings,
    occupancy_percent: float,
    installments: AirbnbInstallments,
    fixed_expenses: float,
) -> AirbnbScenario:
    total_income = prop.airbnb_rental_per_night * NIGHTS_PER_MONTH * (occupancy_percent / 100)
    operator_fee = total_income * (settings.airbnb_operator_fee_percent / 100)
    net_income = total_income - fixed_expenses - operator_fee

    return AirbnbScenario(
        occupancy_percent=occupancy_percent,
        total_income=total_income,
        operator_fee=operator_fee,
        cashflow_nett=net_income - installments.nett,
        cashflow_loan1=net_income - installments.loan1,
        cashflow_loan2=net_income - installments.loan2,
        cashflow_lppsa=net_income - installments.lppsa,
    )


def project(
    prop: Property,
    settings: GlobalSettings,
    mode: ProjectionMode,
    loan_pct_1: float,
    loan_pct_2: float,
) -> ProjectionResult:
    """
    Project one property's financing scenarios under the given income mode.

    Args:
        prop: Property row being evaluated
        settings: Global assumptions (rates as percentages)
        mode: Income mode
        loan_pct_1: First loan-to-valuation percentage (e.g., 90)
        loan_pct_2: Second loan-to-valuation percentage (e.g., 70)

    Returns:
        StandardCalculations, or AirbnbCalculations in airbnb mode

    Raises:
        InvalidInputError: If size is not positive or an input is not finite
    """
    mode = ProjectionMode(mode)
    _validate(prop, settings, loan_pct_1, loan_pct_2)

    # === PRICE BASES ===
    price_as_per_valuation = prop.size * prop.valuation_psf
    net_price = prop.size * prop.net_psf

    # === INSTALLMENTS ===
    loan1_amount = price_as_per_valuation * (loan_pct_1 / 100)
    loan2_amount = price_as_per_valuation * (loan_pct_2 / 100)
    lppsa_amount = min(prop.spa_price, LPPSA_LOAN_CAP)

    nett = amortize(net_price, settings.interest_rate, settings.loan_tenure)
    loan1 = amortize(loan1_amount, settings.interest_rate, settings.loan_tenure)
    loan2 = amortize(loan2_amount, settings.interest_rate, settings.loan_tenure)
    lppsa = amortize(lppsa_amount, settings.lppsa_interest_rate, settings.loan_tenure)

    nett_loan = NettLoan(
        monthly_installment=nett.monthly_payment,
        principal=nett.first_month_principal,
        interest=nett.first_month_interest,
    )

    if mode == ProjectionMode.airbnb:
        installments = AirbnbInstallments(
            nett=nett.monthly_payment,
            loan1=loan1.monthly_payment,
            loan2=loan2.monthly_payment,
            lppsa=lppsa.monthly_payment,
        )
        fixed_expenses = prop.maintenance_sinking + prop.wifi
        occupancy = settings.airbnb_occupancy

        return AirbnbCalculations(
            mode=mode,
            price_as_per_valuation=price_as_per_valuation,
            net_price=net_price,
            nett_loan=nett_loan,
            installments=installments,
            fixed_expenses=fixed_expenses,
            total_commitment_at_nett=nett.monthly_payment + fixed_expenses,
            current=_airbnb_scenario(prop, settings, occupancy.current, installments, fixed_expenses),
            best=_airbnb_scenario(prop, settings, occupancy.best, installments, fixed_expenses),
            worst=_airbnb_scenario(prop, settings, occupancy.worst, installments, fixed_expenses),
        )

    # === RENTAL INCOME & EXPENSES ===
    if mode == ProjectionMode.whole_unit:
        rental_income = prop.whole_unit_rental
    else:
        rental_income = prop.co_living_rental

    management_fee = 0.0
    if mode == ProjectionMode.co_living:
        management_fee = rental_income * (settings.management_fee_percent / 100)

    other_expenses = 0.0
    if mode in (ProjectionMode.co_living, ProjectionMode.self_manage):
        other_expenses = prop.wifi

    total_expenses = prop.maintenance_sinking + management_fee + other_expenses

    # Nett scenario's loan amount is the net price, so cashback is exactly zero
    normal_mortgage = _loan_scenario(net_price, nett, net_price, rental_income, total_expenses)

    return StandardCalculations(
        mode=mode,
        price_as_per_valuation=price_as_per_valuation,
        net_price=net_price,
        rental_income=rental_income,
        management_fee=management_fee,
        other_expenses=other_expenses,
        total_expenses=total_expenses,
        nett_loan=nett_loan,
        normal_mortgage=normal_mortgage,
        loan_scenario_1=_loan_scenario(loan1_amount, loan1, net_price, rental_income, total_expenses),
        loan_scenario_2=_loan_scenario(loan2_amount, loan2, net_price, rental_income, total_expenses),
        lppsa=_loan_scenario(lppsa_amount, lppsa, net_price, rental_income, total_expenses),
    )


def project_all(
    properties: List[Property],
    settings: GlobalSettings,
    mode: ProjectionMode,
    loan_pct_1: float,
    loan_pct_2: float,
) -> List[ProjectionResult]:
    """Project every row of the projection table, preserving order."""
    return [project(p, settings, mode, loan_pct_1, loan_pct_2) for p in properties]
