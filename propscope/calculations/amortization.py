"""
Loan Amortization Calculations

Level-payment annuity figures for a fixed-rate loan: the monthly
installment and how the first installment splits into principal and
interest. Matches Excel's PMT(), IPMT() and PPMT() for period 1.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Amortization:
    """Monthly installment and first-month split for a single loan."""

    monthly_payment: float = 0.0
    first_month_principal: float = 0.0
    first_month_interest: float = 0.0


NO_LOAN = Amortization()


def calculate_payment(principal: float, monthly_rate: float, months: int) -> float:
    """
    Calculate the level monthly payment.

    Matches Excel's PMT() function (sign flipped to positive).

    Args:
        principal: Loan principal amount
        monthly_rate: Monthly interest rate as decimal (e.g., 0.00375)
        months: Total number of monthly payments

    Returns:
        Monthly payment amount
    """
    if monthly_rate == 0:
        return principal / months

    growth = (1 + monthly_rate) ** months
    return principal * monthly_rate * growth / (growth - 1)


def amortize(principal: float, annual_rate_percent: float, years: float) -> Amortization:
    """
    Calculate the monthly installment and first-month principal/interest split.

    A non-positive principal or tenure, or a negative rate, means there is
    no viable loan; an all-zero result is returned instead of raising.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate as a percentage (e.g., 4.5)
        years: Loan tenure in years

    Returns:
        Amortization with unrounded figures
    """
    if principal <= 0 or annual_rate_percent < 0 or years <= 0:
        return NO_LOAN

    monthly_rate = annual_rate_percent / 100 / 12
    months = years * 12
    payment = calculate_payment(principal, monthly_rate, months)

    if monthly_rate == 0:
        return Amortization(
            monthly_payment=payment,
            first_month_principal=payment,
            first_month_interest=0.0,
        )

    first_month_interest = principal * monthly_rate
    return Amortization(
        monthly_payment=payment,
        first_month_principal=payment - first_month_interest,
        first_month_interest=first_month_interest,
    )
