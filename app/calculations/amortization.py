"""
Loan Amortization Calculations

Implements EMI and amortization schedule calculations for fixed-rate,
fully-amortizing home loans.

Rates in this module are decimals (e.g., 0.085 for 8.5%).
"""

import math
from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

# Below this monthly rate the loan is repaid linearly
MIN_MONTHLY_RATE = 1e-15
# Largest exponent math.expm1 accepts without overflowing
MAX_EXPONENT = 700.0


def calculate_payment(
    principal: float, annual_rate: float, amortization_months: int
) -> float:
    """
    Calculate the monthly installment (EMI) for a loan.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal (e.g., 0.085 for 8.5%)
        amortization_months: Total amortization period in months

    Returns:
        Monthly payment amount (positive number)
    """
    if principal <= 0:
        return 0.0
    if amortization_months <= 0:
        return 0.0

    monthly_rate = annual_rate / 12

    if monthly_rate < MIN_MONTHLY_RATE:
        return principal / amortization_months

    exponent = amortization_months * math.log1p(monthly_rate)
    if exponent > MAX_EXPONENT:
        # Compound factor is so large the payment is pure interest
        return principal * monthly_rate

    # (1 + r)^n - 1, without losing precision for small r
    growth = math.expm1(exponent)
    if growth <= 0:
        return principal / amortization_months

    return principal * monthly_rate * (growth + 1) / growth


def calculate_remaining_balance(
    principal: float,
    annual_rate: float,
    amortization_months: int,
    payments_completed: int,
) -> float:
    """
    Calculate remaining loan balance after N monthly payments.

    Uses the present value of the payments still outstanding, so the
    balance is exactly 0 once every installment has been made.
    """
    if principal <= 0 or amortization_months <= 0:
        return 0.0

    remaining_payments = amortization_months - max(0, payments_completed)
    if remaining_payments <= 0:
        return 0.0

    monthly_rate = annual_rate / 12
    if monthly_rate < MIN_MONTHLY_RATE:
        return principal * remaining_payments / amortization_months

    payment = calculate_payment(principal, annual_rate, amortization_months)
    # 1 - (1 + r)^-m
    discount = -math.expm1(-remaining_payments * math.log1p(monthly_rate))
    balance = payment * discount / monthly_rate

    return max(0.0, min(balance, principal))


def yearly_balances(
    principal: float, annual_rate: float, amortization_years: int, years: int
) -> List[float]:
    """Remaining balance at each year boundary, from year 0 through `years`."""
    months = amortization_years * 12
    return [
        calculate_remaining_balance(principal, annual_rate, months, year * 12)
        for year in range(years + 1)
    ]


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    amortization_months: int,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a month-by-month amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal
        amortization_months: Amortization period in months
        start_date: Date of first payment

    Returns:
        List of amortization rows
    """
    schedule = []
    if principal <= 0 or amortization_months <= 0:
        return schedule

    balance = principal
    monthly_rate = max(annual_rate, 0.0) / 12
    payment = calculate_payment(principal, annual_rate, amortization_months)

    if start_date is None:
        start_date = date.today()

    for period in range(1, amortization_months + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate

        if period == amortization_months:
            # Final installment absorbs floating-point residue
            principal_pmt = balance
        else:
            principal_pmt = min(payment - interest, balance)

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(principal_pmt + interest, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)
