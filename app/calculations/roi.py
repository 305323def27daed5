"""
Rental Property ROI Calculations

Converts purchase, financing and operating assumptions for a single
rental property into yields, cash flow, a multi-year wealth projection
and chart-ready breakdowns.

All percentage inputs are whole-number percents (8 means 8%). Amounts are
returned unrounded; rounding for display happens in the presentation layer.
"""

import logging
import math
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional

from app.calculations.amortization import (
    calculate_payment,
    calculate_remaining_balance,
    yearly_balances,
)

logger = logging.getLogger(__name__)

# Chart colors used by the calculator page
EMI_COLOR = "#8b5cf6"
MAINTENANCE_COLOR = "#f59e0b"
PROPERTY_TAX_COLOR = "#0ea5e9"
MANAGEMENT_FEE_COLOR = "#10b981"
VACANCY_COLOR = "#64748b"
RENTAL_INCOME_COLOR = "#10b981"
OPERATING_EXPENSES_COLOR = "#ef4444"

# Input bounds that keep compounding finite
MAX_AMOUNT = 1e15
MAX_PERCENT = 1000.0
MAX_YEARS = 100


@dataclass(frozen=True)
class CalculatorInput:
    """Property, financing and operating assumptions for one calculation."""

    purchase_price: float
    monthly_rent: float = 0.0
    annual_appreciation_rate_percent: float = 0.0

    # Financing (ignored unless has_loan)
    has_loan: bool = False
    down_payment_percent: float = 20.0
    annual_interest_rate_percent: float = 8.5
    loan_tenure_years: int = 20

    # Operating costs
    annual_maintenance_amount: float = 0.0
    monthly_maintenance_amount: float = 0.0
    maintenance_percent_of_value: float = 0.0
    annual_property_tax_amount: float = 0.0
    management_fee_percent: float = 0.0
    vacancy_rate_percent: float = 0.0

    # Projection
    projection_horizon_years: int = 10
    summary_years: int = 5


@dataclass
class YearProjection:
    """Property position at the end of a given year (year 0 is purchase)."""

    year: int
    label: str
    property_value: float
    loan_balance: float
    equity: float
    cumulative_cash_flow: float
    total_wealth: float  # equity - total investment + cumulative cash flow


@dataclass
class ProjectionSummary:
    """Headline N-year figures."""

    years: int
    property_value: float
    loan_balance: float
    equity: float
    equity_gain: float  # appreciation only
    accumulated_cash_flow: float
    total_roi_percent: float
    net_wealth_gain: float


@dataclass
class BreakdownItem:
    name: str
    amount: float
    color: str


@dataclass
class CalculatorResult:
    """Everything the calculator page displays for one set of inputs."""

    # Investment
    down_payment_amount: float
    loan_amount: float
    total_investment: float

    # Debt service
    monthly_emi: float
    annual_emi: float

    # Income and operating expenses
    annual_gross_rent: float
    annual_maintenance: float
    annual_property_tax: float
    annual_management_fee: float
    monthly_management_fee: float
    vacancy_loss: float
    total_annual_expenses: float
    net_operating_income: float

    # Cash flow
    annual_cash_flow: float
    monthly_cash_flow: float
    is_cash_flow_positive: bool

    # Returns
    net_rental_yield: float
    cash_on_cash_return: float
    cap_rate: float
    gross_yield: float
    annual_appreciation_amount: float

    yearly_projection: List[YearProjection] = field(default_factory=list)
    summary: Optional[ProjectionSummary] = None
    expense_breakdown: List[BreakdownItem] = field(default_factory=list)
    cash_flow_breakdown: List[BreakdownItem] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _non_negative(name: str, value: Any, upper: float = MAX_AMOUNT) -> float:
    """Coerce an input to a finite float in [0, upper], substituting 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric {name}={value!r}, using 0")
        return 0.0

    if math.isnan(number) or math.isinf(number) or number < 0:
        logger.warning(f"Invalid {name}={value!r}, using 0")
        return 0.0

    if number > upper:
        logger.warning(f"{name}={value!r} above {upper}, capping")
        return upper

    return number


def _percent(name: str, value: Any) -> float:
    return _non_negative(name, value, MAX_PERCENT)


def _whole_years(name: str, value: Any) -> int:
    return int(_non_negative(name, value, MAX_YEARS))


def _percent_of(amount: float, base: float) -> float:
    """amount / base as a percentage, 0 when base is 0."""
    if base <= 0:
        return 0.0
    return amount / base * 100


def _breakdown(items: List[BreakdownItem]) -> List[BreakdownItem]:
    """Drop non-positive line items so charts only show real slices."""
    return [item for item in items if item.amount > 0]


def year_label(year: int) -> str:
    return "Now" if year == 0 else f"Y{year}"


def compute_roi(inputs: CalculatorInput) -> CalculatorResult:
    """
    Calculate ROI metrics for a rental property.

    Pure function: identical inputs always give identical results, and
    degenerate inputs (zero rent, zero price, no loan) yield defined numbers
    rather than errors.

    Args:
        inputs: Property, financing and operating assumptions

    Returns:
        CalculatorResult with point-in-time metrics, the yearly projection
        (years 0 through the horizon) and chart breakdowns
    """
    purchase_price = _non_negative("purchase_price", inputs.purchase_price)
    monthly_rent = _non_negative("monthly_rent", inputs.monthly_rent)
    appreciation = _percent(
        "annual_appreciation_rate_percent", inputs.annual_appreciation_rate_percent
    )
    has_loan = bool(inputs.has_loan)
    horizon = _whole_years("projection_horizon_years", inputs.projection_horizon_years)
    summary_years = _whole_years("summary_years", inputs.summary_years)

    # === FINANCING ===
    if has_loan:
        down_payment_percent = min(
            _percent("down_payment_percent", inputs.down_payment_percent), 100.0
        )
        down_payment_amount = purchase_price * down_payment_percent / 100
        loan_amount = purchase_price - down_payment_amount
        annual_rate = (
            _percent(
                "annual_interest_rate_percent", inputs.annual_interest_rate_percent
            )
            / 100
        )
        tenure_years = _whole_years("loan_tenure_years", inputs.loan_tenure_years)
    else:
        down_payment_amount = purchase_price
        loan_amount = 0.0
        annual_rate = 0.0
        tenure_years = 0

    total_investment = down_payment_amount
    amortization_months = tenure_years * 12

    # Falls back to principal / months for zero-interest loans
    monthly_emi = calculate_payment(loan_amount, annual_rate, amortization_months)
    annual_emi = monthly_emi * 12

    # === INCOME & OPERATING EXPENSES ===
    annual_gross_rent = monthly_rent * 12
    annual_management_fee = (
        annual_gross_rent
        * _percent("management_fee_percent", inputs.management_fee_percent)
        / 100
    )
    vacancy_loss = (
        annual_gross_rent
        * _percent("vacancy_rate_percent", inputs.vacancy_rate_percent)
        / 100
    )
    annual_maintenance = (
        _non_negative("annual_maintenance_amount", inputs.annual_maintenance_amount)
        + _non_negative("monthly_maintenance_amount", inputs.monthly_maintenance_amount)
        * 12
        + purchase_price
        * _percent(
            "maintenance_percent_of_value", inputs.maintenance_percent_of_value
        )
        / 100
    )
    annual_property_tax = _non_negative(
        "annual_property_tax_amount", inputs.annual_property_tax_amount
    )

    # NOI excludes debt service
    total_annual_expenses = (
        annual_maintenance + annual_property_tax + annual_management_fee + vacancy_loss
    )
    net_operating_income = annual_gross_rent - total_annual_expenses

    # === CASH FLOW & RETURNS ===
    annual_cash_flow = net_operating_income - annual_emi
    monthly_cash_flow = annual_cash_flow / 12

    net_rental_yield = _percent_of(annual_cash_flow, total_investment)
    # No tax model, so cash-on-cash equals net yield
    cash_on_cash_return = net_rental_yield
    cap_rate = _percent_of(net_operating_income, purchase_price)
    gross_yield = _percent_of(annual_gross_rent, purchase_price)

    # === PROJECTION ===
    growth = 1 + appreciation / 100
    if has_loan:
        balances = yearly_balances(loan_amount, annual_rate, tenure_years, horizon)
    else:
        balances = [0.0] * (horizon + 1)

    yearly_projection = []
    for year in range(horizon + 1):
        property_value = purchase_price * growth**year
        loan_balance = balances[year]
        equity = property_value - loan_balance
        cumulative_cash_flow = annual_cash_flow * year

        yearly_projection.append(
            YearProjection(
                year=year,
                label=year_label(year),
                property_value=property_value,
                loan_balance=loan_balance,
                equity=equity,
                cumulative_cash_flow=cumulative_cash_flow,
                total_wealth=equity - total_investment + cumulative_cash_flow,
            )
        )

    # === SUMMARY ===
    summary_value = purchase_price * growth**summary_years
    summary_balance = calculate_remaining_balance(
        loan_amount, annual_rate, amortization_months, summary_years * 12
    )
    equity_gain = summary_value - purchase_price
    accumulated_cash_flow = annual_cash_flow * summary_years
    summary_equity = summary_value - summary_balance

    summary = ProjectionSummary(
        years=summary_years,
        property_value=summary_value,
        loan_balance=summary_balance,
        equity=summary_equity,
        equity_gain=equity_gain,
        accumulated_cash_flow=accumulated_cash_flow,
        total_roi_percent=_percent_of(
            equity_gain + accumulated_cash_flow, total_investment
        ),
        net_wealth_gain=summary_equity - total_investment + accumulated_cash_flow,
    )

    # === BREAKDOWNS ===
    expense_breakdown = _breakdown(
        [
            BreakdownItem("EMI", annual_emi, EMI_COLOR),
            BreakdownItem("Maintenance", annual_maintenance, MAINTENANCE_COLOR),
            BreakdownItem("Property Tax", annual_property_tax, PROPERTY_TAX_COLOR),
            BreakdownItem("Management Fee", annual_management_fee, MANAGEMENT_FEE_COLOR),
            BreakdownItem("Vacancy Loss", vacancy_loss, VACANCY_COLOR),
        ]
    )
    cash_flow_breakdown = _breakdown(
        [
            BreakdownItem("Rental Income", annual_gross_rent, RENTAL_INCOME_COLOR),
            BreakdownItem(
                "Operating Expenses", total_annual_expenses, OPERATING_EXPENSES_COLOR
            ),
            BreakdownItem("Loan Payment", annual_emi, EMI_COLOR),
        ]
    )

    logger.debug(
        f"ROI computed: price={purchase_price}, loan={loan_amount}, "
        f"noi={net_operating_income}, cash_flow={annual_cash_flow}"
    )

    return CalculatorResult(
        down_payment_amount=down_payment_amount,
        loan_amount=loan_amount,
        total_investment=total_investment,
        monthly_emi=monthly_emi,
        annual_emi=annual_emi,
        annual_gross_rent=annual_gross_rent,
        annual_maintenance=annual_maintenance,
        annual_property_tax=annual_property_tax,
        annual_management_fee=annual_management_fee,
        monthly_management_fee=annual_management_fee / 12,
        vacancy_loss=vacancy_loss,
        total_annual_expenses=total_annual_expenses,
        net_operating_income=net_operating_income,
        annual_cash_flow=annual_cash_flow,
        monthly_cash_flow=monthly_cash_flow,
        is_cash_flow_positive=monthly_cash_flow >= 0,
        net_rental_yield=net_rental_yield,
        cash_on_cash_return=cash_on_cash_return,
        cap_rate=cap_rate,
        gross_yield=gross_yield,
        annual_appreciation_amount=purchase_price * appreciation / 100,
        yearly_projection=yearly_projection,
        summary=summary,
        expense_breakdown=expense_breakdown,
        cash_flow_breakdown=cash_flow_breakdown,
    )
