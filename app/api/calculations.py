"""
ROI calculation API endpoints.

These endpoints accept calculator inputs and return calculated results.
Called on every input change by the calculator page.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date

from app.calculations import amortization, roi

logger = logging.getLogger(__name__)

router = APIRouter()


class ROIInput(BaseModel):
    """Input for ROI calculation. Percentages are whole numbers (8 = 8%)."""

    # Property
    purchase_price: float = Field(gt=0)
    monthly_rent: float = Field(default=0.0, ge=0)
    annual_appreciation_rate_percent: float = Field(default=5.0, ge=0, le=100)

    # Financing
    has_loan: bool = False
    down_payment_percent: float = Field(default=20.0, ge=0, le=100)
    annual_interest_rate_percent: float = Field(default=8.5, ge=0, le=100)
    loan_tenure_years: int = Field(default=20, ge=0, le=50)

    # Operating costs
    annual_maintenance_amount: float = Field(default=0.0, ge=0)
    monthly_maintenance_amount: float = Field(default=0.0, ge=0)
    maintenance_percent_of_value: float = Field(default=0.0, ge=0, le=100)
    annual_property_tax_amount: float = Field(default=0.0, ge=0)
    management_fee_percent: float = Field(default=0.0, ge=0, le=100)
    vacancy_rate_percent: float = Field(default=0.0, ge=0, le=100)

    # Projection
    projection_horizon_years: int = Field(default=10, ge=1, le=50)
    summary_years: int = Field(default=5, ge=1, le=50)

    @model_validator(mode="after")
    def check_loan_tenure(self):
        if self.has_loan and self.loan_tenure_years < 1:
            raise ValueError("loan_tenure_years must be at least 1 when has_loan is set")
        return self

    def to_calculator_input(self) -> roi.CalculatorInput:
        return roi.CalculatorInput(**self.model_dump())


class YearProjectionOut(BaseModel):
    year: int
    label: str
    property_value: float
    loan_balance: float
    equity: float
    cumulative_cash_flow: float
    total_wealth: float


class SummaryOut(BaseModel):
    years: int
    property_value: float
    loan_balance: float
    equity: float
    equity_gain: float
    accumulated_cash_flow: float
    total_roi_percent: float
    net_wealth_gain: float


class BreakdownItemOut(BaseModel):
    name: str
    amount: float
    color: str


class ROIResponse(BaseModel):
    """Calculated ROI metrics, projection and chart data."""

    # Investment
    down_payment_amount: float
    loan_amount: float
    total_investment: float

    # Debt service
    monthly_emi: float
    annual_emi: float

    # Income and expenses
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

    yearly_projection: List[YearProjectionOut]
    summary: SummaryOut
    expense_breakdown: List[BreakdownItemOut]
    cash_flow_breakdown: List[BreakdownItemOut]


@router.post("/roi", response_model=ROIResponse)
async def calculate_roi(inputs: ROIInput):
    """Calculate ROI metrics and the yearly wealth projection."""
    logger.info(
        f"ROI calculation: price={inputs.purchase_price}, "
        f"rent={inputs.monthly_rent}, has_loan={inputs.has_loan}"
    )

    result = roi.compute_roi(inputs.to_calculator_input())

    return ROIResponse(**result.as_dict())


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=100)
    tenure_years: int = Field(ge=1, le=50)
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    annual_rate = inputs.annual_rate_percent / 100

    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=annual_rate,
        amortization_months=inputs.tenure_years * 12,
        start_date=inputs.start_date,
    )

    return {
        "monthly_emi": amortization.calculate_payment(
            inputs.principal, annual_rate, inputs.tenure_years * 12
        ),
        "schedule": schedule,
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }
