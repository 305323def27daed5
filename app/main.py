"""
Main FastAPI application entry point.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse

from app.config import get_settings
from app.api import router as api_router
from app.calculations.roi import CalculatorInput, compute_roi
from app.services.formatting import (
    cash_flow_tone,
    convert_amount,
    format_currency,
    format_percent,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

UI_DIR = Path(__file__).resolve().parent / "ui"

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Rental property ROI calculator for NRI investors",
    version="0.1.0",
    debug=settings.debug,
)

# Mount static files
app.mount("/static", StaticFiles(directory=UI_DIR / "static"), name="static")

# Set up templates
templates = Jinja2Templates(directory=UI_DIR / "templates")
templates.env.filters["percent"] = format_percent

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", response_class=HTMLResponse)
async def roi_calculator_page(
    request: Request,
    purchase_price: float = Query(5_000_000, gt=0),
    monthly_rent: float = Query(25_000, ge=0),
    appreciation: float = Query(5.0, ge=0, le=100),
    has_loan: bool = True,
    down_payment: float = Query(20.0, ge=0, le=100),
    interest_rate: float = Query(8.5, ge=0, le=100),
    loan_tenure: int = Query(20, ge=1, le=50),
    management_fee: float = Query(8.0, ge=0, le=100),
    maintenance_percent: float = Query(1.0, ge=0, le=100),
    currency: Optional[str] = Query(None),
):
    """Render the ROI calculator with results for the given inputs."""
    currency = (currency or settings.default_currency).upper()
    logger.debug(f"Rendering calculator page in {currency}")
    try:
        convert_amount(0, currency, settings.inr_per_usd)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = compute_roi(
        CalculatorInput(
            purchase_price=purchase_price,
            monthly_rent=monthly_rent,
            annual_appreciation_rate_percent=appreciation,
            has_loan=has_loan,
            down_payment_percent=down_payment,
            annual_interest_rate_percent=interest_rate,
            loan_tenure_years=loan_tenure,
            management_fee_percent=management_fee,
            maintenance_percent_of_value=maintenance_percent,
            projection_horizon_years=settings.default_projection_years,
            summary_years=settings.summary_years,
        )
    )

    def money(amount: float, compact: bool = False) -> str:
        converted = convert_amount(amount, currency, settings.inr_per_usd)
        return format_currency(converted, currency, compact)

    return templates.TemplateResponse(
        request,
        "roi_calculator.html",
        {
            "title": settings.app_name,
            "currency": currency,
            "result": result,
            "money": money,
            "tone": cash_flow_tone(result.monthly_cash_flow),
            "inputs": {
                "purchase_price": purchase_price,
                "monthly_rent": monthly_rent,
                "appreciation": appreciation,
                "has_loan": has_loan,
                "down_payment": down_payment,
                "interest_rate": interest_rate,
                "loan_tenure": loan_tenure,
                "management_fee": management_fee,
                "maintenance_percent": maintenance_percent,
            },
        },
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": "0.1.0"}
