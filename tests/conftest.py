"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from app.main import app


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def scenario_a_payload():
    """Financed flat with tax, vacancy and management fee."""
    return {
        "purchase_price": 5_000_000,
        "monthly_rent": 25_000,
        "annual_appreciation_rate_percent": 5,
        "has_loan": True,
        "down_payment_percent": 20,
        "annual_interest_rate_percent": 8.5,
        "loan_tenure_years": 20,
        "annual_maintenance_amount": 60_000,
        "annual_property_tax_amount": 15_000,
        "management_fee_percent": 8,
        "vacancy_rate_percent": 5,
    }
