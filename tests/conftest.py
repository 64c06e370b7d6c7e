"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from finplanner.main import app
from finplanner.schemas import FinancialProfile


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def profile_data():
    """A profile as the dashboard stores it (form strings)."""
    return {
        "name": "Jane Doe",
        "dob": "1990-05-15",
        "riskPercentage": "60",
        "monthlyIncome": "100000",
        "annualIncome": "120000",
        "expenses": {
            "rent": "20000",
            "utilities": "3000",
            "transport": "4000",
            "food": "10000",
            "entertainment": "3000",
            "healthcare": "",
            "other": "0",
        },
        "loans": [
            {
                "id": 1,
                "type": "Home Loan",
                "amount": "2500000",
                "emi": "20000",
                "rate": "8.5",
                "tenure": "20",
            }
        ],
        "investments": {
            "stocks": {"invested": "no", "amount": ""},
            "mutualFunds": {"invested": "yes", "amount": "5000"},
            "bonds": {"invested": "no", "amount": ""},
            "realEstate": {"invested": "no", "amount": ""},
            "commodities": {"invested": "no", "amount": ""},
            "other": {"invested": "no", "amount": ""},
            "termInsurance": {"invested": "yes", "amount": "12000", "frequency": "yearly"},
            "healthInsurance": {"invested": "yes", "amount": "6000", "frequency": "half-yearly"},
        },
    }


@pytest.fixture
def profile(profile_data):
    """Parsed financial profile."""
    return FinancialProfile.model_validate(profile_data)
