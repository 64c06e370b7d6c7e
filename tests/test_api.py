"""
Tests for calculator and plan API endpoints.
"""

import pytest

from finplanner.main import app
from finplanner.services.planner import (
    LocalPlanGenerator,
    PlanGenerationError,
    PlanGenerator,
    get_plan_generator,
)


class FailingPlanGenerator(PlanGenerator):
    def generate(self, profile):
        raise PlanGenerationError("The planning service is unavailable")


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestCalculatorAPI:
    """Test calculator endpoints."""

    def test_lumpsum(self, client):
        response = client.post(
            "/api/calculate/lumpsum",
            json={"principal": 100000, "annual_rate": 12, "years": 10, "inflation_rate": 6},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["future_value"] == pytest.approx(310584.82, abs=0.01)
        assert data["invested_amount"] == 100000
        assert data["inflation_adjusted_value"] < data["future_value"]

    def test_lumpsum_default_inflation(self, client):
        response = client.post(
            "/api/calculate/lumpsum",
            json={"principal": 100000, "annual_rate": 12, "years": 10},
        )
        data = response.json()
        assert data["inflation_adjusted_value"] == pytest.approx(
            data["future_value"] / 1.06 ** 10
        )

    def test_lumpsum_insufficient_input(self, client):
        response = client.post(
            "/api/calculate/lumpsum",
            json={"principal": 0, "annual_rate": 12, "years": 10},
        )
        assert response.status_code == 400
        assert "Insufficient input" in response.json()["detail"]

    @pytest.mark.parametrize(
        "path,payload",
        [
            (
                "/api/calculate/lumpsum",
                {"principal": 1000, "annual_rate": 12, "years": 10000},
            ),
            (
                "/api/calculate/sip",
                {"monthly_investment": 5000, "annual_rate": 12, "years": 10000},
            ),
            (
                "/api/calculate/emi",
                {"principal": 100000, "annual_rate": 12, "tenure_years": 10000},
            ),
        ],
    )
    def test_horizon_beyond_limit(self, client, path, payload):
        response = client.post(path, json=payload)
        assert response.status_code == 400

    def test_sip(self, client):
        response = client.post(
            "/api/calculate/sip",
            json={"monthly_investment": 5000, "annual_rate": 12, "years": 10},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["future_value"] == pytest.approx(1161695.38, abs=1)
        assert data["invested_amount"] == 600000

    def test_recurring(self, client):
        response = client.post(
            "/api/calculate/recurring",
            json={
                "initial_lumpsum": 50000,
                "recurring_amount": 10000,
                "frequency": "half-yearly",
                "annual_rate": 12,
                "years": 10,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 10
        assert data["schedule"][0]["year"] == 1
        assert data["total_investment"] == 50000 + 10000 * 20
        assert data["estimated_returns"] == pytest.approx(
            data["total_value"] - data["total_investment"]
        )

    def test_recurring_invalid_frequency(self, client):
        response = client.post(
            "/api/calculate/recurring",
            json={
                "initial_lumpsum": 50000,
                "frequency": "weekly",
                "annual_rate": 12,
                "years": 10,
            },
        )
        assert response.status_code == 422

    def test_goal(self, client):
        response = client.post(
            "/api/calculate/goal",
            json={
                "investments": [{"amount": 100000, "start_year": 0, "inflation_rate": 6}],
                "annual_rate": 12,
                "total_years": 5,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 6
        assert data["total_value"] == pytest.approx(176234.17, abs=0.01)
        assert data["total_invested"] == 100000

    def test_goal_without_investments(self, client):
        response = client.post(
            "/api/calculate/goal",
            json={"investments": [], "annual_rate": 12, "total_years": 5},
        )
        assert response.status_code == 400

    def test_emi(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={
                "principal": 1000000,
                "annual_rate": 8.5,
                "tenure_years": 20,
                "start_date": "2025-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_emi"] == pytest.approx(8678.23, abs=0.5)
        assert data["interest_model"] == "reducing"
        assert len(data["schedule"]) == 20
        assert data["schedule"][-1]["ending_balance"] == 0
        assert data["schedule"][0]["last_payment_date"] == "2025-12-01"
        assert data["payoff_date"] == "2044-12-01"

    def test_emi_flat(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={
                "principal": 100000,
                "annual_rate": 10,
                "tenure_years": 2,
                "interest_model": "flat",
            },
        )
        data = response.json()
        assert data["monthly_emi"] == pytest.approx(5000)
        assert data["total_interest"] == pytest.approx(20000)

    def test_emi_insufficient_input(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={"principal": 100000, "annual_rate": 0, "tenure_years": 2},
        )
        assert response.status_code == 400

    def test_household(self, client):
        response = client.post(
            "/api/calculate/household",
            json={
                "monthly_income": 80000,
                "annual_income": 120000,
                "expenses": {"rent": 20000, "food": 10000, "utilities": 2000},
                "loans": [{"principal": 1500000, "emi": 20000}],
                "health_insurance": {"invested": True, "amount": 12000, "frequency": "yearly"},
                "term_insurance": {"invested": True, "amount": 3000, "frequency": "quarterly"},
                "emergency_fund_balance": 600000,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["net_monthly_cashflow"] == pytest.approx(36000)
        assert data["has_surplus"] is True
        assert data["budget"]["emi_on_track"] is True
        assert data["budget"]["investment_on_track"] is False
        assert data["emergency_fund"]["status"] == "good"

    def test_household_without_income(self, client):
        response = client.post(
            "/api/calculate/household",
            json={"expenses": {"rent": 1000}},
        )
        data = response.json()
        assert data["has_surplus"] is False
        assert data["budget"] is None


class TestPlanAPI:
    """Test plan generation endpoint."""

    def test_local_plan(self, client, profile_data):
        app.dependency_overrides[get_plan_generator] = lambda: LocalPlanGenerator()
        response = client.post("/api/plan", json=profile_data)
        assert response.status_code == 200
        data = response.json()
        assert data["assetAllocation"]["mutualFunds"]["percentage"] == 100
        assert data["suggestions"][-1]["suggestedAmount"] == "₹32,200"
        assert data["reasoning"]

    def test_plan_unavailable(self, client, profile_data):
        app.dependency_overrides[get_plan_generator] = lambda: LocalPlanGenerator()
        profile_data["monthlyIncome"] = ""
        profile_data["annualIncome"] = ""
        response = client.post("/api/plan", json=profile_data)
        assert response.status_code == 422
        assert "income details" in response.json()["detail"]

    def test_plan_generation_error(self, client, profile_data):
        app.dependency_overrides[get_plan_generator] = lambda: FailingPlanGenerator()
        response = client.post("/api/plan", json=profile_data)
        assert response.status_code == 502

    def test_invalid_profile(self, client):
        app.dependency_overrides[get_plan_generator] = lambda: LocalPlanGenerator()
        response = client.post("/api/plan", json={"monthlyIncome": "abc"})
        assert response.status_code == 422
