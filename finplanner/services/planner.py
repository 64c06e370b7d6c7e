"""
Investment plan generation.

Two generators share one contract: a deterministic local split of the
monthly surplus, and a Gemini-backed planner. Configuration picks one;
the AI planner falls back to the local one if no API key is set.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import date
from functools import lru_cache
from typing import Any, Optional

from google import genai
from pydantic import ValidationError

from finplanner.calculations.formatting import format_inr
from finplanner.config import get_settings
from finplanner.schemas.plan import (
    AllocationShare,
    AssetAllocation,
    InvestmentPlan,
    Suggestion,
)
from finplanner.schemas.profile import FinancialProfile

logger = logging.getLogger(__name__)

INCOME_MISSING_MESSAGE = (
    "Your income details are not provided. "
    "Please update your profile to generate a plan."
)
NO_SURPLUS_MESSAGE = (
    "Your net monthly cashflow is not positive. "
    "Adjust your expenses or income to generate an investment plan."
)


class PlanError(Exception):
    """Base class for plan generation errors."""


class PlanUnavailableError(PlanError):
    """The profile does not allow a plan yet; the message is for the user."""


class PlanGenerationError(PlanError):
    """The plan generator failed or produced an invalid plan."""


class PlanGenerator(ABC):
    """Produces an InvestmentPlan from a FinancialProfile."""

    @abstractmethod
    def generate(self, profile: FinancialProfile) -> InvestmentPlan:
        ...


class LocalPlanGenerator(PlanGenerator):
    """
    Deterministic plan.

    A share of the total EMI goes to loan prepayment; of what is left, a
    share builds the emergency fund and the rest goes into mutual funds.
    """

    def __init__(
        self,
        loan_prepayment_share: float = 0.10,
        emergency_fund_share: float = 0.30,
    ):
        self.loan_prepayment_share = loan_prepayment_share
        self.emergency_fund_share = emergency_fund_share

    def generate(self, profile: FinancialProfile) -> InvestmentPlan:
        summary = profile.household_summary()

        if summary.total_monthly_income <= 0:
            raise PlanUnavailableError(INCOME_MISSING_MESSAGE)
        if not summary.has_surplus:
            raise PlanUnavailableError(NO_SURPLUS_MESSAGE)

        loan_prepayment = summary.total_monthly_emi * self.loan_prepayment_share
        surplus = summary.net_monthly_cashflow - loan_prepayment
        emergency_fund = surplus * self.emergency_fund_share if surplus > 0 else 0.0
        mutual_funds = surplus - emergency_fund if surplus > 0 else 0.0

        suggestions = []
        if loan_prepayment > 0:
            suggestions.append(
                Suggestion(
                    category="Loan Prepayment",
                    description=(
                        f"Prepay {self.loan_prepayment_share:.0%} of your monthly EMIs "
                        "to reduce interest on existing loans."
                    ),
                    suggested_amount=format_inr(loan_prepayment),
                )
            )
        suggestions.append(
            Suggestion(
                category="Emergency Fund",
                description=(
                    "Build a liquid emergency reserve in a savings account "
                    "or liquid fund."
                ),
                suggested_amount=format_inr(emergency_fund),
            )
        )
        suggestions.append(
            Suggestion(
                category="Mutual Funds",
                description="Invest the remaining surplus through a monthly SIP.",
                suggested_amount=format_inr(mutual_funds),
            )
        )

        reasoning = (
            f"Your net monthly cashflow is {format_inr(summary.net_monthly_cashflow)}. "
            f"After setting aside {format_inr(loan_prepayment)} for loan prepayment, "
            f"{self.emergency_fund_share:.0%} of the remaining "
            f"{format_inr(max(surplus, 0.0))} goes to your emergency fund and the "
            "rest is invested in mutual funds."
        )

        return InvestmentPlan(
            asset_allocation=AssetAllocation(
                stocks=AllocationShare(percentage=0),
                bonds=AllocationShare(percentage=0),
                mutual_funds=AllocationShare(percentage=100),
                real_estate=AllocationShare(percentage=0),
                other=AllocationShare(percentage=0),
            ),
            suggestions=suggestions,
            reasoning=reasoning,
        )


_SHARE_SCHEMA = {
    "type": "OBJECT",
    "properties": {"percentage": {"type": "NUMBER"}},
    "required": ["percentage"],
}

PLAN_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "assetAllocation": {
            "type": "OBJECT",
            "description": "Percentage breakdown; the percentages must sum to 100.",
            "properties": {
                "stocks": _SHARE_SCHEMA,
                "bonds": _SHARE_SCHEMA,
                "mutualFunds": _SHARE_SCHEMA,
                "realEstate": _SHARE_SCHEMA,
                "other": _SHARE_SCHEMA,
            },
            "required": ["stocks", "bonds", "mutualFunds", "realEstate", "other"],
        },
        "suggestions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "category": {
                        "type": "STRING",
                        "description": "Investment category, e.g. 'Equity Mutual Funds'",
                    },
                    "description": {
                        "type": "STRING",
                        "description": "Why this investment is suggested",
                    },
                    "suggestedAmount": {
                        "type": "STRING",
                        "description": "Suggested monthly amount in INR, e.g. '₹5,000'",
                    },
                },
                "required": ["category", "description", "suggestedAmount"],
            },
        },
        "reasoning": {"type": "STRING"},
    },
    "required": ["assetAllocation", "suggestions", "reasoning"],
}

PLAN_PROMPT = """You are an expert financial planner in India. Create a personalized investment plan based on the user's financial profile.

Analyze the user's details:
- Age: {age}
- Monthly Income
- Monthly Expenses
- Existing Loans (EMIs)
- Existing Investments and Insurance premiums
- Risk Tolerance (riskPercentage)

First, calculate the user's net monthly disposable income (cashflow) available for investment.
Net Monthly Cashflow = (monthlyIncome + (annualIncome / 12)) - (all monthly expenses) - (all monthly loan EMIs) - (all monthly insurance premiums).

Based on the net monthly cashflow, risk tolerance, and age, provide a detailed investment plan.

The plan must include:
1. Asset Allocation: a percentage breakdown of how the net monthly cashflow should be invested across Stocks, Bonds, Mutual Funds, Real Estate, and Other. The total allocation must sum to 100%.
2. Investment Suggestions: 3-5 specific, actionable suggestions. For each, give the category, a brief description, and a suggested monthly amount in INR. The suggested amounts should add up to roughly the net monthly cashflow.
3. Reasoning: a concise rationale explaining how the plan fits the user's profile, goals, and risk appetite.

User's Financial Profile:
```json
{profile_json}
```
"""


class GeminiPlanGenerator(PlanGenerator):
    """Plan generated by Gemini, constrained to the plan JSON schema."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        client: Optional[Any] = None,
    ):
        self.model = model
        self.client = client if client is not None else genai.Client(api_key=api_key)

    def build_prompt(self, profile: FinancialProfile, today: Optional[date] = None) -> str:
        """Render the planning prompt for a profile."""
        age = profile.age(today)
        profile_json = json.dumps(
            profile.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
        )
        return PLAN_PROMPT.format(
            age=age if age is not None else "unknown",
            profile_json=profile_json,
        )

    def generate(self, profile: FinancialProfile) -> InvestmentPlan:
        prompt = self.build_prompt(profile)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config={
                    "response_mime_type": "application/json",
                    "response_schema": PLAN_RESPONSE_SCHEMA,
                },
            )
        except Exception as e:
            logger.error(f"Gemini plan request failed: {str(e)}")
            raise PlanGenerationError("The planning service is unavailable") from e

        try:
            plan = InvestmentPlan.model_validate_json(response.text or "")
        except ValidationError as e:
            logger.error(f"Gemini returned an invalid plan: {e.error_count()} errors")
            raise PlanGenerationError("The planning service returned an invalid plan") from e

        logger.info(f"Generated plan with {len(plan.suggestions)} suggestions")
        return plan


@lru_cache()
def get_plan_generator() -> PlanGenerator:
    """Get the configured plan generator (cached)."""
    settings = get_settings()
    local = LocalPlanGenerator(
        loan_prepayment_share=settings.loan_prepayment_share,
        emergency_fund_share=settings.emergency_fund_share,
    )

    if settings.plan_generator == "ai":
        if settings.gemini_api_key:
            logger.info(f"Using Gemini plan generator ({settings.gemini_model})")
            return GeminiPlanGenerator(
                api_key=settings.gemini_api_key, model=settings.gemini_model
            )
        logger.warning("AI plan generator requested but no Gemini API key is set; using local plans")
    elif settings.plan_generator != "local":
        logger.warning(f"Unknown plan generator '{settings.plan_generator}'; using local plans")

    return local
