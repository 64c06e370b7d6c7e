"""
Investment plan API endpoint.
"""

from fastapi import APIRouter, Depends, HTTPException

from finplanner.schemas import FinancialProfile, InvestmentPlan
from finplanner.services.planner import (
    PlanGenerationError,
    PlanGenerator,
    PlanUnavailableError,
    get_plan_generator,
)

router = APIRouter()


@router.post("", response_model=InvestmentPlan)
def generate_plan(
    profile: FinancialProfile,
    generator: PlanGenerator = Depends(get_plan_generator),
):
    """Generate an investment plan for a financial profile."""
    try:
        return generator.generate(profile)
    except PlanUnavailableError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PlanGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
