"""
API routes for the finance planner.
"""

from fastapi import APIRouter

from finplanner.api import calculations, plan

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(plan.router, prefix="/plan", tags=["plan"])
