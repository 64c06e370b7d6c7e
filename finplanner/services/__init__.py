"""
Application services module.
"""

from finplanner.services.planner import (
    GeminiPlanGenerator,
    LocalPlanGenerator,
    PlanError,
    PlanGenerationError,
    PlanGenerator,
    PlanUnavailableError,
    get_plan_generator,
)

__all__ = [
    "GeminiPlanGenerator",
    "LocalPlanGenerator",
    "PlanError",
    "PlanGenerationError",
    "PlanGenerator",
    "PlanUnavailableError",
    "get_plan_generator",
]
