#Expose the route calculation pipeline:
#the orchestrator (the "one call" entry point) and its user-facing errors.

from .orchestrator import (
    BusyError,
    MapNotReadyError,
    RouteCalculationError,
    RouteOrchestrator,
    UserInputError,
)
from .policy import PlannerPolicy, default_planner_policy

__all__ = [
    "BusyError",
    "MapNotReadyError",
    "RouteCalculationError",
    "RouteOrchestrator",
    "UserInputError",
    "PlannerPolicy",
    "default_planner_policy",
]
