"""Domain models for winnie-core.

- Goals, goal types and contributions (goal.py)
- The couple's financial profile (profile.py)
- Allocation plans and scenarios (scenario.py)
- Engine output, tracking status and comparison rows (projection.py)
"""

from winnie_core.models.goal import Contribution, Goal, GoalType
from winnie_core.models.money import Money, Rate, new_id, to_decimal, utc_now
from winnie_core.models.profile import FinancialProfile
from winnie_core.models.projection import (
    EngineInput,
    EngineOutput,
    EngineWarning,
    GoalDifference,
    GoalProjection,
    GoalTrackingStatus,
    TrackingState,
    WarningKind,
)
from winnie_core.models.scenario import (
    Allocation,
    DecisionStatus,
    Scenario,
    activate_scenario,
)

__all__ = [
    # Money helpers
    "Money",
    "Rate",
    "to_decimal",
    "utc_now",
    "new_id",
    # Goals
    "GoalType",
    "Goal",
    "Contribution",
    # Profile
    "FinancialProfile",
    # Plans
    "Allocation",
    "DecisionStatus",
    "Scenario",
    "activate_scenario",
    # Engine output
    "GoalProjection",
    "WarningKind",
    "EngineWarning",
    "EngineInput",
    "EngineOutput",
    "TrackingState",
    "GoalTrackingStatus",
    "GoalDifference",
]
