"""Engine output models.

These are derived values, recomputed whenever inputs change and never
persisted.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from winnie_core.calculations import horizon_text, time_to_completion_text
from winnie_core.constants import MAX_PROJECTION_MONTHS
from winnie_core.models.goal import Goal
from winnie_core.models.money import Money
from winnie_core.models.profile import FinancialProfile
from winnie_core.models.scenario import Allocation


class EngineInput(BaseModel):
    """Everything one engine run needs."""

    model_config = {"frozen": True}

    profile: FinancialProfile
    goals: list[Goal] = Field(default_factory=list)
    allocations: Allocation = Field(default_factory=Allocation)


class GoalProjection(BaseModel):
    """Forecast for one goal under one allocation plan."""

    model_config = {"frozen": True}

    goal_id: str
    months_to_complete: Optional[int] = Field(
        default=None,
        ge=0,
        description="Months until the target is reached; None when unreachable",
    )
    completion_date: Optional[datetime] = None
    projected_final_value: Money = Field(
        description="Target amount when reachable, otherwise the balance at the projection horizon",
    )
    monthly_contribution: Money
    is_reachable: bool
    horizon_months: int = Field(
        default=MAX_PROJECTION_MONTHS,
        ge=1,
        description="Projection cap the forecast was made under",
    )

    @property
    def time_to_completion_text(self) -> str:
        return time_to_completion_text(self.months_to_complete, self.horizon_months)


class WarningKind(str, Enum):
    OVER_ALLOCATED = "over_allocated"
    GOAL_UNREACHABLE = "goal_unreachable"
    NO_CONTRIBUTION_FOR_GOAL = "no_contribution_for_goal"
    NEGATIVE_DISPOSABLE = "negative_disposable"


_BLOCKING_KINDS = frozenset({WarningKind.OVER_ALLOCATED, WarningKind.NEGATIVE_DISPOSABLE})


class EngineWarning(BaseModel):
    """A problem with the plan that the couple should see.

    Blocking warnings (over-allocation, expenses above income) mean the plan
    cannot be funded as written.
    """

    model_config = {"frozen": True}

    kind: WarningKind
    goal_id: Optional[str] = None
    goal_name: Optional[str] = None
    excess: Optional[Money] = None
    horizon_months: int = Field(default=MAX_PROJECTION_MONTHS, ge=1)

    @property
    def message(self) -> str:
        if self.kind == WarningKind.OVER_ALLOCATED:
            return f"Over-allocated by ${self.excess:,.2f}"
        if self.kind == WarningKind.GOAL_UNREACHABLE:
            return f"{self.goal_name} may take over {horizon_text(self.horizon_months)} to reach"
        if self.kind == WarningKind.NO_CONTRIBUTION_FOR_GOAL:
            return f"No monthly contribution set for {self.goal_name}"
        return "Expenses exceed income"

    @property
    def is_blocker(self) -> bool:
        return self.kind in _BLOCKING_KINDS


class EngineOutput(BaseModel):
    """Result of one engine run over a profile, goals and allocation."""

    model_config = {"frozen": True}

    projections: dict[str, GoalProjection] = Field(default_factory=dict)
    total_allocated: Money
    remaining_disposable: Money
    warnings: list[EngineWarning] = Field(default_factory=list)
    calculated_at: datetime

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def projection_for(self, goal_id: str) -> Optional[GoalProjection]:
        return self.projections.get(goal_id)

    @property
    def projections_by_completion_date(self) -> list[GoalProjection]:
        """Projections soonest first; unreachable goals last in input order."""
        reachable = [p for p in self.projections.values() if p.completion_date is not None]
        unreachable = [p for p in self.projections.values() if p.completion_date is None]
        return sorted(reachable, key=lambda p: p.completion_date) + unreachable


class TrackingState(str, Enum):
    COMPLETED = "completed"
    NO_TARGET_DATE = "no_target_date"
    NOT_IN_PLAN = "not_in_plan"
    ON_TRACK = "on_track"
    BEHIND = "behind"


_TRACKING_LABELS = {
    TrackingState.COMPLETED: "Complete",
    TrackingState.NO_TARGET_DATE: "No Target Date",
    TrackingState.NOT_IN_PLAN: "Not in Plan",
    TrackingState.ON_TRACK: "On Track",
    TrackingState.BEHIND: "Behind",
}


class GoalTrackingStatus(BaseModel):
    """How a goal's projection compares to the date the couple wants.

    Which optional fields are set depends on ``state``:

    - completed: none
    - no_target_date: ``projected_date`` when a projection exists
    - not_in_plan: ``target_date``
    - on_track: ``projected_date``, ``target_date``, ``months_difference``,
      ``current_contribution``
    - behind: as on_track plus ``required_contribution``. An unreachable
      goal is behind with ``projected_date`` and ``months_difference`` unset.

    ``months_difference`` is positive when the goal finishes early.
    """

    model_config = {"frozen": True}

    state: TrackingState
    projected_date: Optional[datetime] = None
    target_date: Optional[datetime] = None
    months_difference: Optional[int] = None
    current_contribution: Optional[Money] = None
    required_contribution: Optional[Money] = None

    @property
    def label(self) -> str:
        return _TRACKING_LABELS[self.state]

    @property
    def is_actionable(self) -> bool:
        return self.state == TrackingState.BEHIND

    @property
    def is_tracked_by_plan(self) -> bool:
        return self.state in (TrackingState.ON_TRACK, TrackingState.BEHIND)


class GoalDifference(BaseModel):
    """One goal's row in a side-by-side scenario comparison."""

    model_config = {"frozen": True}

    goal_id: str
    goal_name: str
    amount_a: Money = Decimal("0")
    amount_b: Money = Decimal("0")
    months_a: Optional[int] = None
    months_b: Optional[int] = None

    @property
    def months_difference(self) -> Optional[int]:
        """``months_b - months_a``; None when either side is unreachable."""
        if self.months_a is None or self.months_b is None:
            return None
        return self.months_b - self.months_a

    @property
    def is_improvement(self) -> bool:
        """Scenario B finishes this goal sooner."""
        diff = self.months_difference
        return diff is not None and diff < 0

    @property
    def is_regression(self) -> bool:
        diff = self.months_difference
        return diff is not None and diff > 0
