"""Goal tracking status and side-by-side scenario comparison rows.

These sit on top of engine output: they read projections and never run
projections of their own, except for asking the engine what monthly amount a
goal that is behind would need.
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from .calculations import ensure_aware, whole_months_between
from .engine import FinancialEngine
from .models import (
    EngineOutput,
    Goal,
    GoalDifference,
    GoalTrackingStatus,
    Scenario,
    TrackingState,
)

logger = structlog.get_logger()


def _month_index(moment: datetime) -> int:
    return moment.year * 12 + moment.month


def tracking_status(
    goal: Goal,
    output: EngineOutput,
    engine: FinancialEngine,
    now: Optional[datetime] = None,
) -> GoalTrackingStatus:
    """Compare a goal's projected completion with its desired date.

    Projected and target dates are compared by calendar month, so finishing
    anywhere inside the target month counts as on track.

    Args:
        goal: The goal to classify
        output: Engine output for the plan being tracked
        engine: Used to compute the required contribution when behind
        now: Reference date (default: when ``output`` was calculated)
    """
    if goal.is_completed:
        return GoalTrackingStatus(state=TrackingState.COMPLETED)

    projection = output.projection_for(goal.id)

    if goal.desired_date is None:
        return GoalTrackingStatus(
            state=TrackingState.NO_TARGET_DATE,
            projected_date=projection.completion_date if projection else None,
        )

    target_date = ensure_aware(goal.desired_date)

    if projection is None or projection.monthly_contribution <= 0:
        return GoalTrackingStatus(
            state=TrackingState.NOT_IN_PLAN,
            target_date=target_date,
        )

    now = now if now is not None else output.calculated_at

    if projection.completion_date is None:
        required = engine.required_monthly_contribution(goal, target_date, now=now)
        return GoalTrackingStatus(
            state=TrackingState.BEHIND,
            target_date=target_date,
            current_contribution=projection.monthly_contribution,
            required_contribution=required if required is not None else Decimal("0"),
        )

    projected_date = projection.completion_date
    months_difference = whole_months_between(projected_date, target_date)

    if _month_index(projected_date) <= _month_index(target_date):
        return GoalTrackingStatus(
            state=TrackingState.ON_TRACK,
            projected_date=projected_date,
            target_date=target_date,
            months_difference=months_difference,
            current_contribution=projection.monthly_contribution,
        )

    required = engine.required_monthly_contribution(goal, target_date, now=now)
    logger.debug(
        "goal_behind_schedule",
        goal_id=goal.id,
        months_difference=months_difference,
        required_contribution=str(required) if required is not None else None,
    )
    return GoalTrackingStatus(
        state=TrackingState.BEHIND,
        projected_date=projected_date,
        target_date=target_date,
        months_difference=months_difference,
        current_contribution=projection.monthly_contribution,
        required_contribution=required if required is not None else Decimal("0"),
    )


def compare_goals(
    goals: Sequence[Goal],
    scenario_a: Scenario,
    scenario_b: Scenario,
    output_a: EngineOutput,
    output_b: EngineOutput,
) -> list[GoalDifference]:
    """One comparison row per active goal included in either scenario.

    Rows follow the order of ``goals``. A side whose projection is missing or
    unreachable has ``months`` of None, which makes the row's month delta None.
    """
    rows: list[GoalDifference] = []
    for goal in goals:
        if not goal.is_active:
            continue
        in_a = scenario_a.allocations.is_included(goal.id)
        in_b = scenario_b.allocations.is_included(goal.id)
        if not (in_a or in_b):
            continue

        projection_a = output_a.projection_for(goal.id)
        projection_b = output_b.projection_for(goal.id)
        rows.append(GoalDifference(
            goal_id=goal.id,
            goal_name=goal.name,
            amount_a=scenario_a.allocations.amount_for(goal.id),
            amount_b=scenario_b.allocations.amount_for(goal.id),
            months_a=projection_a.months_to_complete if projection_a else None,
            months_b=projection_b.months_to_complete if projection_b else None,
        ))
    return rows
