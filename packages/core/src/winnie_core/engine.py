"""Goal projection engine.

Turns a couple's financial profile, their goals and a monthly allocation
plan into a completion forecast per goal. The engine keeps no state between
calls, so one instance can be shared freely.

"Now" is injectable: pass ``clock`` to the constructor or ``now`` to any
operation to get deterministic results.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import structlog

from .calculations import (
    add_months,
    ensure_aware,
    future_value,
    inflation_adjusted,
    months_to_reach_target,
    required_monthly_contribution,
)
from .config import EngineConfig
from .models import (
    Allocation,
    EngineInput,
    EngineOutput,
    EngineWarning,
    FinancialProfile,
    Goal,
    GoalProjection,
    Scenario,
    WarningKind,
    to_decimal,
    utc_now,
)

logger = structlog.get_logger()

ZERO = Decimal("0")

Clock = Callable[[], datetime]


class FinancialEngine:
    """
    Compound-growth projections for savings goals.

    Monthly growth is ``annual_rate / 12`` with contributions added at the
    end of each month. Goals that do not reach their target within
    ``config.max_projection_months`` are reported unreachable rather than
    raising.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine settings (default: loaded from the environment)
            clock: Returns the reference "now" (default: current UTC time)
        """
        self.config = config or EngineConfig()
        self._clock = clock or utc_now

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        return ensure_aware(now if now is not None else self._clock())

    def calculate(
        self,
        profile: FinancialProfile,
        goals: Sequence[Goal],
        allocations: Allocation,
        now: Optional[datetime] = None,
    ) -> EngineOutput:
        """
        Project every active goal under ``allocations``.

        Goals missing from the allocation are projected at $0 per month.
        Inactive goals are skipped.

        Args:
            profile: The couple's financial snapshot
            goals: Goals to project, in display order
            allocations: Monthly plan
            now: Reference date for completion dates

        Returns:
            EngineOutput with one projection per active goal and any warnings
        """
        now = self._resolve_now(now)
        projections: dict[str, GoalProjection] = {}
        warnings: list[EngineWarning] = []

        total_allocated = allocations.total_allocated
        disposable = profile.monthly_disposable

        if profile.monthly_income < profile.monthly_expenses:
            warnings.append(EngineWarning(kind=WarningKind.NEGATIVE_DISPOSABLE))

        if total_allocated > disposable:
            warnings.append(EngineWarning(
                kind=WarningKind.OVER_ALLOCATED,
                excess=total_allocated - disposable,
            ))

        for goal in goals:
            if not goal.is_active:
                continue

            contribution = allocations.amount_for(goal.id)
            if contribution <= 0:
                warnings.append(EngineWarning(
                    kind=WarningKind.NO_CONTRIBUTION_FOR_GOAL,
                    goal_id=goal.id,
                    goal_name=goal.name,
                ))

            projection = self.calculate_goal_projection(goal, contribution, now=now)
            projections[goal.id] = projection

            if not projection.is_reachable:
                warnings.append(EngineWarning(
                    kind=WarningKind.GOAL_UNREACHABLE,
                    goal_id=goal.id,
                    goal_name=goal.name,
                    horizon_months=projection.horizon_months,
                ))

        remaining = max(disposable - total_allocated, ZERO)

        logger.info(
            "engine_calculated",
            goals=len(projections),
            total_allocated=str(total_allocated),
            remaining_disposable=str(remaining),
            warnings=[w.kind.value for w in warnings],
        )

        return EngineOutput(
            projections=projections,
            total_allocated=total_allocated,
            remaining_disposable=remaining,
            warnings=warnings,
            calculated_at=now,
        )

    def run(self, engine_input: EngineInput, now: Optional[datetime] = None) -> EngineOutput:
        """Calculate from a bundled EngineInput."""
        return self.calculate(
            engine_input.profile,
            engine_input.goals,
            engine_input.allocations,
            now=now,
        )

    def calculate_goal_projection(
        self,
        goal: Goal,
        monthly_contribution: Decimal,
        now: Optional[datetime] = None,
    ) -> GoalProjection:
        """Project a single goal at a fixed monthly contribution.

        Negative contributions are treated as zero.
        """
        now = self._resolve_now(now)
        contribution = max(to_decimal(monthly_contribution), ZERO)
        annual_rate = goal.effective_return_rate
        horizon = self.config.max_projection_months

        if goal.is_completed:
            return GoalProjection(
                goal_id=goal.id,
                months_to_complete=0,
                completion_date=now,
                projected_final_value=goal.current_amount,
                monthly_contribution=contribution,
                is_reachable=True,
                horizon_months=horizon,
            )

        months = months_to_reach_target(
            target_amount=goal.target_amount,
            present_value=goal.current_amount,
            monthly_contribution=contribution,
            annual_rate=annual_rate,
            max_months=horizon,
        )

        if months is None:
            projected_value = future_value(
                present_value=goal.current_amount,
                monthly_contribution=contribution,
                annual_rate=annual_rate,
                months=horizon,
            )
            completion_date = None
        else:
            projected_value = goal.target_amount
            completion_date = add_months(now, months)

        logger.debug(
            "projection_calculated",
            goal_id=goal.id,
            annual_rate=str(annual_rate),
            contribution=str(contribution),
            months=months,
        )

        return GoalProjection(
            goal_id=goal.id,
            months_to_complete=months,
            completion_date=completion_date,
            projected_final_value=projected_value,
            monthly_contribution=contribution,
            is_reachable=months is not None,
            horizon_months=horizon,
        )

    def required_monthly_contribution(
        self,
        goal: Goal,
        by_date: datetime,
        now: Optional[datetime] = None,
    ) -> Optional[Decimal]:
        """Monthly amount needed to finish ``goal`` by ``by_date``.

        Solved over at most ``config.max_projection_months``, so allocating
        the result always projects as reachable.

        Returns:
            The contribution rounded up to the cent, 0 if the goal is already
            complete, or None if ``by_date`` has passed or leaves no whole
            month to save in.
        """
        return required_monthly_contribution(
            target_amount=goal.target_amount,
            present_value=goal.current_amount,
            by_date=by_date,
            annual_rate=goal.effective_return_rate,
            now=self._resolve_now(now),
            max_months=self.config.max_projection_months,
        )

    def compare_scenarios(
        self,
        scenario_a: Scenario,
        scenario_b: Scenario,
        profile: FinancialProfile,
        goals: Sequence[Goal],
        now: Optional[datetime] = None,
    ) -> tuple[EngineOutput, EngineOutput]:
        """Run two scenarios against the same profile, goals and reference date."""
        now = self._resolve_now(now)
        output_a = self.calculate(profile, goals, scenario_a.allocations, now=now)
        output_b = self.calculate(profile, goals, scenario_b.allocations, now=now)
        return output_a, output_b

    def simulate_allocation_change(
        self,
        goal_id: str,
        new_amount: Any,
        profile: FinancialProfile,
        goals: Sequence[Goal],
        allocations: Allocation,
        now: Optional[datetime] = None,
    ) -> EngineOutput:
        """Recalculate as if one goal's monthly amount were ``new_amount``.

        ``allocations`` itself is left untouched.
        """
        modified = allocations.model_copy(deep=True)
        modified.set_amount(goal_id, new_amount)
        return self.calculate(profile, goals, modified, now=now)

    def inflation_adjusted(self, amount: Decimal, years: int) -> Decimal:
        """Today's-dollars value of ``amount`` received ``years`` from now."""
        return inflation_adjusted(amount, years, self.config.inflation_rate)
