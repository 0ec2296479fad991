"""Allocation plans and saved what-if scenarios."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from winnie_core.exceptions import ValidationError
from winnie_core.models.money import Money, new_id, to_decimal, utc_now


ZERO = Decimal("0")


def _non_negative(amount: Any) -> Decimal:
    """Clamp a monthly amount to zero or more."""
    value = to_decimal(amount)
    return value if value > 0 else ZERO


class Allocation(BaseModel):
    """Monthly contribution plan across goals.

    A goal is either included in the plan or not. ``goal_ids`` lists the
    included goals in the order they were added; ``amounts`` maps every
    included goal to its monthly amount. Including a goal at $0 is a
    different state from leaving it out.

    Negative amounts are clamped to zero wherever they enter.
    """

    goal_ids: list[str] = Field(default_factory=list)
    amounts: dict[str, Money] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _reconcile(self) -> "Allocation":
        ordered: list[str] = []
        for goal_id in list(self.goal_ids) + list(self.amounts):
            if goal_id not in ordered:
                ordered.append(goal_id)
        self.goal_ids = ordered
        self.amounts = {
            goal_id: _non_negative(self.amounts.get(goal_id, ZERO))
            for goal_id in ordered
        }
        return self

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Allocation":
        """Build an allocation where every key in ``mapping`` is included."""
        return cls(goal_ids=list(mapping), amounts=dict(mapping))

    def to_mapping(self) -> dict[str, Decimal]:
        """Flat goal id to amount mapping of the included goals."""
        return {goal_id: self.amounts[goal_id] for goal_id in self.goal_ids}

    def is_included(self, goal_id: str) -> bool:
        return goal_id in self.amounts

    def amount_for(self, goal_id: str) -> Decimal:
        """Monthly amount for a goal, zero when the goal is not in the plan."""
        return self.amounts.get(goal_id, ZERO)

    def set_amount(self, goal_id: str, amount: Any) -> None:
        """Set a goal's monthly amount, adding it to the plan if needed."""
        if goal_id not in self.amounts:
            self.goal_ids.append(goal_id)
        self.amounts[goal_id] = _non_negative(amount)

    def include(self, goal_id: str) -> None:
        """Add a goal to the plan at $0, keeping any existing amount."""
        if goal_id not in self.amounts:
            self.set_amount(goal_id, ZERO)

    def exclude(self, goal_id: str) -> None:
        """Remove a goal from the plan."""
        if goal_id in self.amounts:
            del self.amounts[goal_id]
            self.goal_ids.remove(goal_id)

    def clear(self) -> None:
        self.goal_ids.clear()
        self.amounts.clear()

    @property
    def total_allocated(self) -> Decimal:
        """Sum of every included amount, zero entries included."""
        return sum(self.amounts.values(), ZERO)

    @property
    def allocated_goal_count(self) -> int:
        """Number of goals with a non-zero amount."""
        return sum(1 for amount in self.amounts.values() if amount > 0)

    @property
    def has_allocations(self) -> bool:
        return bool(self.amounts) and self.total_allocated > 0

    def would_over_allocate(self, adding: Any, disposable_income: Any) -> bool:
        """Whether adding ``adding`` per month would exceed disposable income."""
        return self.total_allocated + to_decimal(adding) > to_decimal(disposable_income)

    def remaining_disposable(self, disposable_income: Any) -> Decimal:
        return max(to_decimal(disposable_income) - self.total_allocated, ZERO)


class DecisionStatus(str, Enum):
    """Where a scenario stands between the two partners.

    This is a descriptive tag. Any status may be changed to any other.
    """

    DRAFT = "draft"
    UNDER_REVIEW = "under_review"
    DECIDED = "decided"
    ARCHIVED = "archived"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class Scenario(BaseModel):
    """A saved what-if allocation plan.

    At most one scenario per couple is the active plan; use
    ``activate_scenario`` to switch it.
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    allocations: Allocation = Field(default_factory=Allocation)
    notes: Optional[str] = None
    is_active: bool = False
    decision_status: DecisionStatus = DecisionStatus.DRAFT
    created_at: datetime = Field(default_factory=utc_now)
    last_modified: datetime = Field(default_factory=utc_now)
    created_by: str = Field(min_length=1)

    @property
    def is_editable(self) -> bool:
        return self.decision_status in (DecisionStatus.DRAFT, DecisionStatus.UNDER_REVIEW)

    @property
    def awaiting_partner_review(self) -> bool:
        return self.decision_status == DecisionStatus.UNDER_REVIEW

    def touch(self) -> None:
        self.last_modified = utc_now()

    def set_status(self, status: DecisionStatus) -> None:
        self.decision_status = DecisionStatus(status)
        self.touch()

    def set_allocation(self, goal_id: str, amount: Any) -> None:
        self.allocations.set_amount(goal_id, amount)
        self.touch()

    def remove_allocation(self, goal_id: str) -> None:
        self.allocations.exclude(goal_id)
        self.touch()

    def duplicate(self, new_name: str, by: str) -> "Scenario":
        """Copy this scenario's plan into a new, inactive draft owned by ``by``."""
        return Scenario(
            name=new_name,
            allocations=self.allocations.model_copy(deep=True),
            notes=self.notes,
            is_active=False,
            decision_status=DecisionStatus.DRAFT,
            created_by=by,
        )


def activate_scenario(scenarios: Iterable[Scenario], scenario_id: str) -> Scenario:
    """Make ``scenario_id`` the couple's only active plan.

    Returns:
        The scenario that is now active.

    Raises:
        ValidationError: If no scenario has that id.
    """
    scenarios = list(scenarios)
    target = next((s for s in scenarios if s.id == scenario_id), None)
    if target is None:
        raise ValidationError(
            "Cannot activate unknown scenario",
            field="scenario_id",
            value=scenario_id,
            constraint="Must match an existing scenario",
        )

    for scenario in scenarios:
        should_be_active = scenario is target
        if scenario.is_active != should_be_active:
            scenario.is_active = should_be_active
            scenario.touch()
    return target
