"""Savings goals, goal categories and contributions."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from winnie_core.constants import (
    BLENDED_RATE,
    CONSERVATIVE_RATE,
    DONOR_ADVISED_RATE,
    HYSA_RATE,
    NO_GROWTH_RATE,
    STOCK_MARKET_REAL_RETURN,
)
from winnie_core.exceptions import ValidationError
from winnie_core.models.money import Money, Rate, new_id, utc_now


class GoalType(str, Enum):
    """Goal categories.

    Each category carries a default growth assumption used when the goal has
    no custom return rate, plus display metadata.
    """

    HOUSE = "house"
    RETIREMENT = "retirement"
    VACATION = "vacation"
    EMERGENCY_FUND = "emergency_fund"
    BABY_FAMILY = "baby_family"
    DEBT = "debt"
    CAR = "car"
    EDUCATION = "education"
    HOBBY = "hobby"
    FITNESS = "fitness"
    GIFT = "gift"
    HOME_IMPROVEMENT = "home_improvement"
    INVESTMENT = "investment"
    CHARITY = "charity"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        """User-facing name for the category."""
        return _DISPLAY_NAMES[self]

    @property
    def default_annual_return_rate(self) -> Decimal:
        """Default annual growth rate for money saved toward this goal type."""
        return _DEFAULT_RATES[self]

    @property
    def is_long_term_goal(self) -> bool:
        """Whether this goal type is typically five years or longer."""
        return self in _LONG_TERM_TYPES

    @property
    def suggested_vehicle(self) -> str:
        """Where couples usually keep money for this goal type."""
        return _SUGGESTED_VEHICLES[self]


_DISPLAY_NAMES = {
    GoalType.HOUSE: "House",
    GoalType.RETIREMENT: "Retirement",
    GoalType.VACATION: "Vacation",
    GoalType.EMERGENCY_FUND: "Emergency Fund",
    GoalType.BABY_FAMILY: "Baby & Family",
    GoalType.DEBT: "Debt Payoff",
    GoalType.CAR: "Vehicle",
    GoalType.EDUCATION: "Education",
    GoalType.HOBBY: "Hobby & Recreation",
    GoalType.FITNESS: "Health & Fitness",
    GoalType.GIFT: "Gift & Celebration",
    GoalType.HOME_IMPROVEMENT: "Home Improvement",
    GoalType.INVESTMENT: "Investment",
    GoalType.CHARITY: "Charitable Giving",
    GoalType.CUSTOM: "Custom Goal",
}

_DEFAULT_RATES = {
    GoalType.HOUSE: HYSA_RATE,
    GoalType.RETIREMENT: STOCK_MARKET_REAL_RETURN,
    GoalType.VACATION: CONSERVATIVE_RATE,
    GoalType.EMERGENCY_FUND: HYSA_RATE,
    GoalType.BABY_FAMILY: BLENDED_RATE,
    GoalType.DEBT: NO_GROWTH_RATE,
    GoalType.CAR: CONSERVATIVE_RATE,
    GoalType.EDUCATION: BLENDED_RATE,
    GoalType.HOBBY: CONSERVATIVE_RATE,
    GoalType.FITNESS: CONSERVATIVE_RATE,
    GoalType.GIFT: DONOR_ADVISED_RATE,
    GoalType.HOME_IMPROVEMENT: CONSERVATIVE_RATE,
    GoalType.INVESTMENT: STOCK_MARKET_REAL_RETURN,
    GoalType.CHARITY: DONOR_ADVISED_RATE,
    GoalType.CUSTOM: BLENDED_RATE,
}

_LONG_TERM_TYPES = frozenset({
    GoalType.RETIREMENT,
    GoalType.BABY_FAMILY,
    GoalType.EDUCATION,
    GoalType.INVESTMENT,
})

_SUGGESTED_VEHICLES = {
    GoalType.HOUSE: "High-Yield Savings Account",
    GoalType.RETIREMENT: "401(k) / IRA",
    GoalType.VACATION: "Savings Account",
    GoalType.EMERGENCY_FUND: "High-Yield Savings Account",
    GoalType.BABY_FAMILY: "529 Plan / Savings",
    GoalType.DEBT: "Extra Payments",
    GoalType.CAR: "Savings Account",
    GoalType.EDUCATION: "529 Plan / Savings",
    GoalType.HOBBY: "Savings Account",
    GoalType.FITNESS: "Savings Account",
    GoalType.GIFT: "Savings Account",
    GoalType.HOME_IMPROVEMENT: "HELOC / Savings",
    GoalType.INVESTMENT: "Brokerage Account",
    GoalType.CHARITY: "Donor-Advised Fund",
    GoalType.CUSTOM: "Varies by timeline",
}


class Contribution(BaseModel):
    """A single deposit toward a goal made by one partner."""

    id: str = Field(default_factory=new_id)
    goal_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    amount: Money = Field(gt=0, description="Amount contributed")
    date: datetime = Field(
        default_factory=utc_now,
        description="When the money was added",
    )
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class Goal(BaseModel):
    """A named savings target shared by the couple.

    ``current_amount`` may exceed ``target_amount`` once the goal is done.
    ``custom_return_rate`` is an annual rate and overrides the type default.
    Goals with ``is_active`` False are soft-deleted and skipped by the engine.
    """

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "house",
                    "type": "house",
                    "name": "Down Payment",
                    "target_amount": "60000",
                    "current_amount": "15000",
                    "priority": 1,
                }
            ]
        }
    }

    id: str = Field(default_factory=new_id, min_length=1)
    type: GoalType
    name: str = Field(min_length=1)
    target_amount: Money = Field(gt=0)
    current_amount: Money = Field(default=Decimal("0"), ge=0)
    desired_date: Optional[datetime] = Field(
        default=None,
        description="When the couple would like to reach the target",
    )
    custom_return_rate: Optional[Rate] = Field(
        default=None,
        description="Annual return rate override, e.g. 0.06 for 6%",
    )
    priority: int = Field(default=0, description="Lower number = higher priority")
    created_at: datetime = Field(default_factory=utc_now)
    is_active: bool = True
    notes: Optional[str] = None

    @property
    def effective_return_rate(self) -> Decimal:
        """Annual rate used for projections."""
        if self.custom_return_rate is not None:
            return self.custom_return_rate
        return self.type.default_annual_return_rate

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal("0"))

    @property
    def progress_percentage(self) -> float:
        """Progress toward the target, capped at 1.0."""
        return min(float(self.current_amount / self.target_amount), 1.0)

    @property
    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount

    @property
    def has_progress(self) -> bool:
        return self.current_amount > 0

    def record_contribution(self, contribution: Contribution) -> Decimal:
        """Add a contribution to the goal's balance.

        Returns:
            The new current amount.

        Raises:
            ValidationError: If the contribution was made to another goal.
        """
        if contribution.goal_id != self.id:
            raise ValidationError(
                "Contribution belongs to a different goal",
                field="goal_id",
                value=contribution.goal_id,
                constraint=f"Must equal {self.id}",
            )
        self.current_amount = self.current_amount + contribution.amount
        return self.current_amount
