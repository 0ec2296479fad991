"""The couple's shared financial baseline."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from winnie_core.constants import DEFAULT_NEEDS_SHARE, DEFAULT_WANTS_SHARE
from winnie_core.models.money import Money, to_decimal, utc_now


class FinancialProfile(BaseModel):
    """Income, spending and savings that every projection starts from.

    Profiles are immutable snapshots. Use ``with_updates`` to produce the
    next snapshot after the couple edits their numbers.

    Attributes:
        monthly_income: Combined monthly take-home income
        monthly_needs: Fixed monthly expenses (rent, loans, utilities)
        monthly_wants: Discretionary monthly spending
        current_savings: Liquid savings balance (the "nest egg")
        retirement_balance: 401(k)/IRA balance, if known
        direct_savings_pool: Monthly savings entered directly; when positive
            it replaces the income-minus-expenses calculation
        last_updated: When the profile was last edited
    """

    model_config = {"frozen": True}

    monthly_income: Money = Field(default=Decimal("0"))
    monthly_needs: Money = Field(default=Decimal("0"))
    monthly_wants: Money = Field(default=Decimal("0"))
    current_savings: Money = Field(default=Decimal("0"))
    retirement_balance: Optional[Money] = None
    direct_savings_pool: Optional[Money] = None
    last_updated: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_expenses(
        cls,
        monthly_income: Any,
        monthly_expenses: Any,
        current_savings: Any = Decimal("0"),
        retirement_balance: Any = None,
        **kwargs: Any,
    ) -> "FinancialProfile":
        """Build a profile from a single expenses figure.

        The expenses are split 70/30 into needs and wants.
        """
        expenses = to_decimal(monthly_expenses)
        return cls(
            monthly_income=monthly_income,
            monthly_needs=expenses * DEFAULT_NEEDS_SHARE,
            monthly_wants=expenses * DEFAULT_WANTS_SHARE,
            current_savings=current_savings,
            retirement_balance=retirement_balance,
            **kwargs,
        )

    def with_updates(self, **changes: Any) -> "FinancialProfile":
        """Return a new snapshot with ``changes`` applied and a fresh timestamp."""
        changes.setdefault("last_updated", utc_now())
        data = self.model_dump()
        data.update(changes)
        return FinancialProfile(**data)

    @property
    def monthly_expenses(self) -> Decimal:
        """Needs plus wants."""
        return self.monthly_needs + self.monthly_wants

    @property
    def savings_pool(self) -> Decimal:
        """Money available for goals each month."""
        if self.direct_savings_pool is not None and self.direct_savings_pool > 0:
            return self.direct_savings_pool
        return max(self.monthly_income - self.monthly_expenses, Decimal("0"))

    @property
    def monthly_disposable(self) -> Decimal:
        return self.savings_pool

    @property
    def is_valid(self) -> bool:
        return (
            self.monthly_income >= 0
            and self.monthly_needs >= 0
            and self.monthly_wants >= 0
            and self.current_savings >= 0
        )

    @property
    def has_disposable_income(self) -> bool:
        return self.savings_pool > 0
