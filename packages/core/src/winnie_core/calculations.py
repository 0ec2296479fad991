"""Pure Decimal formulas behind goal projections.

Every function here is stateless and works on Decimal amounts so repeated
compounding never accumulates binary floating point error.

Rate convention: rates passed in are annual. The monthly rate is always
``annual_rate / 12``, compounded once per month, with contributions added at
the end of each month.
"""

from datetime import datetime, timezone
from decimal import ROUND_CEILING, Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from .constants import (
    CENT,
    COMPOUNDING_PERIODS_PER_YEAR,
    DEFAULT_INFLATION_RATE,
    MAX_PROJECTION_MONTHS,
)

ZERO = Decimal("0")
ONE = Decimal("1")


def ensure_aware(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """Convert an annual rate to the monthly rate used for compounding."""
    return annual_rate / COMPOUNDING_PERIODS_PER_YEAR


def future_value(
    present_value: Decimal,
    monthly_contribution: Decimal,
    annual_rate: Decimal,
    months: int,
) -> Decimal:
    """Balance after ``months`` of growth and end-of-month contributions.

    FV = PV * (1 + r)^n + PMT * ((1 + r)^n - 1) / r, or PV + PMT * n when
    the rate is zero.
    """
    if months <= 0:
        return present_value

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return present_value + monthly_contribution * months

    growth = (ONE + rate) ** months
    return present_value * growth + monthly_contribution * ((growth - ONE) / rate)


def months_to_reach_target(
    target_amount: Decimal,
    present_value: Decimal,
    monthly_contribution: Decimal,
    annual_rate: Decimal,
    max_months: int = MAX_PROJECTION_MONTHS,
) -> Optional[int]:
    """Smallest whole number of months after which the balance meets the target.

    Returns:
        0 if the target is already met, the month count otherwise, or None
        when the target is not reached within ``max_months``.
    """
    if present_value >= target_amount:
        return 0

    contribution = max(monthly_contribution, ZERO)
    if contribution <= 0 and annual_rate <= 0:
        return None

    rate = monthly_rate(annual_rate)
    if rate == 0:
        months = int(((target_amount - present_value) / contribution).to_integral_value(
            rounding=ROUND_CEILING
        ))
        return months if months <= max_months else None

    balance = present_value
    months = 0
    while balance < target_amount and months < max_months:
        balance += balance * rate
        balance += contribution
        months += 1

    return months if balance >= target_amount else None


def add_months(start: datetime, months: int) -> datetime:
    """Calendar month arithmetic; Jan 31 plus one month is Feb 28/29."""
    return start + relativedelta(months=months)


def whole_months_between(start: datetime, end: datetime) -> int:
    """Completed calendar months from ``start`` to ``end``.

    Negative when ``end`` is before ``start``.
    """
    delta = relativedelta(ensure_aware(end), ensure_aware(start))
    return delta.years * 12 + delta.months


def required_monthly_contribution(
    target_amount: Decimal,
    present_value: Decimal,
    by_date: datetime,
    annual_rate: Decimal,
    now: datetime,
    max_months: int = MAX_PROJECTION_MONTHS,
) -> Optional[Decimal]:
    """Monthly amount needed to reach ``target_amount`` by ``by_date``.

    The answer is rounded up to the cent and never finishes later than
    ``by_date`` when fed back through ``months_to_reach_target`` with the
    same ``max_months``. Deadlines past the horizon are solved over the
    horizon, so the goal completes within it and before ``by_date``.

    Returns:
        None when ``by_date`` is before ``now``, or when no whole month
        remains and the goal is not yet complete. Zero when the goal is
        already complete or will get there on growth alone.
    """
    by_date = ensure_aware(by_date)
    now = ensure_aware(now)
    if by_date < now:
        return None

    if present_value >= target_amount:
        return ZERO

    months = min(whole_months_between(now, by_date), max_months)
    if months <= 0:
        return None

    rate = monthly_rate(annual_rate)
    if rate == 0:
        contribution = (target_amount - present_value) / months
    else:
        growth = (ONE + rate) ** months
        contribution = (target_amount - present_value * growth) / ((growth - ONE) / rate)

    if contribution < 0:
        contribution = ZERO
    contribution = contribution.quantize(CENT, rounding=ROUND_CEILING)

    while months_to_reach_target(
        target_amount, present_value, contribution, annual_rate, max_months=months
    ) is None:
        contribution += CENT

    return contribution


def inflation_adjusted(
    amount: Decimal,
    years: int,
    inflation_rate: Decimal = DEFAULT_INFLATION_RATE,
) -> Decimal:
    """Express a future nominal amount in today's dollars."""
    if years <= 0 or inflation_rate <= 0:
        return amount
    return amount / (ONE + inflation_rate) ** years


def horizon_text(months: int) -> str:
    """Projection horizon as "50 years", "1 year" or "18 months"."""
    years, remaining = divmod(months, 12)
    if years == 0 or remaining:
        return f"{months} month{'' if months == 1 else 's'}"
    return f"{years} year{'' if years == 1 else 's'}"


def time_to_completion_text(
    months: Optional[int],
    max_months: int = MAX_PROJECTION_MONTHS,
) -> str:
    """Short label such as "Complete!", "7 months", "2 years" or "3y 4m".

    Unreachable goals (``months`` of None) read as "50+ years" for the
    default horizon, or the equivalent for ``max_months``.
    """
    if months is None:
        count, unit = horizon_text(max_months).split(" ")
        return f"{count}+ {unit}"
    if months == 0:
        return "Complete!"

    years, remaining = divmod(months, 12)
    if years == 0:
        return f"{remaining} month{'' if remaining == 1 else 's'}"
    if remaining == 0:
        return f"{years} year{'' if years == 1 else 's'}"
    return f"{years}y {remaining}m"
