"""Decimal money types and id/timestamp defaults shared by the Winnie models."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any
from uuid import uuid4

from pydantic import BeforeValidator


def to_decimal(value: Any) -> Any:
    """Coerce strings, ints and floats to Decimal.

    Floats go through str() so 0.07 becomes Decimal("0.07") rather than its
    binary expansion. Anything else is passed through for pydantic to reject.
    """
    if isinstance(value, bool):
        return value
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        if isinstance(value, (int, str)):
            return Decimal(value.strip() if isinstance(value, str) else value)
    except InvalidOperation:
        raise ValueError(f"Not a decimal amount: {value!r}")
    return value


def utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Default id for goals, contributions and scenarios."""
    return str(uuid4())


Money = Annotated[Decimal, BeforeValidator(to_decimal)]
Rate = Annotated[Decimal, BeforeValidator(to_decimal)]
