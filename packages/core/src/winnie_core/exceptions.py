"""Custom exceptions for Winnie Core.

The projection engine itself never raises for expected outcomes: an
unreachable goal or an impossible required-contribution request is reported
through return values. These exceptions cover misuse of the domain helpers
and invalid configuration. All of them inherit from WinnieError.

Example:
    try:
        goal.record_contribution(contribution)
    except ValidationError as e:
        logger.warning("contribution_rejected", **e.details)
    except WinnieError as e:
        logger.error("operation_failed", error=str(e))
"""

from typing import Any, Optional


class WinnieError(Exception):
    """Base exception for all Winnie Core errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the caller can fix the problem and retry.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(WinnieError):
    """Error raised when a domain operation receives invalid input.

    Examples are recording a contribution against the wrong goal or
    activating a scenario that does not exist.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
        constraint: The rule that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Contribution belongs to a different goal",
        ...     field="goal_id",
        ...     value="goal-2",
        ...     constraint="Must equal goal-1",
        ... )
        ValidationError: Contribution belongs to a different goal
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since the caller can correct
                the input and try again.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(WinnieError):
    """Error raised when configuration is invalid.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid projection horizon",
        ...     config_key="WINNIE_ENGINE_MAX_PROJECTION_MONTHS",
        ...     expected="Integer between 1 and 1200",
        ...     actual="0",
        ... )
        ConfigurationError: Invalid projection horizon
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "WinnieError",
    "ValidationError",
    "ConfigurationError",
]
