"""Winnie Core - Goal projections and what-if scenarios for couples."""

__version__ = "0.1.0"

from .config import EngineConfig, WinnieConfig, load_config
from .engine import FinancialEngine
from .exceptions import ConfigurationError, ValidationError, WinnieError
from .log_config import configure_logging
from .models import (
    Allocation,
    Contribution,
    DecisionStatus,
    EngineInput,
    EngineOutput,
    EngineWarning,
    FinancialProfile,
    Goal,
    GoalDifference,
    GoalProjection,
    GoalTrackingStatus,
    GoalType,
    Scenario,
    TrackingState,
    WarningKind,
    activate_scenario,
)
from .tracking import compare_goals, tracking_status

__all__ = [
    # Engine
    "FinancialEngine",
    "tracking_status",
    "compare_goals",
    # Models
    "Allocation",
    "Contribution",
    "DecisionStatus",
    "EngineInput",
    "EngineOutput",
    "EngineWarning",
    "FinancialProfile",
    "Goal",
    "GoalDifference",
    "GoalProjection",
    "GoalTrackingStatus",
    "GoalType",
    "Scenario",
    "TrackingState",
    "WarningKind",
    "activate_scenario",
    # Configuration
    "EngineConfig",
    "WinnieConfig",
    "load_config",
    "configure_logging",
    # Errors
    "WinnieError",
    "ValidationError",
    "ConfigurationError",
]
