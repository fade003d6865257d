"""
Domain Layer

Defines constants, entities, value objects, errors and report structures that form
the core of the business logic. Has no dependencies on external libraries.
"""

from capability_validation.domain.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT_SECONDS,
    PASS_THRESHOLDS,
    SCORE_DIMENSIONS,
)
from capability_validation.domain.entities import (
    BatchFailure,
    BatchResult,
    Case,
    Execution,
    ExecutionContext,
    ExecutionParams,
    ExecutionStatus,
    ExpectedResult,
    ExpectedType,
    HealthCheckResult,
    Scenario,
    ScoringWeights,
)
from capability_validation.domain.errors import (
    AdapterExecutionError,
    AdapterNotRegisteredError,
    AdapterUnavailableError,
    CapabilityValidationError,
    CaseFormatError,
    CaseNotFoundError,
    ExecutionCancelledError,
    ExecutionNotFoundError,
    ExecutionTimeoutError,
    InvalidTransitionError,
    NoExecutionsError,
    ScoresAlreadyAttachedError,
    StrategyNotFoundError,
)
from capability_validation.domain.value_objects import EvaluationAnalysis, Scores

__all__ = [
    # constants
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_TIMEOUT_SECONDS",
    "PASS_THRESHOLDS",
    "SCORE_DIMENSIONS",
    # entities
    "BatchFailure",
    "BatchResult",
    "Case",
    "Execution",
    "ExecutionContext",
    "ExecutionParams",
    "ExecutionStatus",
    "ExpectedResult",
    "ExpectedType",
    "HealthCheckResult",
    "Scenario",
    "ScoringWeights",
    # errors
    "AdapterExecutionError",
    "AdapterNotRegisteredError",
    "AdapterUnavailableError",
    "CapabilityValidationError",
    "CaseFormatError",
    "CaseNotFoundError",
    "ExecutionCancelledError",
    "ExecutionNotFoundError",
    "ExecutionTimeoutError",
    "InvalidTransitionError",
    "NoExecutionsError",
    "ScoresAlreadyAttachedError",
    "StrategyNotFoundError",
    # value objects
    "EvaluationAnalysis",
    "Scores",
]
