"""
Domain Entities

Defines the primary data structures used in the execution and evaluation process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from capability_validation.domain.errors import (
    InvalidTransitionError,
    ScoresAlreadyAttachedError,
)
from capability_validation.domain.value_objects import Scores


class ExpectedType(str, Enum):
    """Expected-result variant of a case."""
    EXACT = "exact"
    PATTERN = "pattern"
    CRITERIA = "criteria"
    CREATIVE = "creative"


class ExecutionStatus(str, Enum):
    """Lifecycle status of an execution."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


# Allowed lifecycle transitions; statuses without an entry are terminal
_TRANSITIONS: dict[ExecutionStatus, set[ExecutionStatus]] = {
    ExecutionStatus.PENDING: {ExecutionStatus.RUNNING},
    ExecutionStatus.RUNNING: {
        ExecutionStatus.COMPLETED,
        ExecutionStatus.FAILED,
        ExecutionStatus.TIMEOUT,
        ExecutionStatus.CANCELLED,
    },
}

TERMINAL_STATUSES = frozenset({
    ExecutionStatus.COMPLETED,
    ExecutionStatus.FAILED,
    ExecutionStatus.TIMEOUT,
    ExecutionStatus.CANCELLED,
})


@dataclass
class Scenario:
    """Scenario presented to the tool"""
    task: str
    context: str = ""
    input: str = ""
    constraints: list[str] = field(default_factory=list)


@dataclass
class ExpectedResult:
    """Expected-result definition, tagged by type"""
    type: ExpectedType | str
    content: str | None = None        # exact
    pattern: str | None = None        # pattern
    criteria: list[str] | None = None  # criteria
    examples: list[str] | None = None  # creative (optional example answers)


@dataclass
class ScoringWeights:
    """Weight per scoring dimension (nominally summing to 100)"""
    accuracy: float = 25
    completeness: float = 25
    creativity: float = 25
    efficiency: float = 25

    def __post_init__(self):
        for name in ("accuracy", "completeness", "creativity", "efficiency"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} weight must be non-negative")

    @property
    def total(self) -> float:
        return self.accuracy + self.completeness + self.creativity + self.efficiency


@dataclass
class Case:
    """A human-authored validation case"""
    id: str
    scenario: Scenario
    expected: ExpectedResult
    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    title: str = ""
    description: str = ""
    category: str = "custom"
    difficulty: str = "intermediate"
    tags: list[str] = field(default_factory=list)
    version: str = "1.0.0"


@dataclass
class Execution:
    """One run of a case against one tool/model"""
    id: str
    case_id: str
    tool: str
    output: str
    executed_at: datetime
    duration_ms: int
    model: str | None = None
    config: dict | None = None
    scores: Scores = field(default_factory=Scores)
    status: ExecutionStatus = ExecutionStatus.COMPLETED
    scored: bool = False

    def attach_scores(self, scores: Scores) -> None:
        """
        Attach evaluation scores

        Raises:
            ScoresAlreadyAttachedError: If scores were already attached
        """
        if self.scored:
            raise ScoresAlreadyAttachedError(f"Execution {self.id} has already been scored")
        self.scores = scores
        self.scored = True


@dataclass
class ExecutionParams:
    """Parameters of a single execution"""
    case_id: str
    tool: str
    model: str | None = None
    config: dict | None = None
    timeout_seconds: float | None = None


@dataclass
class ExecutionContext:
    """In-flight bookkeeping for an execution"""
    id: str
    params: ExecutionParams
    status: ExecutionStatus = ExecutionStatus.PENDING
    start_time: datetime | None = None
    end_time: datetime | None = None
    error: str | None = None

    def transition(self, new_status: ExecutionStatus, error: str | None = None) -> None:
        """
        Move to a new lifecycle status

        Raises:
            InvalidTransitionError: If the state machine does not allow the move
        """
        allowed = _TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidTransitionError(
                f"Execution {self.id}: cannot move from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
        if new_status == ExecutionStatus.RUNNING:
            self.start_time = datetime.now()
        elif new_status in TERMINAL_STATUSES:
            self.end_time = datetime.now()
            self.error = error


@dataclass
class BatchFailure:
    """A failed task within a batch run"""
    case_id: str
    tool: str
    error: str


@dataclass
class BatchResult:
    """Outcome of a batch run: successes and failures reported separately"""
    executions: list[Execution] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)


@dataclass
class HealthCheckResult:
    """Health check result"""
    tool: str
    success: bool
    latency_ms: int | None
    error: str | None
