"""
Domain Errors

Error taxonomy raised by the execution and evaluation core.
"""


class CapabilityValidationError(Exception):
    """Base class for all errors raised by this package"""
    pass


class CaseNotFoundError(CapabilityValidationError):
    """The requested case does not exist in the case repository"""

    def __init__(self, case_id: str):
        super().__init__(f"Case {case_id} does not exist")
        self.case_id = case_id


class AdapterNotRegisteredError(CapabilityValidationError):
    """No tool adapter is registered under the requested name"""

    def __init__(self, tool: str):
        super().__init__(f"Tool {tool} is not registered")
        self.tool = tool


class AdapterUnavailableError(CapabilityValidationError):
    """The tool adapter reported itself as unavailable"""

    def __init__(self, tool: str):
        super().__init__(f"Tool {tool} is currently unavailable")
        self.tool = tool


class ExecutionTimeoutError(CapabilityValidationError, TimeoutError):
    """The adapter call exceeded the configured deadline"""

    def __init__(self, tool: str, timeout_seconds: float):
        super().__init__(f"Execution on {tool} timed out after {timeout_seconds}s")
        self.tool = tool
        self.timeout_seconds = timeout_seconds


class AdapterExecutionError(CapabilityValidationError):
    """The adapter call failed for a reason other than the deadline"""

    def __init__(self, tool: str, cause: BaseException):
        super().__init__(f"Execution on {tool} failed: {cause}")
        self.tool = tool
        self.cause = cause


class ExecutionCancelledError(CapabilityValidationError):
    """The execution was cancelled while the adapter call was in flight"""

    def __init__(self, execution_id: str):
        super().__init__(f"Execution {execution_id} was cancelled")
        self.execution_id = execution_id


class ExecutionNotFoundError(CapabilityValidationError):
    """The execution is not tracked as in flight"""

    def __init__(self, execution_id: str):
        super().__init__(f"Execution {execution_id} does not exist or has already finished")
        self.execution_id = execution_id


class InvalidTransitionError(CapabilityValidationError):
    """A lifecycle transition not allowed by the execution state machine"""
    pass


class ScoresAlreadyAttachedError(CapabilityValidationError):
    """Scores may be attached to an execution only once"""
    pass


class StrategyNotFoundError(CapabilityValidationError):
    """No evaluation strategy is registered for the expected-result type"""

    def __init__(self, expected_type: str):
        super().__init__(f"No evaluation strategy registered for type: {expected_type}")
        self.expected_type = expected_type


class NoExecutionsError(CapabilityValidationError):
    """A comparison was requested over an empty set of executions"""
    pass


class CaseFormatError(CapabilityValidationError):
    """A case definition could not be parsed"""
    pass
