"""
Execution Engine

Runs validation cases on registered tool adapters: single executions under a
deadline, batch runs under a concurrency bound, and bookkeeping of in-flight
executions.
"""

from __future__ import annotations

import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from datetime import datetime
from typing import Callable

from capability_validation.domain.constants import DEFAULT_MAX_CONCURRENCY, DEFAULT_TIMEOUT_SECONDS
from capability_validation.domain.entities import (
    BatchFailure,
    BatchResult,
    Execution,
    ExecutionContext,
    ExecutionParams,
    ExecutionStatus,
)
from capability_validation.domain.errors import (
    AdapterExecutionError,
    AdapterNotRegisteredError,
    AdapterUnavailableError,
    CaseNotFoundError,
    ExecutionCancelledError,
    ExecutionTimeoutError,
)
from capability_validation.harness_config import HarnessConfig
from capability_validation.infrastructure.registries import AdapterRegistry, ExecutionRegistry
from capability_validation.infrastructure.repositories import CaseRepository, ExecutionStore
from capability_validation.infrastructure.tool_adapters.base import ToolAdapter
from capability_validation.prompt_builder import build_prompt

logger = logging.getLogger(__name__)


def _new_execution_id() -> str:
    return f"exec_{uuid.uuid4().hex[:12]}"


class ExecutionEngine:
    """
    Execution engine

    Each execution moves Pending -> Running -> Completed | Failed | Timeout, or
    Running -> Cancelled through stop_execution(). Cancellation and timeouts only
    stop the engine from waiting: an adapter call already dispatched keeps running
    in its own thread until the adapter returns.
    """

    def __init__(
        self,
        case_repository: CaseRepository,
        adapter_registry: AdapterRegistry | None = None,
        execution_registry: ExecutionRegistry | None = None,
        execution_store: ExecutionStore | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        default_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        id_factory: Callable[[], str] = _new_execution_id,
    ):
        """
        Args:
            case_repository: Source of cases
            adapter_registry: Registered tool adapters (a new empty registry if omitted)
            execution_registry: In-flight execution registry (a new one if omitted)
            execution_store: Where completed executions are saved (optional)
            max_concurrency: Default bound on in-flight executions in a batch
            default_timeout_seconds: Default per-execution deadline
            id_factory: Generates execution ids
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.case_repository = case_repository
        self.adapters = adapter_registry if adapter_registry is not None else AdapterRegistry()
        self.executions = execution_registry if execution_registry is not None else ExecutionRegistry()
        self.execution_store = execution_store
        self.max_concurrency = max_concurrency
        self.default_timeout_seconds = default_timeout_seconds
        self._id_factory = id_factory

    @classmethod
    def from_config(
        cls,
        config: HarnessConfig,
        case_repository: CaseRepository,
        execution_store: ExecutionStore | None = None,
    ) -> "ExecutionEngine":
        return cls(
            case_repository,
            execution_store=execution_store,
            max_concurrency=config.execution.max_concurrency,
            default_timeout_seconds=config.execution.timeout_seconds,
        )

    # -- Adapter registry --

    def register_adapter(self, adapter: ToolAdapter) -> None:
        self.adapters.register(adapter)

    def get_available_tools(self) -> list[str]:
        """Names of all registered tools"""
        return self.adapters.names()

    def is_tool_available(self, tool: str) -> bool:
        adapter = self.adapters.get(tool)
        if adapter is None:
            return False
        return adapter.is_available()

    def supports_cancellation(self, tool: str) -> bool:
        """
        Whether stopping an execution on this tool also aborts the adapter call

        Raises:
            AdapterNotRegisteredError: If the tool is not registered
        """
        adapter = self.adapters.get(tool)
        if adapter is None:
            raise AdapterNotRegisteredError(tool)
        return adapter.supports_cancellation

    # -- Single execution --

    def execute_case(
        self,
        case_id: str,
        tool: str,
        model: str | None = None,
        config: dict | None = None,
        timeout_seconds: float | None = None,
    ) -> Execution:
        """
        Execute a single case on a tool.

        Args:
            case_id: Case ID
            tool: Registered tool name
            model: Model name (recorded, and offered to the adapter as config["model"])
            config: Adapter configuration
            timeout_seconds: Deadline (default: the engine's default timeout)

        Returns:
            Execution: Completed, unscored execution

        Raises:
            CaseNotFoundError: If the case does not exist
            AdapterNotRegisteredError: If no adapter is registered for the tool
            AdapterUnavailableError: If the adapter reports itself unavailable
            ExecutionTimeoutError: If the adapter does not answer before the deadline
            AdapterExecutionError: If the adapter call fails
            ExecutionCancelledError: If the execution was stopped while in flight
        """
        case = self.case_repository.get(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)

        adapter = self.adapters.get(tool)
        if adapter is None:
            raise AdapterNotRegisteredError(tool)

        if not adapter.is_available():
            raise AdapterUnavailableError(tool)

        timeout = timeout_seconds if timeout_seconds is not None else self.default_timeout_seconds
        params = ExecutionParams(
            case_id=case_id, tool=tool, model=model, config=config, timeout_seconds=timeout,
        )
        prompt = build_prompt(case)
        call_config = dict(config or {})
        if model is not None:
            call_config.setdefault("model", model)

        context = ExecutionContext(id=self._id_factory(), params=params)
        self.executions.track(context)
        self.executions.start(context.id)

        started = time.monotonic()
        try:
            output = self._call_with_timeout(adapter, prompt, call_config or None, timeout)
        except ExecutionTimeoutError as e:
            self._settle(context, ExecutionStatus.TIMEOUT, str(e))
            raise
        except Exception as e:
            self._settle(context, ExecutionStatus.FAILED, str(e))
            raise AdapterExecutionError(tool, e) from e

        duration_ms = int((time.monotonic() - started) * 1000)
        self._settle(context, ExecutionStatus.COMPLETED)

        execution = Execution(
            id=context.id,
            case_id=case_id,
            tool=tool,
            model=model,
            config=config,
            output=output,
            executed_at=context.start_time or datetime.now(),
            duration_ms=duration_ms,
            status=ExecutionStatus.COMPLETED,
        )
        if self.execution_store is not None:
            self.execution_store.save(execution)
        return execution

    def _settle(self, context: ExecutionContext, status: ExecutionStatus, error: str | None = None) -> None:
        """Record the terminal status, unless the execution was cancelled meanwhile"""
        if self.executions.finish(context.id, status, error) is None:
            raise ExecutionCancelledError(context.id)

    @staticmethod
    def _call_with_timeout(
        adapter: ToolAdapter,
        prompt: str,
        config: dict | None,
        timeout_seconds: float,
    ) -> str:
        """Run the adapter call in its own thread and wait for it up to the deadline."""
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"capval-{adapter.name}")
        try:
            future = executor.submit(adapter.execute, prompt, config)
            try:
                return future.result(timeout=timeout_seconds)
            except FuturesTimeoutError:
                # Finished at the deadline, or the adapter raised TimeoutError itself:
                # hand back its own output or exception
                if future.done():
                    return future.result()
                raise ExecutionTimeoutError(adapter.name, timeout_seconds) from None
        finally:
            executor.shutdown(wait=False)

    # -- Batch execution --

    def batch_execute(
        self,
        case_ids: list[str],
        tools: list[str],
        config: dict | None = None,
        max_concurrency: int | None = None,
        timeout_seconds: float | None = None,
    ) -> BatchResult:
        """
        Execute every (case, tool) pair with a bounded number in flight.

        A failing pair never aborts the batch: it is logged and reported in
        BatchResult.failures while the remaining pairs keep running.

        Args:
            case_ids: Case IDs
            tools: Tool names
            config: Adapter configuration shared by all executions
            max_concurrency: Bound on in-flight executions (default: engine setting)
            timeout_seconds: Per-execution deadline (default: engine setting)

        Returns:
            BatchResult: Successful executions (in pair order) and failures
        """
        workers = max_concurrency if max_concurrency is not None else self.max_concurrency
        if workers < 1:
            raise ValueError("max_concurrency must be at least 1")

        tasks = [
            ExecutionParams(case_id=case_id, tool=tool, config=config, timeout_seconds=timeout_seconds)
            for case_id in case_ids
            for tool in tools
        ]
        logger.info("Starting batch: %d executions, max concurrency %d", len(tasks), workers)

        result = BatchResult()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="capval-batch") as executor:
            futures = [
                (
                    executor.submit(
                        self.execute_case,
                        task.case_id,
                        task.tool,
                        config=task.config,
                        timeout_seconds=task.timeout_seconds,
                    ),
                    task,
                )
                for task in tasks
            ]
            for future, task in futures:
                try:
                    result.executions.append(future.result())
                except Exception as e:
                    result.failures.append(BatchFailure(case_id=task.case_id, tool=task.tool, error=str(e)))

        for failure in result.failures:
            logger.warning("Execution failed: case=%s tool=%s: %s", failure.case_id, failure.tool, failure.error)
        logger.info(
            "Batch finished: %d succeeded, %d failed", len(result.executions), len(result.failures),
        )
        return result

    # -- In-flight bookkeeping --

    def stop_execution(self, execution_id: str) -> None:
        """
        Mark a running execution as cancelled and stop tracking it.

        The adapter call already dispatched is not aborted; its result is discarded.

        Raises:
            ExecutionNotFoundError: If the execution is not currently tracked
        """
        self.executions.cancel(execution_id)
        logger.info("Execution %s cancelled", execution_id)

    def get_running_executions(self) -> list[ExecutionContext]:
        return self.executions.running()
