"""
Adapter and in-flight execution registries

Both registries are plain objects injected into the execution engine, so several
engines can coexist and be tested in isolation.
"""

from __future__ import annotations

import threading

from capability_validation.domain.entities import ExecutionContext, ExecutionStatus
from capability_validation.domain.errors import ExecutionNotFoundError
from capability_validation.infrastructure.tool_adapters.base import ToolAdapter


class AdapterRegistry:
    """Tool name -> adapter"""

    def __init__(self, adapters: list[ToolAdapter] | None = None):
        self._adapters: dict[str, ToolAdapter] = {}
        for adapter in adapters or []:
            self.register(adapter)

    def register(self, adapter: ToolAdapter) -> None:
        """Register an adapter under its name (replacing any previous one)"""
        self._adapters[adapter.name] = adapter

    def get(self, tool: str) -> ToolAdapter | None:
        return self._adapters.get(tool)

    def names(self) -> list[str]:
        return list(self._adapters)

    def __contains__(self, tool: str) -> bool:
        return tool in self._adapters


class ExecutionRegistry:
    """
    Thread-safe registry of in-flight executions keyed by execution id

    A context leaves the registry when it reaches a terminal status. Whoever removes
    it first (completion or cancellation) decides that status.
    """

    def __init__(self):
        self._contexts: dict[str, ExecutionContext] = {}
        self._lock = threading.Lock()

    def track(self, context: ExecutionContext) -> None:
        with self._lock:
            self._contexts[context.id] = context

    def start(self, execution_id: str) -> None:
        with self._lock:
            context = self._contexts.get(execution_id)
            if context is None:
                raise ExecutionNotFoundError(execution_id)
            context.transition(ExecutionStatus.RUNNING)

    def finish(
        self,
        execution_id: str,
        status: ExecutionStatus,
        error: str | None = None,
    ) -> ExecutionContext | None:
        """
        Move a tracked execution to a terminal status and stop tracking it

        Returns:
            The finished context, or None if it was no longer tracked (cancelled)
        """
        with self._lock:
            context = self._contexts.get(execution_id)
            if context is None:
                return None
            context.transition(status, error)
            del self._contexts[execution_id]
            return context

    def cancel(self, execution_id: str) -> ExecutionContext:
        """
        Cancel a running execution (bookkeeping only)

        Raises:
            ExecutionNotFoundError: If the execution is not currently tracked
            InvalidTransitionError: If the execution has not started running yet
        """
        context = self.finish(execution_id, ExecutionStatus.CANCELLED)
        if context is None:
            raise ExecutionNotFoundError(execution_id)
        return context

    def get(self, execution_id: str) -> ExecutionContext | None:
        with self._lock:
            return self._contexts.get(execution_id)

    def running(self) -> list[ExecutionContext]:
        with self._lock:
            return list(self._contexts.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)
