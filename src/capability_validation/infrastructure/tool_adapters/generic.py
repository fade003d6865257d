"""
Generic tool adapter

Wraps plain callables so any existing integration can satisfy the adapter contract.
"""

from typing import Callable

from capability_validation.infrastructure.tool_adapters.base import ToolAdapter


class GenericToolAdapter(ToolAdapter):
    """Adapter delegating to an execute function and an optional availability check"""

    def __init__(
        self,
        name: str,
        execute_fn: Callable[[str, dict | None], str],
        available_fn: Callable[[], bool] | None = None,
    ):
        self.name = name
        self._execute_fn = execute_fn
        self._available_fn = available_fn

    def execute(self, prompt: str, config: dict | None = None) -> str:
        return self._execute_fn(prompt, config)

    def is_available(self) -> bool:
        if self._available_fn is None:
            return True
        return self._available_fn()
