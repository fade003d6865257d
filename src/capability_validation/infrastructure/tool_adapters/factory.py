"""
Tool adapter factory

Creates the appropriate adapter instance based on the tool name.
"""

from __future__ import annotations

from capability_validation.harness_config import HarnessConfig, load_config
from capability_validation.infrastructure.tool_adapters.base import ToolAdapter
from capability_validation.infrastructure.tool_adapters.claude import ClaudeAdapter
from capability_validation.infrastructure.tool_adapters.openai_compatible import OpenAICompatibleAdapter
from capability_validation.infrastructure.tool_adapters.vertex_ai import VertexAIAdapter

SUPPORTED_TOOLS = ["claude", "gemini", "openai", "lmstudio"]


def create_adapter(tool: str, config: HarnessConfig | None = None) -> ToolAdapter:
    """
    Create the appropriate adapter based on the tool name

    Args:
        tool: Tool name (claude, gemini, openai, lmstudio)
        config: HarnessConfig (loads from env if not provided)

    Returns:
        ToolAdapter: The adapter instance, registered under the tool name

    Raises:
        ValueError: When the tool name is not supported
    """
    if config is None:
        config = load_config()

    adapters = config.adapters
    model = adapters.models.get(tool, "")
    retries = adapters.max_retries
    retry_delay = adapters.retry_delay_seconds

    if tool == "claude":
        return ClaudeAdapter(model, max_retries=retries, retry_delay_seconds=retry_delay)
    elif tool == "gemini":
        return VertexAIAdapter(
            model,
            timeout_seconds=config.execution.timeout_seconds,
            max_retries=retries,
            retry_delay_seconds=retry_delay,
        )
    elif tool == "openai":
        return OpenAICompatibleAdapter(model, max_retries=retries, retry_delay_seconds=retry_delay)
    elif tool == "lmstudio":
        return OpenAICompatibleAdapter(
            model,
            name="lmstudio",
            base_url=adapters.lmstudio_base_url,
            api_key=adapters.lmstudio_api_key,
            max_retries=retries,
            retry_delay_seconds=retry_delay,
        )
    raise ValueError(f"Unknown tool: {tool} (available: {SUPPORTED_TOOLS})")
