"""
Health Check

Checks that tool adapters are configured and, optionally, that they answer a probe prompt.
"""

import time

from capability_validation.domain.entities import HealthCheckResult
from capability_validation.infrastructure.tool_adapters.base import ToolAdapter


HEALTH_CHECK_PROMPT = "Reply with only 'OK' if you can read this message."


def health_check_tool(adapter: ToolAdapter, probe: bool = True) -> HealthCheckResult:
    """
    Execute a health check for a single tool.

    Args:
        adapter: Adapter to check
        probe: Also send a short probe prompt and time the answer

    Returns:
        HealthCheckResult: Health check result
    """
    if not adapter.is_available():
        return HealthCheckResult(
            tool=adapter.name,
            success=False,
            latency_ms=None,
            error="Adapter is not configured (missing credentials or project)",
        )
    if not probe:
        return HealthCheckResult(tool=adapter.name, success=True, latency_ms=None, error=None)

    started = time.monotonic()
    try:
        adapter.execute(HEALTH_CHECK_PROMPT)
    except Exception as e:
        return HealthCheckResult(tool=adapter.name, success=False, latency_ms=None, error=str(e))
    return HealthCheckResult(
        tool=adapter.name,
        success=True,
        latency_ms=int((time.monotonic() - started) * 1000),
        error=None,
    )


def run_health_check(
    adapters: list[ToolAdapter],
    probe: bool = True,
) -> tuple[list[str], list[HealthCheckResult]]:
    """
    Execute health checks for all tools.

    Args:
        adapters: Adapters to check
        probe: Also send a probe prompt to each configured adapter

    Returns:
        tuple: (list of available tool names, list of all check results)
    """
    print("=== Tool Health Check ===\n")
    results = []
    available_tools = []

    for adapter in adapters:
        print(f"  {adapter.name}... ", end="", flush=True)
        result = health_check_tool(adapter, probe=probe)
        results.append(result)

        if result.success:
            print(f"OK ({result.latency_ms}ms)" if result.latency_ms is not None else "OK")
            available_tools.append(adapter.name)
        else:
            # Display only the first 100 characters of the error message
            error_short = result.error[:100] if result.error else "Unknown error"
            print("FAILED")
            print(f"    Error: {error_short}")

    print()
    return available_tools, results
