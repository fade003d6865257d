"""
Use cases: execution, comparison and health checks
"""

from capability_validation.use_cases.comparison import ComparisonAnalyzer
from capability_validation.use_cases.execution import ExecutionEngine
from capability_validation.use_cases.health_check import health_check_tool, run_health_check

__all__ = [
    "ComparisonAnalyzer",
    "ExecutionEngine",
    "health_check_tool",
    "run_health_check",
]
