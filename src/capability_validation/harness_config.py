"""
Validation Harness Configuration

Manages loading from environment variables and default values.
"""

import os
from dataclasses import dataclass, field, asdict

from capability_validation.domain.constants import (
    DEFAULT_ADAPTER_MODELS,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT_SECONDS,
    HISTORY_PASS_SCORE,
)


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_float(key: str, default: float) -> float:
    """Convert an environment variable to float"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a number.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


@dataclass
class ExecutionConfig:
    """Execution engine configuration"""
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


@dataclass
class EvaluationConfig:
    """Evaluation and reporting configuration"""
    history_pass_score: float = HISTORY_PASS_SCORE
    weight_tolerance: float = 0.01  # Allowed deviation of the weight sum from 100


@dataclass
class AdapterConfig:
    """Tool adapter configuration"""
    max_retries: int = 3
    retry_delay_seconds: float = 1.0
    models: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ADAPTER_MODELS))
    lmstudio_base_url: str = "http://localhost:1234/v1"
    lmstudio_api_key: str = "lm-studio"


@dataclass
class HarnessConfig:
    """Overall validation harness configuration"""
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    adapters: AdapterConfig = field(default_factory=AdapterConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {"harness_config": asdict(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "HarnessConfig":
        """Create from dictionary (handles presence/absence of harness_config key)"""
        config_data = data.get("harness_config", data)
        execution = ExecutionConfig(**config_data.get("execution", {}))
        evaluation = EvaluationConfig(**config_data.get("evaluation", {}))
        adapters = AdapterConfig(**config_data.get("adapters", {}))
        return cls(execution=execution, evaluation=evaluation, adapters=adapters)


def load_config() -> HarnessConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        HarnessConfig
    """
    execution = ExecutionConfig(
        max_concurrency=_env_int("CAPVAL_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY),
        timeout_seconds=_env_float("CAPVAL_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )
    evaluation = EvaluationConfig(
        history_pass_score=_env_float("CAPVAL_PASS_SCORE", HISTORY_PASS_SCORE),
        weight_tolerance=_env_float("CAPVAL_WEIGHT_TOLERANCE", 0.01),
    )
    models = {
        tool: _env_str(f"CAPVAL_{tool.upper()}_MODEL", model)
        for tool, model in DEFAULT_ADAPTER_MODELS.items()
    }
    adapters = AdapterConfig(
        max_retries=_env_int("CAPVAL_MAX_RETRIES", 3),
        retry_delay_seconds=_env_float("CAPVAL_RETRY_DELAY_SECONDS", 1.0),
        models=models,
        lmstudio_base_url=_env_str("LMSTUDIO_BASE_URL", "http://localhost:1234/v1"),
        lmstudio_api_key=_env_str("LMSTUDIO_API_KEY", "lm-studio"),
    )
    return HarnessConfig(execution=execution, evaluation=evaluation, adapters=adapters)
