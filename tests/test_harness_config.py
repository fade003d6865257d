"""
harness_config.py tests
"""

import pytest

from capability_validation.harness_config import (
    AdapterConfig,
    EvaluationConfig,
    ExecutionConfig,
    HarnessConfig,
    load_config,
)

_ENV_KEYS = [
    "CAPVAL_MAX_CONCURRENCY",
    "CAPVAL_TIMEOUT_SECONDS",
    "CAPVAL_PASS_SCORE",
    "CAPVAL_WEIGHT_TOLERANCE",
    "CAPVAL_MAX_RETRIES",
    "CAPVAL_RETRY_DELAY_SECONDS",
    "CAPVAL_CLAUDE_MODEL",
    "CAPVAL_GEMINI_MODEL",
    "CAPVAL_OPENAI_MODEL",
    "CAPVAL_LMSTUDIO_MODEL",
    "LMSTUDIO_BASE_URL",
    "LMSTUDIO_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestExecutionConfig:
    """ExecutionConfig dataclass tests"""

    def test_defaults(self):
        config = ExecutionConfig()
        assert config.max_concurrency == 3
        assert config.timeout_seconds == 300.0

    def test_rejects_zero_concurrency(self):
        with pytest.raises(ValueError, match="max_concurrency"):
            ExecutionConfig(max_concurrency=0)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError, match="timeout_seconds"):
            ExecutionConfig(timeout_seconds=0)


class TestEvaluationConfig:
    """EvaluationConfig dataclass tests"""

    def test_defaults(self):
        config = EvaluationConfig()
        assert config.history_pass_score == 60
        assert config.weight_tolerance == 0.01


class TestAdapterConfig:
    """AdapterConfig dataclass tests"""

    def test_defaults(self):
        config = AdapterConfig()
        assert config.max_retries == 3
        assert config.models["claude"] == "claude-haiku-4-5-20251001"
        assert config.lmstudio_base_url == "http://localhost:1234/v1"

    def test_models_not_shared(self):
        first, second = AdapterConfig(), AdapterConfig()
        first.models["claude"] = "other"
        assert second.models["claude"] == "claude-haiku-4-5-20251001"


class TestHarnessConfig:
    """HarnessConfig serialization tests"""

    def test_dict_roundtrip(self):
        config = HarnessConfig(execution=ExecutionConfig(max_concurrency=5, timeout_seconds=10))
        restored = HarnessConfig.from_dict(config.to_dict())
        assert restored == config

    def test_from_dict_without_wrapper_key(self):
        config = HarnessConfig.from_dict({"execution": {"max_concurrency": 7}})
        assert config.execution.max_concurrency == 7
        assert config.execution.timeout_seconds == 300.0

    def test_from_empty_dict(self):
        assert HarnessConfig.from_dict({}) == HarnessConfig()


class TestLoadConfig:
    """load_config() environment tests"""

    def test_defaults(self, clean_env):
        assert load_config() == HarnessConfig()

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("CAPVAL_MAX_CONCURRENCY", "8")
        clean_env.setenv("CAPVAL_TIMEOUT_SECONDS", "12.5")
        clean_env.setenv("CAPVAL_PASS_SCORE", "70")
        clean_env.setenv("CAPVAL_GEMINI_MODEL", "gemini-2.5-pro")
        clean_env.setenv("LMSTUDIO_BASE_URL", "http://host.docker.internal:1234/v1")

        config = load_config()

        assert config.execution.max_concurrency == 8
        assert config.execution.timeout_seconds == 12.5
        assert config.evaluation.history_pass_score == 70.0
        assert config.adapters.models["gemini"] == "gemini-2.5-pro"
        assert config.adapters.lmstudio_base_url == "http://host.docker.internal:1234/v1"

    def test_invalid_integer(self, clean_env):
        clean_env.setenv("CAPVAL_MAX_CONCURRENCY", "many")
        with pytest.raises(ValueError, match="CAPVAL_MAX_CONCURRENCY"):
            load_config()

    def test_invalid_number(self, clean_env):
        clean_env.setenv("CAPVAL_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValueError, match="CAPVAL_TIMEOUT_SECONDS"):
            load_config()
