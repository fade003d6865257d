"""
OpenAI-compatible tool adapter (OpenAI API or a local LMStudio server)
"""

import os

import openai
from openai import OpenAI

from capability_validation.infrastructure.tool_adapters.base import ToolAdapter, RetryMixin


class OpenAICompatibleAdapter(RetryMixin, ToolAdapter):
    """Adapter for any endpoint speaking the OpenAI chat completions API"""

    def __init__(
        self,
        model_name: str,
        name: str = "openai",
        base_url: str | None = None,
        api_key: str | None = None,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        max_tokens: int = 4096,
    ):
        """
        Args:
            model_name: Default model name (a "lmstudio/" prefix is stripped for the API)
            name: Tool name the adapter is registered under
            base_url: API endpoint (None uses the official OpenAI endpoint)
            api_key: API key (falls back to OPENAI_API_KEY if not specified)
            max_retries: Maximum number of retries (default: 3)
            retry_delay_seconds: Base delay of the exponential backoff
            max_tokens: Maximum number of output tokens
        """
        self.name = name
        self.model_name = model_name.removeprefix("lmstudio/")
        self.base_url = base_url
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self.max_tokens = max_tokens
        self.client = OpenAI(base_url=base_url, api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        return self.client is not None

    def execute(self, prompt: str, config: dict | None = None) -> str:
        """
        Send a prompt and return the response text

        Args:
            prompt: Input prompt
            config: Optional overrides (model, max_tokens, temperature)

        Returns:
            The model's output text

        Raises:
            ValueError: If no API key is configured
            Exception: If the maximum number of retries is exceeded
        """
        if self.client is None:
            raise ValueError(f"No API key configured for {self.name}")
        config = config or {}

        def _call():
            response = self.client.chat.completions.create(
                model=config.get("model", self.model_name),
                messages=[{"role": "user", "content": prompt}],
                temperature=config.get("temperature", 0.0),
                max_tokens=config.get("max_tokens", self.max_tokens),
            )
            return (response.choices[0].message.content or "").strip()

        return self._with_retry(
            _call,
            retryable_exceptions=(
                openai.APIConnectionError,
                openai.RateLimitError,
                openai.APIStatusError,
            ),
        )
