"""
Anthropic Claude tool adapter
"""

import os

from anthropic import Anthropic, APIConnectionError, RateLimitError, APIStatusError

from capability_validation.infrastructure.tool_adapters.base import ToolAdapter, RetryMixin


class ClaudeAdapter(RetryMixin, ToolAdapter):
    """Claude adapter using the Anthropic API"""

    def __init__(
        self,
        model_name: str,
        name: str = "claude",
        api_key: str | None = None,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        max_tokens: int = 4096,
    ):
        """
        Args:
            model_name: Default model name (e.g. claude-haiku-4-5-20251001)
            name: Tool name the adapter is registered under
            api_key: Anthropic API key (falls back to environment variable if not specified)
            max_retries: Maximum number of retries (default: 3)
            retry_delay_seconds: Base delay of the exponential backoff
            max_tokens: Maximum number of output tokens
        """
        self.name = name
        self.model_name = model_name
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self.max_tokens = max_tokens
        self.client = Anthropic(api_key=self.api_key) if self.api_key else None

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
            ValueError: If ANTHROPIC_API_KEY is not set
            Exception: If the maximum number of retries is exceeded
        """
        if self.client is None:
            raise ValueError("ANTHROPIC_API_KEY is not set")
        config = config or {}

        def _call():
            response = self.client.messages.create(
                model=config.get("model", self.model_name),
                max_tokens=config.get("max_tokens", self.max_tokens),
                temperature=config.get("temperature", 0.0),
                messages=[{"role": "user", "content": prompt}],
            )
            return response.content[0].text.strip()

        return self._with_retry(
            _call,
            retryable_exceptions=(APIConnectionError, RateLimitError, APIStatusError),
        )
