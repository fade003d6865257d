"""
Gemini (Google GenAI SDK via Vertex AI) tool adapter
"""

import os

from google import genai
from google.api_core import exceptions as google_exceptions
from google.genai.types import GenerateContentConfig, HttpOptions

from capability_validation.infrastructure.tool_adapters.base import ToolAdapter, RetryMixin


class VertexAIAdapter(RetryMixin, ToolAdapter):
    """Gemini adapter using Google GenAI SDK (via Vertex AI)"""

    def __init__(
        self,
        model_name: str,
        name: str = "gemini",
        project_id: str | None = None,
        location: str | None = None,
        timeout_seconds: float = 300,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
    ):
        """
        Args:
            model_name: Default model name (e.g. gemini-2.5-flash)
            name: Tool name the adapter is registered under
            project_id: GCP project ID (falls back to environment variable if not specified)
            location: Region (defaults to global)
            timeout_seconds: HTTP timeout in seconds
            max_retries: Maximum number of retries (default: 3)
            retry_delay_seconds: Base delay of the exponential backoff
        """
        self.name = name
        self.model_name = model_name
        self.project_id = project_id or os.environ.get("GCP_PROJECT_ID")
        self.location = location or "global"
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self._client = None

    def is_available(self) -> bool:
        return bool(self.project_id)

    @property
    def client(self):
        """Lazily created GenAI client (timeout configured via HttpOptions)"""
        if self._client is None:
            if not self.project_id:
                raise ValueError("GCP_PROJECT_ID is not set")
            self._client = genai.Client(
                vertexai=True,
                project=self.project_id,
                location=self.location,
                http_options=HttpOptions(timeout=int(self.timeout_seconds * 1000)),
            )
        return self._client

    def execute(self, prompt: str, config: dict | None = None) -> str:
        """
        Send a prompt and return the response text

        Args:
            prompt: Input prompt
            config: Optional overrides (model, temperature)

        Returns:
            The model's output text

        Raises:
            Exception: If the maximum number of retries is exceeded
        """
        config = config or {}
        generation_config = GenerateContentConfig(temperature=config.get("temperature", 0.0))

        def _call():
            response = self.client.models.generate_content(
                model=config.get("model", self.model_name),
                contents=prompt,
                config=generation_config,
            )
            return response.text.strip()

        return self._with_retry(
            _call,
            retryable_exceptions=(
                google_exceptions.DeadlineExceeded,
                google_exceptions.ServiceUnavailable,
                google_exceptions.ResourceExhausted,
            ),
        )
