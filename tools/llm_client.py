"""
LLM client for AI-powered code review.

Wraps the Google Gemini API (``google-genai``). The client sends the code to
review as a plain string prompt together with the reviewer system
instruction and returns the raw SDK result untouched; turning that result
into display text is the job of ``tools.response_normalizer``.
"""

import time
from typing import Any, Optional

import structlog

from config.prompts import REVIEWER_SYSTEM_INSTRUCTION
from tools.error_handling import ConfigurationError, UpstreamFailureError, validate_prompt
from tools.observability import ObservabilityManager, get_observability_manager

logger = structlog.get_logger(__name__)


class GeminiReviewClient:
    """Client for the Gemini generate-content operation."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash",
        system_instruction: str = REVIEWER_SYSTEM_INSTRUCTION,
        observability: Optional[ObservabilityManager] = None
    ):
        """
        Initialize the Gemini client.

        The SDK client is created on the first call so the service can start
        (and serve health checks) without a key.

        Args:
            api_key: Gemini API key
            model: Model name
            system_instruction: System instruction sent with every request
            observability: Observability manager for spans and metrics
        """
        self.api_key = api_key
        self.model = model
        self.system_instruction = system_instruction
        self.observability = observability
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazy-initialize the google-genai client."""
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("GOOGLE_GEMINI_KEY is not configured")
            try:
                from google import genai
            except ImportError:
                raise ImportError("google-genai is required. Install with: pip install google-genai")

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _build_config(self) -> Any:
        from google.genai import types

        return types.GenerateContentConfig(system_instruction=self.system_instruction)

    async def generate_content(self, prompt: str) -> Any:
        """
        Generate a review for ``prompt``.

        The prompt is passed to the SDK as a plain string. Wrapping it in an
        object breaks the SDK's content conversion.

        Args:
            prompt: Code to review

        Returns:
            Raw SDK result

        Raises:
            MissingInputError: If prompt is not a non-empty string
            ConfigurationError: If no API key is configured
            UpstreamFailureError: If the model call fails
        """
        validate_prompt(prompt)
        client = self._get_client()
        observability = self.observability or get_observability_manager()

        started = time.perf_counter()
        with observability.trace_operation(
            "gemini.generate_content",
            {"model": self.model, "prompt_length": len(prompt)}
        ):
            try:
                result = await client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=self._build_config(),
                )
            except Exception as e:
                logger.error(
                    "model_call_failed",
                    model=self.model,
                    error_type=type(e).__name__,
                    status_code=getattr(e, "code", None),
                )
                raise UpstreamFailureError(f"Gemini request failed: {e}") from e

        duration_ms = (time.perf_counter() - started) * 1000
        observability.record_metric(
            "model_call_duration_ms",
            duration_ms,
            "ms",
            tags={"model": self.model}
        )
        logger.info("model_call_completed", model=self.model, duration_ms=round(duration_ms, 2))
        return result
