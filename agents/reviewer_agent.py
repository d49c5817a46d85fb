"""
Reviewer Agent for turning submitted code into a review.

This agent performs, per request:
- Request validation (the code must be a non-empty string)
- A single call to the model client
- Normalization of the model result to one review string
"""

from typing import Any, Optional

import structlog

from tools.error_handling import validate_prompt, validate_review_request
from tools.llm_client import GeminiReviewClient
from tools.observability import ObservabilityManager, get_observability_manager
from tools.response_normalizer import ResponseNormalizer

logger = structlog.get_logger(__name__)


class ReviewerAgent:
    """Agent for reviewing submitted code with the model."""

    def __init__(
        self,
        llm_client: GeminiReviewClient,
        observability: Optional[ObservabilityManager] = None,
        normalizer: Optional[ResponseNormalizer] = None
    ):
        """
        Initialize the Reviewer Agent.

        Args:
            llm_client: Client used for the model call
            observability: Observability manager; its normalization log hook
                is used when no normalizer is given
            normalizer: Custom response normalizer
        """
        self.llm_client = llm_client
        self.observability = observability or get_observability_manager()
        self.normalizer = normalizer or ResponseNormalizer(
            hook=self.observability.log_normalization
        )

    async def review(self, payload: Any) -> str:
        """
        Review the code in a request body.

        Args:
            payload: Decoded request body, ``{"code": "..."}``

        Returns:
            Review text

        Raises:
            MissingInputError: If ``code`` is missing, empty, or not a string
            UpstreamFailureError: If the model call fails
        """
        code = validate_review_request(payload)
        return await self.review_code(code)

    async def review_code(self, code: str) -> str:
        """
        Review a piece of code.

        Args:
            code: Source code, passed to the model unmodified

        Returns:
            Review text
        """
        validate_prompt(code)
        logger.info("review_started", code_length=len(code), model=self.llm_client.model)

        result = await self.llm_client.generate_content(code)
        return self.normalizer.normalize(result)
