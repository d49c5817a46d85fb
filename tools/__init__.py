"""
Tools for the code review service.

This package contains:
- The response normalizer that reduces model results to review text
- The Gemini client used for the model call
- Validation and the error taxonomy
- Observability tools for logging and tracing
"""

from tools.observability import (
    ObservabilityManager,
    get_observability_manager,
    setup_observability,
)
from tools.response_normalizer import ResponseNormalizer, normalize

__all__ = [
    "ObservabilityManager",
    "get_observability_manager",
    "setup_observability",
    "ResponseNormalizer",
    "normalize",
]
