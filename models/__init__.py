"""
Data models for the code review service.
"""

from models.data_models import (
    # Enums
    NormalizationPath,
    # API Models
    ReviewRequest,
    ReviewResponse,
    ErrorResponse,
    # Model response variants
    CandidateParts,
    PlainText,
    Opaque,
    ModelResponse,
)

__all__ = [
    # Enums
    "NormalizationPath",
    # API Models
    "ReviewRequest",
    "ReviewResponse",
    "ErrorResponse",
    # Model response variants
    "CandidateParts",
    "PlainText",
    "Opaque",
    "ModelResponse",
]
