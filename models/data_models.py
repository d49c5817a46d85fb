"""
Core data models for the code review service.

This module defines the Pydantic models used at the HTTP boundary and the
classified form of a raw model result. The raw result returned by the model
SDK is weakly typed; ``ModelResponse`` is the explicit sum type it is
reduced to before normalization.
"""

from enum import Enum
from typing import Any, List, Union

from pydantic import BaseModel, Field, ConfigDict


class NormalizationPath(str, Enum):
    """Which step of the fallback chain produced the review text."""
    CANDIDATE_PARTS = "candidate_parts"
    PLAIN_TEXT = "plain_text"
    SERIALIZED = "serialized"
    STRINGIFIED = "stringified"

    @property
    def degraded(self) -> bool:
        """True when no text-bearing path was found."""
        return self in (NormalizationPath.SERIALIZED, NormalizationPath.STRINGIFIED)


class ReviewRequest(BaseModel):
    """Request body for a code review."""
    code: str = Field(..., min_length=1, description="Source code to review")


class ReviewResponse(BaseModel):
    """Successful review response."""
    response: str = Field(..., description="Review text, usually markdown")


class ErrorResponse(BaseModel):
    """Error response returned by the API."""
    error: str = Field(..., description="Human-readable error message")


class CandidateParts(BaseModel):
    """First candidate carries at least one non-empty text part."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    texts: List[str] = Field(..., min_length=1, description="Text parts in original order")
    candidate: Any = Field(default=None, description="The candidate the texts came from")


class PlainText(BaseModel):
    """The response layer is already a string."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)


class Opaque(BaseModel):
    """No text-bearing path; only a fragment to serialize."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fragment: Any = Field(default=None, description="Most specific fragment available")
    original: Any = Field(default=None, description="The whole raw result")


ModelResponse = Union[CandidateParts, PlainText, Opaque]
