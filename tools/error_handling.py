"""
Error handling utilities for the code review service.

This module provides:
- The error taxonomy shared by the model client and the HTTP boundary
- Input validation with clear error messages
- Error classification for logging
"""

from collections.abc import Mapping
from typing import Any

MISSING_CODE_MESSAGE = "code is required and must be a non-empty string"


class ValidationError(Exception):
    """Raised when input validation fails."""
    pass


class MissingInputError(ValidationError):
    """Raised when the code/prompt field is absent, empty, or not a string."""
    pass


class UpstreamFailureError(Exception):
    """Raised when the model API rejects or fails a request."""
    pass


class ConfigurationError(Exception):
    """Raised when required configuration (the API key) is missing."""
    pass


def validate_prompt(value: Any) -> str:
    """
    Validate a prompt value.

    The value is returned exactly as given: no trimming and no length cap.

    Args:
        value: Candidate prompt

    Returns:
        The validated prompt

    Raises:
        MissingInputError: If the value is not a non-empty string
    """
    if not isinstance(value, str) or value == "":
        raise MissingInputError(MISSING_CODE_MESSAGE)

    return value


def validate_review_request(payload: Any) -> str:
    """
    Validate a review request body and extract the code to review.

    Args:
        payload: Decoded JSON body, expected to look like ``{"code": "..."}``

    Returns:
        The unmodified ``code`` string

    Raises:
        MissingInputError: If the body is not an object or ``code`` is
            missing, empty, or not a string
    """
    if not isinstance(payload, Mapping):
        raise MissingInputError(MISSING_CODE_MESSAGE)

    return validate_prompt(payload.get("code"))


def classify_error(error: Exception) -> str:
    """
    Classify an error for logging and response mapping.

    Args:
        error: Exception to classify

    Returns:
        One of 'validation', 'upstream', 'configuration', or 'unknown'
    """
    if isinstance(error, ValidationError):
        return 'validation'
    elif isinstance(error, UpstreamFailureError):
        return 'upstream'
    elif isinstance(error, ConfigurationError):
        return 'configuration'
    else:
        return 'unknown'
