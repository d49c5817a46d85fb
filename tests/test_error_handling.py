"""
Tests for request validation and error classification.

This module tests:
- Missing, empty, and non-string code is rejected with MissingInputError
- Valid code passes through unmodified
- Error classification for logging
"""

import pytest
from hypothesis import given, strategies as st, settings

from tools.error_handling import (
    ConfigurationError,
    MissingInputError,
    UpstreamFailureError,
    ValidationError,
    classify_error,
    validate_prompt,
    validate_review_request,
)


class TestValidateReviewRequest:
    """Test review request validation."""

    @pytest.mark.parametrize("payload", [
        {},
        {"code": ""},
        {"code": None},
        {"code": 42},
        {"code": ["print(1)"]},
        {"prompt": "x"},
        None,
        "code",
        ["code"],
    ])
    def test_rejects_missing_input(self, payload):
        with pytest.raises(MissingInputError) as exc_info:
            validate_review_request(payload)

        assert "code" in str(exc_info.value)

    def test_accepts_code(self):
        assert validate_review_request({"code": "x"}) == "x"

    def test_does_not_trim(self):
        code = "  def f():\n    return 1\n\n"
        assert validate_review_request({"code": code}) == code

    def test_whitespace_only_is_accepted(self):
        assert validate_review_request({"code": "   "}) == "   "

    def test_ignores_extra_fields(self):
        assert validate_review_request({"code": "x", "language": "js"}) == "x"

    def test_missing_input_is_validation_error(self):
        with pytest.raises(ValidationError):
            validate_review_request({})

    @settings(max_examples=100)
    @given(code=st.text(min_size=1))
    def test_property_code_passes_through_unchanged(self, code):
        assert validate_review_request({"code": code}) is code


class TestValidatePrompt:
    """Test bare prompt validation."""

    @pytest.mark.parametrize("value", ["", None, 0, b"bytes", {"prompt": "x"}])
    def test_rejects(self, value):
        with pytest.raises(MissingInputError):
            validate_prompt(value)

    def test_accepts_long_prompt_without_cap(self):
        prompt = "x" * 200_000
        assert validate_prompt(prompt) == prompt


class TestClassifyError:
    """Test error classification."""

    def test_classification(self):
        assert classify_error(MissingInputError("x")) == "validation"
        assert classify_error(UpstreamFailureError("x")) == "upstream"
        assert classify_error(ConfigurationError("x")) == "configuration"
        assert classify_error(RuntimeError("x")) == "unknown"
