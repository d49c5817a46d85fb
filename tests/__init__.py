"""
Test suite for the code review service.

This package contains:
- Unit tests for individual components
- Property-based tests using Hypothesis
- HTTP boundary tests using the FastAPI test client
"""
