"""
FastAPI application for the code review service.

This package contains:
- REST API endpoint for requesting a review
- CLI interface for local usage
"""
