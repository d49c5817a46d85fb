"""
Agents for the code review service.

This package contains:
- ReviewerAgent: Validates a request, calls the model and normalizes its answer
"""

from agents.reviewer_agent import ReviewerAgent

__version__ = "0.1.0"

__all__ = [
    "ReviewerAgent",
]
