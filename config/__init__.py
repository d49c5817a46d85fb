"""
Configuration management for the code review service.

This package handles:
- Environment variable and .env loading
- Settings validation using Pydantic
- The reviewer system instruction sent with every model call
"""
