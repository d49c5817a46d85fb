"""Setup script for code-review-service."""

from setuptools import setup, find_packages

setup(
    name="code-review-service",
    version="0.1.0",
    description="HTTP service that reviews source code with a hosted language model",
    python_requires=">=3.10",
    packages=find_packages(include=["agents", "agents.*", "api", "api.*", "config", "config.*",
                                    "models", "models.*", "tools", "tools.*"]),
    include_package_data=True,
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "structlog>=24.1",
        "opentelemetry-api>=1.22",
        "opentelemetry-sdk>=1.22",
        "google-genai>=1.0",
        "click>=8.1",
        "rich>=13.7",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "hypothesis>=6.98",
            "httpx>=0.26",
        ],
    },
    entry_points={
        'console_scripts': [
            'code-review=api.cli:main',
        ],
    },
)
