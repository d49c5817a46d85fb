"""FastAPI application for the code review service."""

from datetime import datetime, timezone
from typing import Any, Dict

import structlog
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.reviewer_agent import ReviewerAgent
from config.settings import settings
from models.data_models import ErrorResponse, ReviewRequest, ReviewResponse
from tools.error_handling import (
    ConfigurationError,
    MissingInputError,
    UpstreamFailureError,
    classify_error,
)
from tools.llm_client import GeminiReviewClient
from tools.observability import setup_observability

REQUEST_ID_HEADER = "X-Request-ID"
UPSTREAM_ERROR_MESSAGE = "Failed to generate review"
INTERNAL_ERROR_MESSAGE = "Internal server error"

observability = setup_observability(
    service_name=settings.service_name,
    log_level=settings.log_level,
    enable_console_export=settings.enable_trace_console_export
)

logger = structlog.get_logger()

app = FastAPI(
    title="Code Review Service",
    description="Reviews submitted source code with a hosted language model",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global instances
llm_client = GeminiReviewClient(
    api_key=settings.google_gemini_key,
    model=settings.gemini_model,
    observability=observability
)
reviewer_agent = ReviewerAgent(llm_client=llm_client, observability=observability)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.middleware("http")
async def bind_request_id(request: Request, call_next):
    """
    Bind a correlation ID to every log entry emitted while serving a request.

    Errors without a registered handler are turned into the generic 500 here,
    while the ID is still bound, so that response carries the header too.
    """
    request_id = observability.accept_correlation_id(request.headers.get(REQUEST_ID_HEADER))
    with observability.correlation_context(request_id):
        try:
            response = await call_next(request)
        except Exception as e:
            observability.log_error("unhandled_error", e, error_kind=classify_error(e), path=request.url.path)
            response = error_response(500, INTERNAL_ERROR_MESSAGE)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid_request_body", path=request.url.path, errors=len(exc.errors()))
    return error_response(400, "Request body must be a JSON object with a non-empty 'code' string")


@app.exception_handler(MissingInputError)
async def handle_missing_input(request: Request, exc: MissingInputError) -> JSONResponse:
    logger.info("review_rejected", path=request.url.path, reason=str(exc))
    return error_response(400, str(exc))


@app.exception_handler(UpstreamFailureError)
async def handle_upstream_failure(request: Request, exc: UpstreamFailureError) -> JSONResponse:
    observability.log_error("review_failed", exc, error_kind=classify_error(exc), path=request.url.path)
    return error_response(502, UPSTREAM_ERROR_MESSAGE)


@app.exception_handler(ConfigurationError)
async def handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    observability.log_error("review_failed", exc, error_kind=classify_error(exc), path=request.url.path)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


@app.get("/")
async def root() -> Dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Code Review Service",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Health status with component checks
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "0.1.0",
        "components": {
            "model": settings.gemini_model,
            "api_key_configured": bool(settings.google_gemini_key),
        }
    }


@app.get("/health/ready")
async def readiness() -> JSONResponse:
    """
    Readiness check endpoint.

    The service is ready once a model API key is configured.
    """
    ready = bool(llm_client.api_key)
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "ready": ready,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": {"llm_client": "ready" if ready else "missing_api_key"}
        }
    )


@app.get("/health/live")
async def liveness() -> Dict[str, Any]:
    """Liveness check endpoint."""
    return {
        "alive": True,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.post(
    "/get-review",
    response_model=ReviewResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ReviewRequest.model_json_schema()}},
            "required": True,
        }
    }
)
@app.post("/ai/get-review", response_model=ReviewResponse, include_in_schema=False)
async def get_review(payload: Any = Body(default=None)) -> ReviewResponse:
    """
    Review submitted code.

    Expects ``{"code": "..."}``. The code is sent to the model unmodified
    and the model's answer is normalized to a single string.

    Returns:
        ReviewResponse with the review text
    """
    logger.info("review_requested")
    review = await reviewer_agent.review(payload)
    return ReviewResponse(response=review)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
