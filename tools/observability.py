"""
Observability module for structured logging and tracing.

This module provides:
- Structured JSON logging with structlog
- OpenTelemetry instrumentation for the upstream model call
- Correlation ID generation and propagation
- In-memory metrics for review operations
- The default log hook for review normalization
"""

import logging
import re
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Optional, Deque, Dict, Any, List
from contextlib import contextmanager

import structlog
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.trace import Status, StatusCode

from models.data_models import NormalizationPath

DEFAULT_METRIC_HISTORY = 1000
CORRELATION_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,128}")


class ObservabilityManager:
    """
    Manages observability for the code review service.

    Provides:
    - Structured logging with correlation IDs
    - Distributed tracing with OpenTelemetry
    - Metrics collection for operations
    """

    def __init__(
        self,
        service_name: str = "code-review-service",
        log_level: str = "INFO",
        enable_console_export: bool = False,
        metric_history: int = DEFAULT_METRIC_HISTORY
    ):
        """
        Initialize the Observability Manager.

        Args:
            service_name: Name of the service for tracing
            log_level: Minimum level for emitted log entries
            enable_console_export: Whether to export traces to console
            metric_history: Number of samples kept per metric series
        """
        self.service_name = service_name
        self.log_level = log_level.upper()
        self.metric_history = metric_history

        self._setup_logging()
        self._setup_tracing(enable_console_export)

        self.logger = structlog.get_logger()
        self.tracer = trace.get_tracer(__name__)

        # Rolling window per metric; the oldest samples are dropped
        self.metrics: Dict[str, Deque[Dict[str, Any]]] = {}

    def _setup_logging(self) -> None:
        """Configure structlog for structured JSON logging."""
        level = logging.getLevelName(self.log_level)
        if not isinstance(level, int):
            level = logging.INFO

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=False,
        )

    def _setup_tracing(self, enable_console_export: bool) -> None:
        """
        Configure OpenTelemetry tracing.

        OpenTelemetry accepts a global tracer provider only once per process,
        so a provider installed by an earlier manager is reused and only
        gains the console exporter when one is requested.
        """
        provider = trace.get_tracer_provider()
        if not isinstance(provider, TracerProvider):
            provider = TracerProvider(resource=Resource.create({
                "service.name": self.service_name,
                "service.version": "0.1.0",
            }))
            trace.set_tracer_provider(provider)

        if enable_console_export:
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    def generate_correlation_id(self) -> str:
        """Return a fresh UUID4 correlation ID."""
        return str(uuid.uuid4())

    def accept_correlation_id(self, candidate: Optional[str]) -> str:
        """
        Return ``candidate`` when it is a usable correlation ID.

        Inbound IDs end up in every log entry of a request, so only short
        tokens of letters, digits, ``.``, ``_`` and ``-`` are kept; anything
        else is replaced with a generated ID.
        """
        if candidate and CORRELATION_ID_PATTERN.fullmatch(candidate):
            return candidate
        return self.generate_correlation_id()

    def bind_correlation_id(self, correlation_id: str) -> Dict[str, Any]:
        """Bind a correlation ID to the logging context and return the reset tokens."""
        return structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    @contextmanager
    def correlation_context(self, correlation_id: Optional[str] = None):
        """
        Bind a correlation ID for the duration of the block.

        A new ID is generated when none is given. On exit the previous
        binding, if any, is restored.
        """
        if correlation_id is None:
            correlation_id = self.generate_correlation_id()

        tokens = self.bind_correlation_id(correlation_id)
        try:
            yield correlation_id
        finally:
            structlog.contextvars.reset_contextvars(**tokens)

    @contextmanager
    def trace_operation(
        self,
        operation_name: str,
        attributes: Optional[Dict[str, Any]] = None
    ):
        """
        Run the block inside an OpenTelemetry span.

        Attribute values are stringified. An exception marks the span as
        failed and is re-raised.
        """
        with self.tracer.start_as_current_span(operation_name) as span:
            for key, value in (attributes or {}).items():
                span.set_attribute(key, str(value))

            try:
                yield span
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    def log_operation(self, operation: str, level: str = "info", **kwargs) -> None:
        """Emit ``operation`` as a structured event at ``level``."""
        log_method = getattr(self.logger, level.lower(), self.logger.info)
        log_method(operation, timestamp=datetime.now(timezone.utc).isoformat(), **kwargs)

    def log_error(self, operation: str, error: Exception, **kwargs) -> None:
        """Log a failed operation with the exception type and message."""
        self.log_operation(
            operation,
            level="error",
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs
        )

    def log_normalization(self, path: NormalizationPath, text: str) -> None:
        """
        Log a normalized review.

        Fallback paths are logged at warning level so a degraded
        normalization is visible without failing the request.
        """
        if path.degraded:
            self.log_operation(
                "review_normalization_degraded",
                level="warning",
                path=path.value,
                review_length=len(text),
                review=text
            )
        else:
            self.log_operation(
                "review_normalized",
                path=path.value,
                review_length=len(text),
                review=text
            )
        self.record_metric("review_length", float(len(text)), "chars", tags={"path": path.value})

    def record_metric(
        self,
        metric_name: str,
        value: float,
        unit: str,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Append a sample to the metric's rolling window.

        Each series keeps at most ``metric_history`` samples, so a
        long-running server holds a bounded amount of metric data.
        """
        series = self.metrics.get(metric_name)
        if series is None:
            series = self.metrics[metric_name] = deque(maxlen=self.metric_history)

        series.append({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "value": value,
            "unit": unit,
            "tags": tags or {}
        })
        self.log_operation("metric_recorded", level="debug", metric_name=metric_name, value=value, unit=unit)

    def get_metrics(
        self,
        metric_name: Optional[str] = None
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Snapshot the recorded samples, for one metric or all of them."""
        if metric_name:
            return {metric_name: list(self.metrics.get(metric_name, ()))}
        return {name: list(series) for name, series in self.metrics.items()}


# Global observability manager instance
_observability_manager: Optional[ObservabilityManager] = None


def get_observability_manager() -> ObservabilityManager:
    """
    Get the global observability manager instance.

    Returns:
        ObservabilityManager instance
    """
    global _observability_manager
    if _observability_manager is None:
        _observability_manager = ObservabilityManager()
    return _observability_manager


def setup_observability(
    service_name: str = "code-review-service",
    log_level: str = "INFO",
    enable_console_export: bool = False
) -> ObservabilityManager:
    """
    Setup and configure the global observability manager.

    Args:
        service_name: Name of the service for tracing
        log_level: Minimum level for emitted log entries
        enable_console_export: Whether to export traces to console

    Returns:
        Configured ObservabilityManager instance
    """
    global _observability_manager
    _observability_manager = ObservabilityManager(
        service_name=service_name,
        log_level=log_level,
        enable_console_export=enable_console_export
    )
    return _observability_manager
