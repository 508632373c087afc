"""
Logging utilities for the Mail Digest webhook service.

Provides:
- Request ID tracking across async contexts
- Structured stage logging for the ingestion pipeline
- Structured logging for LLM calls
- Request ID middleware for FastAPI
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

# Context variable to track request_id across async contexts
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """
    Logging filter that injects request_id into every log record.

    If no request_id is set in the context, defaults to "-".
    This allows the formatter to safely use %(request_id)s.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that generates and tracks request IDs.

    - Reuses an inbound X-Request-ID header or generates a UUID
    - Sets it in the context variable for logging
    - Adds X-Request-ID header to responses
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        token = request_id_var.set(request_id)

        try:
            response: Response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with request_id-aware formatting.

    Sets up:
    - Request ID injection via RequestIdFilter
    - Log format with timestamp, level, module, function, request_id
    - Output to stdout (container/cloud-friendly)

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")
    """
    resolved = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s | %(request_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()  # Avoid duplicate handlers on reload
    root.setLevel(resolved)
    root.addHandler(handler)

    # Reduce noise from HTTP clients used by the LLM SDKs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class PipelineLogger:
    """
    Logger for tracking a component's progress through email ingestion.

    Every record carries the component name and the pipeline step in
    ``extra`` so log processors can filter on them.

    Example:
        logger = get_pipeline_logger("ingestion")
        logger.stage("authenticated")
        logger.stage("validated", message_id="abc")
        logger.rejected(401, "missing header")
    """

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(f"pipeline.{component}")

    def stage(self, name: str, **extra):
        """Log a completed pipeline stage."""
        self.logger.info(
            f"[STAGE] {name}",
            extra={"component": self.component, "step": name, **extra},
        )

    def rejected(self, status_code: int, reason: str, **extra):
        """Log a request rejected by the caller's fault (4xx)."""
        self.logger.warning(
            f"[REJECTED] {status_code}: {reason}",
            extra={
                "component": self.component,
                "step": "rejected",
                "status_code": status_code,
                **extra,
            },
        )

    def failure(self, error: BaseException, context: str = "", **extra):
        """Log a server-side failure with full traceback."""
        self.logger.error(
            f"[ERROR] {context}: {error}",
            exc_info=error,
            extra={"component": self.component, "step": "error", **extra},
        )

    def llm_call(
        self,
        model: str,
        provider: str,
        latency_ms: float | None = None,
        **extra: Any,
    ):
        """Log LLM API call metrics."""
        self.logger.info(
            f"[LLM_CALL] provider={provider} model={model}",
            extra={
                "component": self.component,
                "step": "llm_call",
                "model": model,
                "provider": provider,
                "latency_ms": latency_ms,
                **extra,
            },
        )


def get_pipeline_logger(component: str) -> PipelineLogger:
    """
    Factory function to create a PipelineLogger.

    Args:
        component: Name of the component (e.g., "ingestion", "email_summarizer")

    Returns:
        PipelineLogger: Logger instance for the component
    """
    return PipelineLogger(component)
