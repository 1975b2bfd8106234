"""
Request logging middleware.

One log line per request with:
- Method, path, status and duration
- A correlation id (taken from X-Request-ID or generated) echoed back
- Optional body logging with credential fields redacted
"""

import time
import uuid
import json
import logging
from typing import Any, Callable, Optional, Set
from dataclasses import dataclass, field
from contextvars import ContextVar

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

logger = logging.getLogger("electromart.api")

REDACTED = "[REDACTED]"


@dataclass
class LoggingConfig:
    """Configuration for request logging."""

    enabled: bool = True

    # Log request bodies (credentials are always redacted)
    log_request_body: bool = False
    max_body_log_size: int = 10000

    # Paths never logged
    excluded_paths: Set[str] = field(default_factory=lambda: {
        "/health",
        "/favicon.ico",
    })

    # Body fields replaced before logging
    redacted_fields: Set[str] = field(default_factory=lambda: {
        "password",
        "token",
        "secret",
        "authorization",
    })

    slow_request_threshold: float = 2.0

    request_id_header: str = "X-Request-ID"


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        for key in ("method", "path", "status_code", "duration_ms", "body"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def redact_sensitive_data(data: Any, redacted_fields: Set[str]) -> Any:
    """
    Recursively replace sensitive fields in a decoded JSON structure.

    Args:
        data: dict, list or primitive
        redacted_fields: Lower-case field names to replace

    Returns:
        Copy of data with sensitive values replaced.
    """
    if isinstance(data, dict):
        return {
            key: REDACTED if key.lower() in redacted_fields
            else redact_sensitive_data(value, redacted_fields)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact_sensitive_data(item, redacted_fields) for item in data]
    return data


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_var.get()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and tags the response with its request id."""

    def __init__(self, app: FastAPI, config: Optional[LoggingConfig] = None):
        super().__init__(app)
        self.config = config or LoggingConfig()

    async def _read_body(self, request: Request) -> Optional[str]:
        body = await request.body()
        if not body:
            return None
        if len(body) > self.config.max_body_log_size:
            return f"[BODY TOO LARGE: {len(body)} bytes]"

        try:
            decoded = json.loads(body)
        except ValueError:
            return "[UNPARSEABLE BODY]"

        return json.dumps(redact_sensitive_data(decoded, self.config.redacted_fields))

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(
            self.config.request_id_header,
            str(uuid.uuid4())[:8],
        )
        request_id_var.set(request_id)

        if not self.config.enabled or request.url.path in self.config.excluded_paths:
            response = await call_next(request)
            response.headers[self.config.request_id_header] = request_id
            return response

        extra = {"method": request.method, "path": request.url.path}
        if self.config.log_request_body and request.method in ("POST", "PUT"):
            body = await self._read_body(request)
            if body:
                extra["body"] = body

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        extra["status_code"] = response.status_code
        extra["duration_ms"] = round(duration * 1000, 2)
        response.headers[self.config.request_id_header] = request_id

        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400 or duration > self.config.slow_request_threshold:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        message = (
            f"{request.method} {request.url.path} -> "
            f"{response.status_code} ({extra['duration_ms']}ms)"
        )
        if duration > self.config.slow_request_threshold:
            message = f"[SLOW] {message}"

        logger.log(log_level, message, extra=extra)
        return response


def setup_logging(
    app: FastAPI,
    config: Optional[LoggingConfig] = None,
    structured: bool = True,
) -> None:
    """
    Configure logging middleware and formatters.

    Args:
        app: FastAPI application instance.
        config: Logging configuration.
        structured: Use JSON structured logging format.
    """
    if config is None:
        config = LoggingConfig()

    electromart_logger = logging.getLogger("electromart")
    if structured and not electromart_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredLogFormatter())

        electromart_logger.addHandler(handler)
        electromart_logger.setLevel(logging.INFO)
        electromart_logger.propagate = False

    app.add_middleware(RequestLoggingMiddleware, config=config)
