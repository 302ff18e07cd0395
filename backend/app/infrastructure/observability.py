"""Structured Logging — JSON formatter, request-scoped loggers and call tracing.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (request_id, operation, duration_ms, error_code, ...) surfaced when present
    - JSON format in production, human-readable in development
    - Request context travels on an injected RequestLoggerAdapter, not on module state

Design Decisions:
    - setup_logging called once on startup via lifespan
    - traced() is an explicit decorator; it reads the logger from self._log
"""

import functools
import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, MutableMapping, TypeVar

_STRUCTURED_KEYS = (
    "request_id", "error_code", "operation", "phase", "duration_ms",
    "table", "path", "method", "status_code", "details",
)

T = TypeVar("T")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _STRUCTURED_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Logger bound to request context. Per-call extra is merged, not replaced."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any],
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def bind_logger(
    name: str, request_id: str | None = None,
) -> RequestLoggerAdapter:
    """Logger for one request; request_id is attached to every record."""
    context = {"request_id": request_id} if request_id else {}
    return RequestLoggerAdapter(logging.getLogger(name), context)


def log_database_error(
    log: logging.Logger | logging.LoggerAdapter,
    operation: str,
    table: str,
    exc: BaseException,
    **details: Any,
) -> None:
    log.error(
        f"Database error on {operation} {table}: {exc}",
        extra={
            "error_code": "DATABASE_ERROR",
            "operation": operation,
            "table": table,
            "details": details or None,
        },
    )


def traced(operation: str):
    """Log start/end of an async method at DEBUG with its duration."""

    def decorator(
        func: Callable[..., Awaitable[T]],
    ) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> T:
            log = getattr(self, "_log", None) or logging.getLogger(func.__module__)
            log.debug(
                f"{operation} started",
                extra={"operation": operation, "phase": "start"},
            )
            started = time.perf_counter()
            try:
                return await func(self, *args, **kwargs)
            finally:
                log.debug(
                    f"{operation} completed",
                    extra={
                        "operation": operation,
                        "phase": "end",
                        "duration_ms": round(
                            (time.perf_counter() - started) * 1000, 2,
                        ),
                    },
                )

        return wrapper

    return decorator
