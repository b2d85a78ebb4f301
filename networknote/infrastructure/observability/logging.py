"""
Structured logging for NetworkNote.

JSON lines in deployed environments, a readable console renderer in
development. Request-scoped values bound with structlog.contextvars
(request_id) appear on every event emitted while handling that request.
"""

import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "psycopg.pool", "uvicorn.access")


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON renderer when True, console renderer otherwise
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_http_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """One event per request; 4xx/5xx at warning level."""
    logger = get_logger("http")
    fields = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
    }
    if status_code >= 400:
        logger.warning("HTTP request failed", **fields)
    else:
        logger.info("HTTP request completed", **fields)


def log_readiness(component: str, ok: bool, latency_ms: float, error: str | None = None) -> None:
    logger = get_logger("health")
    fields = {"component": component, "ok": ok, "latency_ms": latency_ms}
    if error:
        fields["error"] = error

    if ok:
        logger.debug("Readiness check passed", **fields)
    else:
        logger.error("Readiness check failed", **fields)
