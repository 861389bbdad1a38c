"""
VoteFeed - Structured Logging

structlog is routed through the stdlib logging module so uvicorn, web3 and
votefeed records share one stream. Production renders JSON lines; every
other environment gets the colored console renderer.

Every event carries the service name and version, plus the correlation id,
method and path of the request it was logged under.
"""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from urllib.parse import urlsplit
from uuid import uuid4

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from votefeed import __version__

CORRELATION_HEADER = b"x-correlation-id"

# Per-request chatter from the HTTP stack and the web3 provider
NOISY_LOGGERS = ("web3", "uvicorn.access", "httpx", "httpcore")

REDACTED_KEYS = ("authorization", "cookie", "api_key", "private_key", "mnemonic")


# =============================================================================
# Processors
# =============================================================================

def add_service_info(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict.setdefault("service", "votefeed")
    event_dict.setdefault("version", __version__)
    return event_dict


def redact_secrets(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Hide credentials before an event is rendered.

    Values under credential-like keys are replaced outright. RPC URLs are cut
    down to scheme and host, since hosted providers embed the API key in the
    path or query string.
    """
    return {key: _redact(key, value) for key, value in event_dict.items()}


def _redact(key: Any, value: Any) -> Any:
    if isinstance(key, str):
        lowered = key.lower()
        if any(name in lowered for name in REDACTED_KEYS):
            return "[REDACTED]"
        if lowered.endswith("url") and isinstance(value, str):
            return _endpoint_only(value)
    if isinstance(value, dict):
        return {k: _redact(k, v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_redact(None, item) for item in value]
    return value


def _endpoint_only(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"


# =============================================================================
# Configuration
# =============================================================================

def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog and the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines instead of console output
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_info,
        redact_secrets,
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.rich_traceback)
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# =============================================================================
# Request Context
# =============================================================================

def _correlation_id(scope: dict[str, Any]) -> str:
    for name, value in scope.get("headers", []):
        if name == CORRELATION_HEADER and value:
            return value.decode("latin-1")
    return str(uuid4())


class LoggingContextMiddleware:
    """
    ASGI middleware binding correlation_id, method and path to every event
    logged while a request is handled.

    The correlation id is taken from X-Correlation-ID when the caller sends
    one and is echoed back on the response.
    """

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = _correlation_id(scope)

        async def send_with_correlation(message: Any) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (CORRELATION_HEADER, correlation_id.encode("latin-1")),
                ]
            await send(message)

        with structlog.contextvars.bound_contextvars(
            correlation_id=correlation_id,
            method=scope.get("method", ""),
            path=scope.get("path", ""),
        ):
            await self.app(scope, receive, send_with_correlation)


@contextmanager
def log_duration(logger: Any, operation: str, **context: Any) -> Iterator[None]:
    """
    Log "<operation>_completed" or "<operation>_failed" with duration_ms.

    Exceptions are logged and re-raised.
    """
    started = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error(
            f"{operation}_failed",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            error=str(e),
            **context,
        )
        raise
    logger.info(
        f"{operation}_completed",
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        **context,
    )
