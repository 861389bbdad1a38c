"""
VoteFeed - Monitoring Module

Structured logging and request context.
"""

from .logging import LoggingContextMiddleware, configure_logging, log_duration

__all__ = [
    "configure_logging",
    "LoggingContextMiddleware",
    "log_duration",
]
