"""Structured request logging."""

from app.core.logging.middleware import RequestLoggingMiddleware, get_client_ip


__all__ = [
    "RequestLoggingMiddleware",
    "get_client_ip",
]
