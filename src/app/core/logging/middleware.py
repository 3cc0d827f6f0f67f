"""Request logging middleware.

Every request gets a ``request_started`` and a ``request_completed`` event.
The completion event carries the authenticated user, if the
authentication gate attached one.
"""

import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

DEFAULT_EXCLUDED_PATHS = (
    "/health/live",
    "/health/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of each HTTP request.

    Request bodies are never logged: they carry passwords.
    """

    def __init__(self, app: Any, exclude_paths: list[str] | None = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            exclude_paths: Path prefixes to skip (probes and docs by default)
        """
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or DEFAULT_EXCLUDED_PATHS)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if path.startswith(self.exclude_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method

        log_data: dict[str, Any] = {
            "method": method,
            "path": path,
            "client_ip": get_client_ip(request),
        }
        if request.url.query:
            log_data["query"] = request.url.query
        logger.info("request_started", **log_data)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                method=method,
                path=path,
                duration_ms=_elapsed_ms(start_time),
                error=str(exc),
            )
            raise

        completion_data: dict[str, Any] = {
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": _elapsed_ms(start_time),
        }
        identity = getattr(request.state, "identity", None)
        if identity is not None:
            completion_data["user_id"] = str(identity.id)
            completion_data["role"] = str(identity.role)

        if response.status_code >= 500:
            logger.error("request_completed", **completion_data)
        elif response.status_code >= 400:
            logger.warning("request_completed", **completion_data)
        else:
            logger.info("request_completed", **completion_data)

        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


def get_client_ip(request: Request) -> str | None:
    """Extract the client IP, preferring proxy headers.

    Args:
        request: The incoming request

    Returns:
        The client IP address or None
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First entry is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else None
