"""Request tracing middleware."""

import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that gives each request a unique ID.

    The ID is taken from an incoming X-Request-ID header or generated,
    stored on request.state (also as trace_id for error responses),
    returned in the X-Request-ID response header and bound into the
    structlog context for the duration of the request.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            # The authentication gate binds user fields during the request
            structlog.contextvars.unbind_contextvars("request_id", "user_id", "username")

        response.headers["X-Request-ID"] = request_id
        return response
