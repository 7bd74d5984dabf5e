"""
Request context for engine logging.

Every request gets an id that is bound into structlog's context variables,
so the engine events logged while serving it ("Tool created",
"Production recorded", "Scrap recorded", ...) carry the same request_id,
method and path as the access lines written here.
"""

import time
import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from toolwear.core.logging import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds the request context, times the request and echoes its id."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        logger.info(
            "Request started",
            query_params=str(request.query_params) or None,
            client_host=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                error=str(exc),
                process_time=time.perf_counter() - started,
                exc_info=True,
            )
            raise

        process_time = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.6f}"

        # Rejected writes log at warning level
        log = logger.warning if response.status_code >= 400 and request.method != "GET" else logger.info
        log("Request completed", status_code=response.status_code, process_time=process_time)
        return response
