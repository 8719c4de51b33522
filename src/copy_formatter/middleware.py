# -*- coding: utf-8 -*-
"""
Request context and payload size middleware.
"""
import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from .config import settings

logger = logging.getLogger(__name__)

# ID of the request being handled, read by the logging filter
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the ID of the request being handled, if any."""
    return request_id_ctx.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log its status and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(settings.REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_ctx.set(request_id)
        start_time = time.time()

        try:
            response = await call_next(request)
            response.headers[settings.REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request handled",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": int((time.time() - start_time) * 1000),
                },
            )
            return response
        finally:
            request_id_ctx.reset(token)


class PayloadSizeMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body size exceeds MAX_REQUEST_BYTES."""

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length", "")

        if content_length.isdigit() and int(content_length) > settings.MAX_REQUEST_BYTES:
            logger.warning(
                "Request body too large",
                extra={"path": request.url.path, "content_length": int(content_length)},
            )
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request body exceeds {settings.MAX_REQUEST_BYTES} bytes"},
            )

        return await call_next(request)
