"""Request ID middleware with structured access logging."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, echo it back and log timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        log_extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        start_time = time.perf_counter()
        logger.info("request_started", extra=log_extra)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                extra={
                    **log_extra,
                    "status_code": 500,
                    "latency_ms": int((time.perf_counter() - start_time) * 1000),
                    "error": str(e),
                },
                exc_info=True,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            extra={
                **log_extra,
                "status_code": response.status_code,
                "latency_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return response
