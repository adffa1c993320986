"""Request ID middleware."""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from server.utils import redact_sensitive_headers
from utils.logger import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a request ID to every request and response.

    An incoming X-Request-ID header is reused so IDs can be traced across
    services; otherwise a new one is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req_{uuid.uuid4().hex[:16]}"
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start_time = time.time()
        logger.debug(
            f"{request.method} {request.url.path}",
            extra={"extra_fields": {"headers": redact_sensitive_headers(request.headers)}},
        )

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "extra_fields": {
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "latency_ms": int((time.time() - start_time) * 1000),
                }
            },
        )
        return response
