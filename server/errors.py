"""Exception handlers rendering errors as structured JSON bodies."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from models.errors import ServiceError
from server.utils import CORS_HEADERS, summarize_validation_error
from utils.logger import get_logger

logger = get_logger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "extra_fields": {
                "request_id": request_id,
                "path": request.url.path,
                "status_code": exc.status_code,
            }
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = summarize_validation_error(exc)
    logger.warning(
        "Request validation failed",
        extra={"extra_fields": {"path": request.url.path, "details": details}},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": details},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error: {exc}",
        exc_info=exc,
        extra={"extra_fields": {"path": request.url.path}},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
        # Rendered outside CORSMiddleware, so the headers are set here
        headers=CORS_HEADERS,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
