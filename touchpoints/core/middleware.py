"""
Error handling middleware
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from touchpoints.core.errors import APIError

logger = logging.getLogger(__name__)


def _format_validation_error(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render our own exceptions with their status code"""
    if exc.status_code >= 500:
        logger.error(
            f"API Error: {exc.error_code}: {exc.message}",
            extra={"path": request.url.path, "details": exc.details}
        )
    else:
        logger.info(
            f"API Error: {exc.error_code}",
            extra={"path": request.url.path, "status_code": exc.status_code}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        }
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle query/path parameter validation errors raised by FastAPI"""
    errors = [_format_validation_error(err) for err in exc.errors()]
    logger.warning(
        "Validation Error",
        extra={"path": request.url.path, "errors": errors}
    )
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "details": {"errors": errors},
        }
    )


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors"""
    logger.exception(
        "Unexpected Error",
        extra={"path": request.url.path, "error_type": type(exc).__name__}
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }
    )


def setup_error_handlers(app):
    """
    Configure error handlers for FastAPI app
    """
    app.middleware("http")(error_logging_middleware)
    app.exception_handler(APIError)(api_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(error_handler)


async def error_logging_middleware(request: Request, call_next):
    """
    Middleware for logging all errors
    """
    try:
        response = await call_next(request)
        return response
    except Exception as exc:
        logger.exception(
            "Unhandled Exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_type": type(exc).__name__
            }
        )
        raise
