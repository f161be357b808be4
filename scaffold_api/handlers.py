"""Exception handlers producing the ``{"success": false, "error": ...}`` envelope."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from .schemas import ErrorResponse

logger = structlog.get_logger()


def _error(status_code: int, error: str, details: list[str] | None = None, headers=None):
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def format_validation_errors(exc: RequestValidationError) -> list[str]:
    """``["features.auth: Field required", ...]`` from pydantic error entries."""
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        messages.append(f"{'.'.join(loc) or 'body'}: {err.get('msg', 'Invalid value')}")
    return messages


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = format_validation_errors(exc)
    logger.info("request_validation_failed", details=details)
    return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    return _error(exc.status_code, str(detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
