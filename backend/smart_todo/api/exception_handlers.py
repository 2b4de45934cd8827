from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from smart_todo.core.errors import EntryStoreError, SmartTodoError
from smart_todo.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def app_error_handler(request: Request, exc: SmartTodoError) -> JSONResponse:
    if isinstance(exc, EntryStoreError) and exc.status_code >= 500:
        logger.error(
            "Store error",
            extra={"path": request.url.path, "method": request.method, "error": exc.message},
        )
    return _error(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        msg = str(err.get("msg", "Invalid value"))
        # Strip pydantic's "Value error, " prefix from custom validator messages
        messages.append(msg.removeprefix("Value error, "))
    logger.info("Rejected invalid request", extra={"path": request.url.path, "errors": messages})
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error", extra={"path": request.url.path, "method": request.method}, exc_info=exc
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SmartTodoError.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""
    app.add_exception_handler(SmartTodoError, app_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
