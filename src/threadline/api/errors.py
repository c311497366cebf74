"""Translation of failures into the JSON error envelope.

``register_error_handlers`` installs the app-wide handlers; routers use
``error_response`` for failed :class:`~threadline.core.errors.ServiceResult`
values and ``success_response`` for the success envelope.
"""
import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from threadline.core.errors import ServiceError
from threadline.schemas.envelope import Envelope, ErrorEnvelope

logger = logging.getLogger(__name__)


def success_response(
    code: int, message: str, data: Any = None, headers: dict | None = None
) -> JSONResponse:
    body = Envelope(code=code, message=message, data=jsonable_encoder(data)).model_dump()
    if data is None:
        body.pop("data")
    return JSONResponse(status_code=code, content=body, headers=headers)


def _error(code: int, error: str, message: str, headers: dict | None = None) -> JSONResponse:
    body = ErrorEnvelope(code=code, error=error, message=message)
    return JSONResponse(status_code=code, content=body.model_dump(), headers=headers)


def error_response(err: ServiceError) -> JSONResponse:
    return _error(err.kind.status_code, err.title, err.message)


def _reason(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Error"


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(
        exc.status_code,
        _reason(exc.status_code),
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors()
    )
    return _error(status.HTTP_400_BAD_REQUEST, "Validation Error", message or "Invalid request")


async def _database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "database error",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database Error", "A database error occurred")


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled error",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
    # Exception-level handlers run in ServerErrorMiddleware, which re-raises after responding.
    app.add_exception_handler(Exception, _unhandled_exception_handler)
