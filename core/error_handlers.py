"""Exception handlers turning errors into ``{"error": ...}`` JSON bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from authx.exceptions import AuthXException, MissingTokenError
from sqlalchemy.exc import SQLAlchemyError

from core.errors import SERVER_ERROR_MESSAGE, AppError, InvalidOrExpiredToken, MissingToken

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_error(error: dict) -> str:
    msg = error.get("msg", "Invalid value")
    if msg.startswith(_VALUE_ERROR_PREFIX):
        # raised by one of our own validators, already user facing
        return msg[len(_VALUE_ERROR_PREFIX):]
    field = ".".join(str(x) for x in error.get("loc", ()) if x != "body")
    return f"{field}: {msg}" if field else msg


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    extra = {"path": request.url.path, "method": request.method, "status_code": exc.status_code}
    if exc.status_code >= 500:
        logger.error("Application error: %s", type(exc).__name__, extra=extra)
    else:
        logger.info("Request rejected: %s", type(exc).__name__, extra=extra)
    return _error_response(exc.status_code, exc.message)


async def handle_missing_token(request: Request, exc: MissingTokenError) -> JSONResponse:
    return await handle_app_error(request, MissingToken())


async def handle_token_error(request: Request, exc: AuthXException) -> JSONResponse:
    return await handle_app_error(request, InvalidOrExpiredToken())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_format_validation_error(error) for error in exc.errors()]
    logger.warning(
        "Validation error on %s",
        request.url.path,
        extra={"path": request.url.path, "method": request.method},
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, " | ".join(messages) or "Données invalides")


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "Database error on %s",
        request.url.path,
        extra={"path": request.url.path, "method": request.method},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unexpected error on %s",
        request.url.path,
        extra={"path": request.url.path, "method": request.method, "error_type": type(exc).__name__},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    # authx errors escaping a route that depends on security.access_token_required directly
    app.add_exception_handler(MissingTokenError, handle_missing_token)
    app.add_exception_handler(AuthXException, handle_token_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_generic_error)
