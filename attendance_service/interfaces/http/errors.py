import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...domain.errors import AUTH_ERRORS, AttendanceError, BadRequest, InternalFailure

logger = structlog.get_logger()


def error_response(exc: AttendanceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AUTH_ERRORS) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


async def attendance_error_handler(request: Request, exc: AttendanceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # наружу отдаём только 400, подробности ошибок валидации пишем в лог
    logger.info("bad_request", path=request.url.path, errors=len(exc.errors()))
    return error_response(BadRequest())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return error_response(InternalFailure())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AttendanceError, attendance_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
