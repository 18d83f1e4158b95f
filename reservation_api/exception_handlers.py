"""Map reservation errors to HTTP responses"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from reservation_api.exceptions import Internal, InvalidInput, ReservationError

logger = structlog.get_logger()

INTERNAL_DETAIL = "Internal server error"


def _error_response(status_code: int, code: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code, "detail": detail})


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Reservation error", path=request.url.path, error=exc.code, message=exc.message)
        return _error_response(exc.status_code, Internal.code, INTERNAL_DETAIL)

    logger.info("Reservation request rejected", path=request.url.path, error=exc.code, message=exc.message)
    return _error_response(exc.status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Request validation failed", path=request.url.path, errors=str(exc.errors()))
    return _error_response(status.HTTP_400_BAD_REQUEST, InvalidInput.code, "malformed request")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", path=request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, Internal.code, INTERNAL_DETAIL)


EXCEPTION_HANDLERS = {
    ReservationError: reservation_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
