from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please contact support."


class MovieWaveException(Exception):
    """Base exception for the application"""
    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class BadRequest(MovieWaveException):
    status_code = 400


class Unauthorized(MovieWaveException):
    status_code = 401


class NotFound(MovieWaveException):
    status_code = 404


class AlreadyExists(MovieWaveException):
    # Duplicates are reported as 400, the frontend does not handle 409
    status_code = 400


class ConfigurationError(MovieWaveException):
    pass


class UpstreamFailure(MovieWaveException):
    pass


class ProcessingFailed(MovieWaveException):
    pass


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


async def app_exception_handler(request: Request, exc: MovieWaveException):
    """
    Map the application error taxonomy to JSON responses.
    4xx messages are returned as-is; 5xx are logged with their cause.
    """
    request_id = _request_id(request)

    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__}: {exc.message}",
            extra={"request_id": request_id, "path": request.url.path},
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.info(
            f"{type(exc).__name__}: {exc.message}",
            extra={"request_id": request_id, "path": request.url.path},
        )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "request_id": request_id},
        headers=headers,
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler to execute last (if registered appropriately).
    Returns 500 JSON response and hides internal error details.
    """
    request_id = _request_id(request)

    logger.error(
        "Unhandled exception occurred",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": GENERIC_ERROR_MESSAGE,
            "request_id": request_id
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle standard FastAPI HTTPExceptions (unknown routes, wrong methods).
    """
    request_id = _request_id(request)

    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} error", extra={"request_id": request_id, "detail": exc.detail})
    else:
        logger.info(f"HTTP {exc.status_code} error", extra={"request_id": request_id, "detail": exc.detail})

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "request_id": request_id},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors. Malformed requests are a 400 for this API.
    """
    request_id = _request_id(request)
    errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    logger.info("Validation error", extra={"request_id": request_id, "errors": errors})

    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation Error",
            "details": errors,
            "request_id": request_id
        },
    )
