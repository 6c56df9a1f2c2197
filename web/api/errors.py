"""API errors, validation helpers and the exception handlers producing the failure envelope."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from app.container import container
from stats_client.errors import (
    FetchError,
    LeaderboardNotFound,
    NotFoundError,
    NotReadyError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "FetchError",
    "NotFoundError",
    "NotReadyError",
    "UpstreamError",
    "ValidationError",
    "failure",
    "install_error_handlers",
    "require",
    "validate_page",
]

# Lookups whose failure body keeps the status it was cached with
CACHED_FAILURE_PATHS = frozenset({"/stats", "/guild"})


def require(value: str | None, name: str) -> str:
    """Stripped query parameter, ValidationError when missing or blank."""
    if value is None or not value.strip():
        raise ValidationError(f"Missing {name} parameter")
    return value.strip()


def validate_page(page: str | None) -> int:
    """Leaderboard page number: defaults to 1, must be an integer >= 1."""
    if page is None or page == "":
        return 1
    try:
        number = int(page)
    except ValueError:
        raise ValidationError("Invalid page number!") from None
    if number < 1:
        raise ValidationError("Invalid page number!")
    return number


def failure(status: int, cause: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "cause": cause})


async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    # Unknown leaderboards are a bad argument from the caller's point of view
    status = 400 if isinstance(exc, LeaderboardNotFound) else exc.status
    if status >= 500:
        logger.warning("{} {} failed: {} ({})", request.method, request.url.path, exc.cause, status)
    if request.url.path in CACHED_FAILURE_PATHS and not isinstance(exc, ValidationError):
        return JSONResponse(status_code=status, content=exc.to_dict())
    return failure(status, exc.cause)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    field = errors[0]["loc"][-1] if errors and errors[0].get("loc") else "request"
    return failure(400, f"Invalid {field} parameter")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error serving {} {}", request.method, request.url)
    if container.initialized:
        container.monitor.alert_exception(exc, "Unhandled error serving {}", request.url.path)
    return failure(500, str(exc) or exc.__class__.__name__)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FetchError, fetch_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
