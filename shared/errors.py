"""
Typed failures raised by the services and mapped to HTTP responses at the edge.

Every error body is ``{"message": ...}``; validation failures add a list of
field-level ``errors``.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

logger = structlog.get_logger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]], message: str | None = None):
        self.errors = errors
        super().__init__(message or _summarise(errors))

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class DuplicateUser(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class _Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(_Unauthorized):
    message = "Invalid credentials"


class MissingToken(_Unauthorized):
    message = "No token provided"


class InvalidToken(_Unauthorized):
    message = "Invalid token"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InternalError(AppError):
    pass


def _summarise(errors: list[dict[str, str]]) -> str:
    if not errors:
        return ValidationError.message
    return "; ".join(f"{e['field']}: {e['message']}" for e in errors)


def field_error(field: str, message: str) -> dict[str, str]:
    return {"field": field, "message": message}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        # Drop the leading "body"/"path" location segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append(field_error(".".join(loc) or "body", err.get("msg", "invalid value")))
    return await app_error_handler(request, ValidationError(errors))


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"message": f"Rate limit exceeded: {exc.detail}"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    body = InternalError().to_dict()
    body["error"] = str(exc)
    return JSONResponse(status_code=InternalError.status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
