from logging import getLogger
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi_users.exceptions import InvalidPasswordException, UserAlreadyExists
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.tokens import ExpiredToken, MalformedToken
from api_responses.formatter import envelope, error_response
from api_responses.result import AppError, Err, ErrorKind

logger = getLogger('errors')


def unauthenticated() -> Err:
    return Err(ErrorKind.UNAUTHENTICATED, "Failed to Authenticate", {"tokenExpired": 0})


def malformed_token() -> Err:
    return Err(ErrorKind.MALFORMED_TOKEN, "Corrupt Token", {"tokenExpired": 0})


def expired_token() -> Err:
    return Err(ErrorKind.EXPIRED_TOKEN, "Token Expired", {"tokenExpired": 1})


def internal_error() -> Err:
    return Err(ErrorKind.INTERNAL, "Internal server error")


def extract_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for error in exc.errors():
        # the first loc element is the source ("body", "path", ...)
        loc = [str(part) for part in error.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return errors


def classify(exc: Exception) -> Err:
    """Map a caught exception onto the error taxonomy."""
    if isinstance(exc, AppError):
        return exc.err
    if isinstance(exc, RequestValidationError):
        return Err(ErrorKind.VALIDATION_FAILED, "Validation failed", {"errors": extract_errors(exc)})
    if isinstance(exc, ExpiredToken):
        return expired_token()
    if isinstance(exc, MalformedToken):
        return malformed_token()
    if isinstance(exc, UserAlreadyExists):
        return Err(ErrorKind.CONFLICT, "A user with this email already exists")
    if isinstance(exc, InvalidPasswordException):
        return Err(ErrorKind.VALIDATION_FAILED, "Validation failed",
                   {"errors": [{"field": "password", "message": str(exc.reason)}]})

    logger.warning("Unhandled %s: %s", type(exc).__name__, exc)
    return internal_error()


async def app_error_handler(request: Request, exc: Exception):
    return error_response(classify(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return envelope(exc.status_code, {}, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(internal_error())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
