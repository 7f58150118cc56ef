"""
Error taxonomy and JSON error rendering.

Services raise subclasses of ``ApiError``; the handlers registered by
``register_exception_handlers`` turn them into JSON bodies of the form
``{"error": "..."}`` (plus ``"errors": [...]`` for validation
failures) with the matching HTTP status code.  Routing errors raised
by Starlette (unknown path, wrong method) and request parsing errors
raised by FastAPI are rendered in the same shape so that clients only
ever have to look at the ``error`` key.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.headers = headers

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class BadRequestError(ApiError):
    """A required body field is missing."""

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationFailedError(ApiError):
    """Submitted post data failed validation.

    Carries every individual problem in ``errors`` so the editor can
    show all of them at once.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "errors": self.errors}


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(ApiError):
    """The database could not be opened or a statement failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _routing_error_message(request: Request, status_code: int) -> str:
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return "Method not allowed"
    if status_code == status.HTTP_404_NOT_FOUND:
        segments = [s for s in request.url.path.split("/") if s]
        prefix = request.app.state.settings.api_prefix.strip("/")
        if segments and prefix and segments[0] == prefix:
            segments = segments[1:]
        if segments and segments[0] == "admin":
            return "Admin endpoint not found"
        return "Resource not found"
    return "Request failed"


def _format_validation_error(error: Dict[str, Any]) -> str:
    if error.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render router‑level 404/405 responses as ``{"error": ...}``."""
    message = _routing_error_message(request, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are a client error (400).

    FastAPI parses the body before any dependency runs.  Routes marked
    with ``auth_guard`` (see ``api.deps.admin_only``) answer 401
    first when the caller is not authenticated.
    """
    endpoint = request.scope.get("endpoint") or getattr(request.scope.get("route"), "endpoint", None)
    guard = getattr(endpoint, "auth_guard", None)
    if guard is not None:
        try:
            await guard(request)
        except ApiError as auth_error:
            return await api_error_handler(request, auth_error)

    errors = [_format_validation_error(err) for err in exc.errors()]
    logger.debug("Rejected request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"Internal server error: {exc.__class__.__name__}"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
