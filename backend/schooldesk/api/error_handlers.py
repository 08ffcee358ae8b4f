"""Error Handlers: global exception handlers producing failure envelopes.

Invariants:
    - SchoolDeskError -> its own http_status + to_response()
    - RequestValidationError -> 400 with field-level details
    - Starlette HTTPException (e.g. unknown route) -> envelope with path
    - Exception (catch-all) -> 500, never leaks internal details
    - Every failure envelope has success=false and a message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schooldesk.core.envelope import build_envelope
from schooldesk.core.errors import SchoolDeskError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SchoolDeskError)
    async def domain_error_handler(request: Request, exc: SchoolDeskError):
        logger.error(
            f"SchoolDeskError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Endpoint not found"
        else:
            message = str(exc.detail)
        logger.warning(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        content = build_envelope(message, success=False)
        content["path"] = request.url.path
        return JSONResponse(status_code=exc.status_code, content=content)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True, extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_envelope("Internal server error", success=False),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    content = build_envelope("Invalid request data", success=False)
    content["errors"] = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return content
