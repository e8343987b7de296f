"""Error Handlers — global exception handlers for the message board API.

Invariants:
    - MsgBoardError -> structured JSON with error code, message, severity
    - RequestValidationError -> 400 with field-level details, except an
      undecodable body on /user* or addMessage, which gets that route's fixed 400
    - Exception (catch-all) -> never leaks internal details

Design Decisions:
    - Routes map expected failures themselves; these handlers only see what
      escapes a route
    - Extracted from main.py to keep the app factory short
    - The MsgBoardError handler is a safety net: repositories raise these and
      services turn them into Err, so today only a route bug reaches it
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from msgboard.core.errors import ErrorSeverity, MsgBoardError

logger = logging.getLogger(__name__)

INVALID_USER_BODY = "Invalid user body"
INVALID_REQUEST = "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MsgBoardError)
    async def msgboard_error_handler(request: Request, exc: MsgBoardError):
        """Handle all message board domain/infrastructure errors."""
        logger.error(
            f"MsgBoardError: {exc.message}",
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
        )
        if _is_undecodable_body(exc):
            fixed = _undecodable_body_response(request.url.path)
            if fixed is not None:
                return fixed
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _is_undecodable_body(exc: RequestValidationError) -> bool:
    return any(e.get("type") == "json_invalid" for e in exc.errors())


def _undecodable_body_response(path: str):
    """Same fixed 400 the route gives for a well-formed but invalid body."""
    if path.startswith("/user"):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_USER_BODY},
        )
    if path == "/messaging/addMessage":
        return PlainTextResponse(
            INVALID_REQUEST, status_code=status.HTTP_400_BAD_REQUEST,
        )
    return None


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
