"""Centralized exception handlers for the FastAPI application.

Maps domain exceptions to HTTP responses so routers can let them
propagate.

Usage in main.py:
    from src.otoutil.api.exception_handlers import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.otoutil.utils.oto_parser import OtoParseError
from src.otoutil.utils.pitch_range import PitchRangeTooLargeError

logger = logging.getLogger(__name__)

# "Validation" errors -> 400
_BAD_REQUEST_EXCEPTIONS: list[type[Exception]] = [
    OtoParseError,
    PitchRangeTooLargeError,
]


def _make_handler(status_code: int):
    """Create an exception handler that returns a JSON error response.

    Args:
        status_code: HTTP status code to return.

    Returns:
        An async exception handler compatible with FastAPI.
    """

    async def handler(_request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc)},
        )

    return handler


async def _unhandled_exception_handler(
    request: Request, _exc: Exception
) -> JSONResponse:
    """Catch-all handler for unexpected exceptions.

    Logs the full traceback server-side but returns only a generic
    message to the client.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all centralized exception handlers on the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    bad_request_handler = _make_handler(400)
    for exc_class in _BAD_REQUEST_EXCEPTIONS:
        app.add_exception_handler(exc_class, bad_request_handler)

    # Catch-all for unhandled exceptions (must be registered last)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    logger.info("Registered centralized exception handlers")
