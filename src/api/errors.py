"""
Translation of exceptions into HTTP error responses.

Client errors use the body shape `{"error": {"message": "..."}}`. The
authentication failure, `{"error": "Unauthorized request"}`, is produced by
`core.auth.BearerTokenMiddleware` before routing. Server errors never expose
internal detail.
"""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from services.exceptions import (
    BookmarkNotFoundError,
    BookmarkValidationError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an error response with the standard body shape."""
    return JSONResponse(status_code=status_code, content={"error": {"message": message}})


async def validation_error_handler(
    _request: Request, exc: BookmarkValidationError,
) -> JSONResponse:
    """Report the first violated input rule."""
    return error_response(400, exc.message)


async def not_found_handler(_request: Request, exc: BookmarkNotFoundError) -> JSONResponse:
    """Report a bookmark id that matched no row."""
    return error_response(404, str(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """
    Map framework-level validation failures.

    A path id that is not an integer can never match a row, so it is reported as
    not found. Anything else is a malformed body.
    """
    if any(error["loc"][:1] == ("path",) for error in exc.errors()):
        logger.warning("Bookmark not found for path %s", request.url.path)
        return error_response(404, "Bookmark Not Found")
    return error_response(400, "Request body must be a JSON object")


async def store_unavailable_handler(
    _request: Request, exc: StoreUnavailableError,
) -> JSONResponse:
    """Report a backend failure without leaking its cause."""
    logger.error("Request failed, store unavailable during %s", exc.operation)
    return error_response(503, "Service unavailable")


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Last-resort conversion of unexpected errors into a generic 500.

    Installed innermost, so the 500 still passes back through the hardening,
    logging and CORS middleware like any other response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Run the request and replace any escaped exception with a 500."""
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error for %s %s", request.method, request.url.path)
            return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(BookmarkValidationError, validation_error_handler)
    app.add_exception_handler(BookmarkNotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
