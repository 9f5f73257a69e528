"""Bearer token authentication for every API request."""
import hmac
import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.security.utils import get_authorization_scheme_param
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized request"


def token_matches(presented: str, expected: str) -> bool:
    """Compare tokens in constant time."""
    return hmac.compare_digest(presented.encode(), expected.encode())


def bearer_token(authorization: str | None) -> str | None:
    """Return the credential of a `Bearer` Authorization header, or None."""
    scheme, credentials = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not credentials:
        return None
    return credentials


def unauthorized_response() -> JSONResponse:
    """Build the 401 sent for any request without the configured token."""
    return JSONResponse(
        status_code=401,
        content={"error": UNAUTHORIZED_MESSAGE},
        headers={"WWW-Authenticate": "Bearer"},
    )


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """
    Reject requests that do not carry the configured bearer token.

    Runs before routing, so unknown paths are gated as well and no request body
    is read for a rejected request.
    """

    def __init__(self, app: ASGIApp, api_token: str) -> None:
        super().__init__(app)
        self.api_token = api_token

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Check the Authorization header and short-circuit on failure."""
        token = bearer_token(request.headers.get("Authorization"))
        if token is None or not token_matches(token, self.api_token):
            logger.warning(
                "Unauthorized request to %s %s", request.method, request.url.path,
            )
            return unauthorized_response()
        return await call_next(request)
