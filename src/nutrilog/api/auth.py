"""Firebase bearer token authentication for API routes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from enum import Enum
from typing import TYPE_CHECKING, Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

_logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthFailure(str, Enum):
    """Reasons a request is rejected by the auth gate."""

    MISSING_TOKEN = "Unauthorized: missing token"
    INVALID_TOKEN = "Unauthorized: invalid token"


class Unauthorized(Exception):
    """Raised when a request cannot be authenticated."""

    def __init__(self, reason: AuthFailure) -> None:
        super().__init__(reason.value)
        self.reason = reason


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :] or None


async def authenticate(request: Request) -> dict[str, object]:
    """Verify the bearer token and attach the decoded claims to the request.

    Claims already attached to the request are reused, so a token is
    verified at most once per request.
    """
    decoded = getattr(request.state, "firebase_user", None)
    if decoded is not None:
        return decoded

    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise Unauthorized(AuthFailure.MISSING_TOKEN)

    container: AppContainer = request.app.state.container
    try:
        decoded = await container.token_verifier.verify(token)
    except Exception as exc:
        _logger.exception("Firebase token verification failed")
        raise Unauthorized(AuthFailure.INVALID_TOKEN) from exc

    request.state.firebase_user = decoded
    return decoded


async def require_firebase_user(request: Request) -> dict[str, object]:
    """Dependency returning the verified Firebase claims for the request."""
    return await authenticate(request)


class FirebaseAuthRoute(APIRoute):
    """Route that authenticates before the request body is parsed."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            await authenticate(request)
            return await handler(request)

        return authenticated_handler


async def unauthorized_handler(_request: Request, exc: Unauthorized) -> JSONResponse:
    """Render auth failures as 401 responses."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED, content={"error": exc.reason.value}
    )
