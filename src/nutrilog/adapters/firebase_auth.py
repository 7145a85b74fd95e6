"""Firebase ID token verification."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

import firebase_admin
from firebase_admin import auth


class TokenVerifier(Protocol):
    """Interface for identity token verification."""

    async def verify(self, token: str) -> dict[str, object]:
        """Verify a token and return its decoded claims."""


@dataclass
class FirebaseTokenVerifier(TokenVerifier):
    """Firebase Admin backed token verifier."""

    app: firebase_admin.App
    check_revoked: bool = False

    async def verify(self, token: str) -> dict[str, object]:
        """Verify a Firebase ID token without blocking the event loop."""
        return await asyncio.to_thread(
            auth.verify_id_token,
            token,
            app=self.app,
            check_revoked=self.check_revoked,
        )
