"""Identity Provider — signed, timestamped session tokens.

Invariants:
    - Token payload is the user id only; signature + timestamp via itsdangerous
    - Token read from the session cookie first, then "Authorization: Bearer <token>"
    - Bad signature, expired token or malformed payload → no session (never an exception)
    - current_session() reads live request state on every call; nothing is cached
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import Request
from itsdangerous import BadSignature, SignatureExpired, TimestampSigner

from pressroom.core.domain_types import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionInfo:
    user_id: UserId


class SignedTokenIdentity:
    """Issues and verifies session tokens."""

    def __init__(self, secret: str, max_age_seconds: int, cookie_name: str):
        self._signer = TimestampSigner(secret, salt="pressroom-session")
        self.max_age_seconds = max_age_seconds
        self.cookie_name = cookie_name

    def issue(self, user_id: UUID) -> str:
        return self._signer.sign(str(user_id)).decode()

    def verify(self, token: str | None) -> SessionInfo | None:
        if not token:
            return None
        try:
            raw = self._signer.unsign(token, max_age=self.max_age_seconds).decode()
            return SessionInfo(user_id=UserId(UUID(raw)))
        except SignatureExpired:
            logger.info("Session token expired")
            return None
        except (BadSignature, ValueError):
            logger.warning("Rejected malformed session token")
            return None

    def current_session(self, request: Request) -> SessionInfo | None:
        token = request.cookies.get(self.cookie_name)
        if not token:
            auth = request.headers.get("authorization", "")
            scheme, _, credentials = auth.partition(" ")
            if scheme.lower() == "bearer":
                token = credentials.strip()
        return self.verify(token)
