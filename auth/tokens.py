"""
Bearer token issuing and verification.

Tokens are HS256 JWTs carrying the user's ``email`` plus ``iat`` / ``exp``.
The signing key comes from ``Settings.jwt_secret`` (env var: ``JWT_SECRET``)
and is handed to :class:`TokenService` once at startup.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import jwt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityClaim:
    """Signature-verified token payload."""

    email: str
    issued_at: int
    expires_at: int


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        expiry_seconds: int = 3600,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must be a non-empty string")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock
        self.expiry_seconds = expiry_seconds

    def issue(self, email: str) -> str:
        """Sign ``{email}`` with an expiry of now + ``expiry_seconds``."""
        now = int(self._clock())
        payload = {
            "email": email,
            "iat": now,
            "exp": now + self.expiry_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[IdentityClaim]:
        """
        Return the verified claim, or ``None`` when the signature does not
        match, the payload is malformed, or the token has expired.
        """
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["email", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected token: %s", exc)
            return None

        email = payload.get("email")
        exp = payload.get("exp")
        if not isinstance(email, str) or not isinstance(exp, (int, float)):
            logger.debug("Rejected token: malformed claims")
            return None
        if self._clock() >= exp:
            logger.debug("Rejected token for %s: expired", email)
            return None

        return IdentityClaim(
            email=email,
            issued_at=int(payload.get("iat", exp - self.expiry_seconds)),
            expires_at=int(exp),
        )
