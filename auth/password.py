"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """One-way salted hashing; the salt is embedded in the returned hash."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash. Never raises."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode())
        except (ValueError, TypeError, AttributeError):
            return False
