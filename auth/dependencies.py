"""
FastAPI dependencies for authentication.

Provides the service accessors and ``get_current_email``, the guard used
by every protected route.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.password import PasswordHasher
from auth.store import CredentialStore
from auth.tokens import IdentityClaim, TokenService
from database.session import get_db_session

# auto_error=False: missing / non-Bearer headers are rejected below with a bare 401
_bearer_scheme = HTTPBearer(auto_error=False)


class Unauthenticated(Exception):
    """No Authorization header, or not of the form ``Bearer <token>``."""


class InvalidToken(Exception):
    """Bad signature, malformed payload, or expired token."""


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


async def get_credential_store(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> CredentialStore:
    return CredentialStore(session, hasher, tokens)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> IdentityClaim:
    """
    Extract and verify the Bearer token, attaching the verified identity
    to ``request.state.user_email``.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    claim = tokens.verify(credentials.credentials)
    if claim is None:
        raise InvalidToken()

    request.state.user_email = claim.email
    return claim


async def get_current_email(
    claim: IdentityClaim = Depends(get_current_identity),
) -> str:
    return claim.email
