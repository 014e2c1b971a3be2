"""
Auth API routes — register, login.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from auth.dependencies import get_credential_store
from auth.store import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> Response:
    """Register a new user. Responds 201 with an empty body."""
    await store.register(req.email, req.password)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> Any:
    """Login with email + password."""
    token = await store.login(req.email, req.password)
    if token is None:
        return PlainTextResponse("Invalid credentials", status_code=status.HTTP_401_UNAUTHORIZED)
    return {"token": token}
