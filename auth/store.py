"""
Credential store — user registration and login.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.password import PasswordHasher
from auth.tokens import TokenService
from database.models import User

logger = logging.getLogger(__name__)


class EmailAlreadyRegistered(Exception):
    def __init__(self, email: str) -> None:
        super().__init__("Email already registered")
        self.email = email


class CredentialStore:
    def __init__(
        self,
        session: AsyncSession,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.session = session
        self.hasher = hasher
        self.tokens = tokens

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, email: str, password: str) -> User:
        """Hash the password and store a new user. Emails are unique."""
        if await self.find_by_email(email) is not None:
            raise EmailAlreadyRegistered(email)

        user = User(email=email, password_hash=self.hasher.hash(password))
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration
            await self.session.rollback()
            raise EmailAlreadyRegistered(email) from exc

        logger.info("Registered user %s", email)
        return user

    async def login(self, email: str, password: str) -> Optional[str]:
        """
        Return a bearer token for valid credentials, else ``None``.

        Unknown email and wrong password are deliberately indistinguishable.
        """
        user = await self.find_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for %s", email)
            return None

        logger.info("Login: %s", email)
        return self.tokens.issue(user.email)
