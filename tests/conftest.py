"""
Shared fixtures: a fresh SQLite-backed app per test.
"""

from typing import Callable, Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.tokens import TokenService
from config.settings import Settings
from database.session import build_engine, build_session_factory, init_models
from main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        jwt_secret="test-jwt-secret",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
    )


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService(settings.jwt_secret)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client) -> Callable[..., Dict[str, str]]:
    """Register (if needed) and log in, returning an Authorization header."""

    def _login(email: str, password: str = "s3cret") -> Dict[str, str]:
        client.post("/api/register", json={"email": email, "password": password})
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login


@pytest_asyncio.fixture
async def db_session(settings):
    engine = build_engine(settings)
    assert await init_models(engine)
    async with build_session_factory(engine)() as session:
        yield session
    await engine.dispose()
