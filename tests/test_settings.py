"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings


class TestSettings:
    def setup_method(self):
        self.env_vars = ("JWT_SECRET", "DATABASE_URL", "MONGODB_URI")

    def _clear_env(self, monkeypatch):
        for name in self.env_vars:
            monkeypatch.delenv(name, raising=False)

    def test_missing_jwt_secret_is_fatal(self, monkeypatch):
        self._clear_env(monkeypatch)
        with pytest.raises(ValidationError, match="jwt_secret"):
            Settings(_env_file=None)

    def test_jwt_secret_from_env(self, monkeypatch):
        self._clear_env(monkeypatch)
        monkeypatch.setenv("JWT_SECRET", "from-env")

        settings = Settings(_env_file=None)
        assert settings.jwt_secret == "from-env"
        assert settings.jwt_expiry_seconds == 3600
        assert settings.port == 5001

    def test_database_url_env(self, monkeypatch):
        self._clear_env(monkeypatch)
        monkeypatch.setenv("JWT_SECRET", "x")
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///primary.db")
        monkeypatch.setenv("MONGODB_URI", "sqlite+aiosqlite:///fallback.db")

        assert Settings(_env_file=None).database_url == "sqlite+aiosqlite:///primary.db"

    def test_mongodb_uri_accepted_as_fallback(self, monkeypatch):
        self._clear_env(monkeypatch)
        monkeypatch.setenv("JWT_SECRET", "x")
        monkeypatch.setenv("MONGODB_URI", "sqlite+aiosqlite:///fallback.db")

        assert Settings(_env_file=None).database_url == "sqlite+aiosqlite:///fallback.db"

    def test_explicit_database_url_argument(self, monkeypatch):
        self._clear_env(monkeypatch)
        settings = Settings(_env_file=None, jwt_secret="x", database_url="sqlite+aiosqlite:///arg.db")
        assert settings.database_url == "sqlite+aiosqlite:///arg.db"
