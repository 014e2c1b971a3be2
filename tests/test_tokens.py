"""
Tests for bearer token issuing / verification.
"""

import jwt
import pytest

from auth.tokens import IdentityClaim, TokenService

SECRET = "unit-test-secret"
T0 = 1_700_000_000


class _Clock:
    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTokenService:
    def setup_method(self):
        self.clock = _Clock(T0)
        self.tokens = TokenService(SECRET, expiry_seconds=3600, clock=self.clock)

    def test_issue_then_verify_returns_email(self):
        claim = self.tokens.verify(self.tokens.issue("a@example.com"))
        assert claim == IdentityClaim(email="a@example.com", issued_at=T0, expires_at=T0 + 3600)

    def test_token_is_standard_hs256_jwt(self):
        token = self.tokens.issue("a@example.com")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert payload["email"] == "a@example.com"
        assert payload["exp"] - payload["iat"] == 3600

    def test_accepted_at_59_minutes(self):
        token = self.tokens.issue("a@example.com")
        self.clock.now = T0 + 59 * 60
        assert self.tokens.verify(token) is not None

    def test_rejected_at_61_minutes(self):
        token = self.tokens.issue("a@example.com")
        self.clock.now = T0 + 61 * 60
        assert self.tokens.verify(token) is None

    def test_rejected_exactly_at_expiry(self):
        token = self.tokens.issue("a@example.com")
        self.clock.now = T0 + 3600
        assert self.tokens.verify(token) is None

    def test_wrong_secret_rejected(self):
        other = TokenService("another-secret", clock=self.clock)
        assert self.tokens.verify(other.issue("a@example.com")) is None

    def test_tampered_payload_rejected(self):
        forged = jwt.encode(
            {"email": "admin@example.com", "iat": T0, "exp": T0 + 3600},
            "guessed-secret",
            algorithm="HS256",
        )
        assert self.tokens.verify(forged) is None

    def test_unsigned_token_rejected(self):
        unsigned = jwt.encode({"email": "a@example.com", "exp": T0 + 3600}, None, algorithm="none")
        assert self.tokens.verify(unsigned) is None

    def test_garbage_rejected(self):
        assert self.tokens.verify("not.a.token") is None
        assert self.tokens.verify("") is None

    def test_missing_email_claim_rejected(self):
        token = jwt.encode({"sub": "x", "exp": T0 + 3600}, SECRET, algorithm="HS256")
        assert self.tokens.verify(token) is None

    def test_empty_secret_is_fatal(self):
        with pytest.raises(ValueError):
            TokenService("")
