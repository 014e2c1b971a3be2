"""
Tests for bcrypt password hashing.
"""

from auth.password import PasswordHasher


class TestPasswordHasher:
    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_then_verify(self):
        hashed = self.hasher.hash("correct horse")
        assert hashed != "correct horse"
        assert self.hasher.verify("correct horse", hashed)

    def test_wrong_password_rejected(self):
        hashed = self.hasher.hash("correct horse")
        assert not self.hasher.verify("battery staple", hashed)

    def test_salt_differs_per_call(self):
        assert self.hasher.hash("same") != self.hasher.hash("same")

    def test_work_factor_embedded(self):
        assert PasswordHasher(rounds=10).hash("pw").startswith("$2b$10$")

    def test_malformed_hash_returns_false(self):
        assert self.hasher.verify("pw", "not-a-bcrypt-hash") is False
        assert self.hasher.verify("pw", "") is False
        assert self.hasher.verify("pw", None) is False

    def test_empty_password_is_hashable(self):
        hashed = self.hasher.hash("")
        assert self.hasher.verify("", hashed)
        assert not self.hasher.verify("x", hashed)

    def test_long_password_only_first_72_bytes_count(self):
        base = "a" * 72
        hashed = self.hasher.hash(base + "tail-one")
        assert self.hasher.verify(base + "tail-two", hashed)
