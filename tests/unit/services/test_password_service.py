"""Tests for PasswordHashingService."""

import pytest

from mangle_identity.exceptions import WeakPasswordError
from mangle_identity.services import PasswordHashingService


class TestPasswordHashingService:
    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_hash_is_not_the_plaintext(self):
        hashed = self.service.hash("correct-horse")
        assert hashed != "correct-horse"
        assert hashed.startswith("$2")

    def test_same_password_hashes_differently(self):
        """Each hash gets its own salt."""
        assert self.service.hash("correct-horse") != self.service.hash("correct-horse")

    def test_verify_accepts_matching_password(self):
        hashed = self.service.hash("correct-horse")
        assert self.service.verify("correct-horse", hashed) is True

    def test_verify_rejects_wrong_password(self):
        hashed = self.service.hash("correct-horse")
        assert self.service.verify("wrong-horse", hashed) is False

    @pytest.mark.parametrize("stored", [None, ""])
    def test_verify_without_stored_hash_fails(self, stored):
        assert self.service.verify("correct-horse", stored) is False

    def test_verify_with_malformed_hash_fails(self):
        assert self.service.verify("correct-horse", "not-a-bcrypt-hash") is False

    def test_verify_empty_password_fails(self):
        hashed = self.service.hash("correct-horse")
        assert self.service.verify("", hashed) is False

    @pytest.mark.parametrize("password", ["", "short", "x" * 73])
    def test_hash_rejects_weak_passwords(self, password):
        with pytest.raises(WeakPasswordError):
            self.service.hash(password)

    def test_boundary_lengths_are_accepted(self):
        self.service.validate_strength("x" * 8)
        self.service.validate_strength("x" * 72)

    def test_limit_counts_utf8_bytes_not_characters(self):
        """40 two-byte characters exceed bcrypt's 72 byte input limit."""
        with pytest.raises(WeakPasswordError):
            self.service.hash("\u00e9" * 40)

    def test_verify_overlong_password_fails(self):
        hashed = self.service.hash("correct-horse")
        assert self.service.verify("x" * 100, hashed) is False
