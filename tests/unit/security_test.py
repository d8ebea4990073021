"""Tests for the admin password check and password hashing."""

import logging

import pytest

from ellagarden_api.app.core.security import hash_password, is_admin_password, verify_password


class TestAdminPassword:
    def test_default_password_when_secret_unset(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="ellagarden_api.app.core.security"):
            assert is_admin_password("admin", "") is True
        assert "AUTH_SECRET is not set" in caplog.text

    def test_none_secret_behaves_like_unset(self) -> None:
        assert is_admin_password("admin", None) is True
        assert is_admin_password("Admin", None) is False

    def test_configured_secret(self) -> None:
        assert is_admin_password("hemligt", "hemligt") is True
        assert is_admin_password("admin", "hemligt") is False
        assert is_admin_password("", "hemligt") is False

    def test_missing_password(self) -> None:
        assert is_admin_password(None, "hemligt") is False

    def test_non_ascii_secret(self) -> None:
        assert is_admin_password("lösenord", "lösenord") is True


class TestPasswordHashing:
    def test_round_trip(self) -> None:
        hashed = hash_password("korrekt häst")
        assert "$" in hashed
        assert verify_password("korrekt häst", hashed) is True
        assert verify_password("fel", hashed) is False

    def test_salted(self) -> None:
        assert hash_password("samma") != hash_password("samma")

    def test_malformed_hash(self) -> None:
        assert verify_password("x", "not-a-hash") is False
        assert verify_password("x", "zz$zz") is False
