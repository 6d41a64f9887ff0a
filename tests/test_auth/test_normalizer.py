"""Tests for credential validation and normalization."""

import pytest

from app.auth.errors import CredentialValidationError
from app.auth.normalizer import email_domain, normalize_credentials, normalize_email


class TestNormalizeEmail:
    """Tests for normalize_email."""

    @pytest.mark.parametrize(
        "raw",
        [
            "User@Example.COM",
            "  usr@gmail.com  ",
            "\tMiXeD.Case+tag@Sub.Domain.io\n",
            "already@normal.org",
        ],
    )
    def test_trims_and_lowercases(self, raw):
        """normalize(e) == lower(trim(e))."""
        assert normalize_email(raw) == raw.strip().lower()

    @pytest.mark.parametrize("raw", ["  A@B.COM ", "x@y.io", " Z@Q.NET"])
    def test_idempotent(self, raw):
        """Normalizing twice changes nothing."""
        once = normalize_email(raw)
        assert normalize_email(once) == once

    def test_email_domain(self):
        assert email_domain("usr@gmail.com") == "gmail.com"
        assert email_domain("no-at-sign") == "unknown"


class TestNormalizeCredentials:
    """Tests for normalize_credentials."""

    def test_returns_normalized_email(self):
        credentials = normalize_credentials("  Usr@GMAIL.com ", "123456")

        assert credentials.email == "usr@gmail.com"
        assert credentials.password == "123456"

    def test_password_is_not_modified(self):
        credentials = normalize_credentials("usr@gmail.com", "  Secret Pass ")

        assert credentials.password == "  Secret Pass "

    def test_rejects_malformed_email(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials("not-an-email", "123456")

        assert exc_info.value.message == "Please enter a valid email address"
        assert exc_info.value.field == "email"

    def test_rejects_empty_email(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials("   ", "123456")

        assert exc_info.value.message == "Email is required"

    def test_rejects_overlong_email(self):
        email = "a" * 250 + "@gmail.com"

        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials(email, "123456")

        assert exc_info.value.message == "Email must be less than 255 characters"

    def test_rejects_short_password(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials("usr@gmail.com", "123")

        assert exc_info.value.message == "Password must be at least 6 characters"
        assert exc_info.value.field == "password"

    def test_respects_configured_minimum(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials("usr@gmail.com", "1234567", min_password_length=10)

        assert "at least 10 characters" in exc_info.value.message

        credentials = normalize_credentials("usr@gmail.com", "1234567", min_password_length=4)
        assert credentials.password == "1234567"

    def test_rejects_empty_password(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials("usr@gmail.com", "")

        assert exc_info.value.message == "Password is required"

    def test_first_violated_rule_wins(self):
        """Email rules are reported before password rules."""
        with pytest.raises(CredentialValidationError) as exc_info:
            normalize_credentials("bad", "1")

        assert exc_info.value.field == "email"
        assert exc_info.value.message == "Please enter a valid email address"
