"""Unit tests for answer validators (wppg.validators).

Tests cover:
- validate_not_empty
- validate_email (email-validator backed, .test domains allowed)
- validate_password policy (length, character classes)
- validate_port bounds and string inputs
- validate_db_prefix
"""

from __future__ import annotations

import pytest

from wppg.validators import (
    PASSWORD_SYMBOLS,
    ValidationError,
    validate_db_prefix,
    validate_email,
    validate_not_empty,
    validate_password,
    validate_port,
)

pytestmark = pytest.mark.unit


class TestValidateNotEmpty:
    def test_accepts_text(self):
        assert validate_not_empty("My project") == "My project"

    @pytest.mark.parametrize("answer", ["", "   ", None])
    def test_rejects_blank(self, answer):
        with pytest.raises(ValidationError):
            validate_not_empty(answer)


class TestValidateEmail:
    def test_accepts_default_address(self):
        assert validate_email("adminwp@example.com") == "adminwp@example.com"

    @pytest.mark.parametrize("answer", ["x@acme.test", "admin@dev.acme.test"])
    def test_accepts_test_domain(self, answer):
        assert validate_email(answer) == answer

    @pytest.mark.parametrize("answer", ["", "adminwp", "admin@", "@example.com", "a b@example.com"])
    def test_rejects_invalid(self, answer):
        with pytest.raises(ValidationError, match="email"):
            validate_email(answer)


class TestValidatePassword:
    def test_accepts_minimal_complex_password(self):
        assert validate_password("Aa1!aaaaaaaa") == "Aa1!aaaaaaaa"

    def test_rejects_eleven_characters(self):
        with pytest.raises(ValidationError):
            validate_password("Aa1!aaaaaaa")

    def test_rejects_missing_digit(self):
        with pytest.raises(ValidationError):
            validate_password("Aab!aaaaaaaa")

    def test_rejects_missing_uppercase(self):
        with pytest.raises(ValidationError):
            validate_password("aa1!aaaaaaaa")

    def test_rejects_missing_lowercase(self):
        with pytest.raises(ValidationError):
            validate_password("AA1!AAAAAAAA")

    def test_rejects_missing_symbol(self):
        with pytest.raises(ValidationError):
            validate_password("Aa1aaaaaaaaa")

    def test_symbol_outside_set_does_not_count(self):
        with pytest.raises(ValidationError):
            validate_password("Aa1~aaaaaaaa")

    @pytest.mark.parametrize("symbol", list(PASSWORD_SYMBOLS))
    def test_every_listed_symbol_counts(self, symbol):
        candidate = f"Aa1{symbol}aaaaaaaa"
        assert validate_password(candidate) == candidate

    def test_message_lists_requirements(self):
        with pytest.raises(ValidationError, match="at least 12 characters"):
            validate_password("short")


class TestValidatePort:
    @pytest.mark.parametrize(
        "answer", [0, 65536, "-1", "0", "65536", "http", "", True, "1_000", "+80", "\u0668\u0660"]
    )
    def test_rejects_out_of_range_or_garbage(self, answer):
        with pytest.raises(ValidationError, match="Invalid port number"):
            validate_port(answer)

    @pytest.mark.parametrize("answer,expected", [(1, 1), (65535, 65535), ("80", 80), (" 3306 ", 3306)])
    def test_accepts_valid_ports(self, answer, expected):
        assert validate_port(answer) == expected


class TestValidateDbPrefix:
    @pytest.mark.parametrize("answer", ["wppg_", "wp", "My_Site2_"])
    def test_accepts_identifiers(self, answer):
        assert validate_db_prefix(answer) == answer

    @pytest.mark.parametrize("answer", ["", "wp-", "wp prefix", "wp;"])
    def test_rejects_unsafe(self, answer):
        with pytest.raises(ValidationError):
            validate_db_prefix(answer)
