# File: tests/test_validators.py
"""Tests for core validation utilities."""

from decimal import Decimal

import pytest

from bizpass.core.validators import (
    blank_to_none,
    sanitize_html,
    validate_currency,
    validate_email,
    validate_optional_currency,
    validate_phone,
    validate_positive_int,
    validate_required_text,
    validate_url,
)


class TestValidateCurrency:
    """Test currency validation."""

    def test_negative_currency_fails(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_currency(Decimal("-10.00"))

    def test_exceeds_max_fails(self):
        with pytest.raises(ValueError, match="exceeds maximum"):
            validate_currency(Decimal("99999999999.00"))

    def test_invalid_format_fails(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            validate_currency("invalid")

    def test_non_finite_fails(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            validate_currency("NaN")

    def test_rounds_to_cents(self):
        assert validate_currency("12.5") == Decimal("12.50")

    def test_optional_currency_blank_is_none(self):
        assert validate_optional_currency("") is None
        assert validate_optional_currency(None) is None
        assert validate_optional_currency("3") == Decimal("3.00")


class TestValidatePositiveInt:
    """Test capacity-style integer parsing."""

    def test_blank_is_none(self):
        assert validate_positive_int("  ", "Max capacity") is None

    def test_parses_string(self):
        assert validate_positive_int("250", "Max capacity") == 250

    @pytest.mark.parametrize("value", ["0", "-3", "ten", "2.5", True])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError, match="Max capacity"):
            validate_positive_int(value, "Max capacity")


class TestTextValidators:
    """Required text, contact fields and sanitization."""

    def test_required_text_strips(self):
        assert validate_required_text("  Kente Works ", "Business name") == "Kente Works"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required_text_rejects_empty(self, value):
        with pytest.raises(ValueError, match="Business name is required"):
            validate_required_text(value, "Business name")

    def test_blank_to_none(self):
        assert blank_to_none("") is None
        assert blank_to_none(" x ") == " x "
        assert blank_to_none(5) == 5

    def test_phone(self):
        assert validate_phone(" +233 (20) 123-4567 ") == "+233 (20) 123-4567"
        with pytest.raises(ValueError):
            validate_phone("call me")

    def test_email_is_lowercased(self):
        assert validate_email("Owner@Example.COM") == "owner@example.com"
        assert validate_email("") is None

    def test_url_requires_scheme(self):
        assert validate_url("https://instagram.com/shop") == "https://instagram.com/shop"
        with pytest.raises(ValueError):
            validate_url("instagram.com/shop")

    def test_sanitize_html_strips_tags(self):
        assert sanitize_html("<script>alert(1)</script>Hello") == "alert(1)Hello"
        assert sanitize_html("<b></b>") is None
