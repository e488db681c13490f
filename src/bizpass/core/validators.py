# File: src/bizpass/core/validators.py
"""Reusable validation utilities for form input."""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

MAX_CURRENCY = Decimal("9999999999.99")


def validate_required_text(value: str | None, field_name: str = "Field", max_length: int = 200) -> str:
    """
    Validate a required free-text field.

    Args:
        value: Text to validate
        field_name: Name for error messages
        max_length: Maximum length after stripping

    Returns:
        Stripped text

    Raises:
        ValueError: If empty or too long
    """
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")

    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValueError(f"{field_name} cannot exceed {max_length} characters")
    return cleaned


def blank_to_none(value: Any) -> Any:
    """Treat empty form strings as an unset value."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def validate_currency(value: Decimal | float | str, max_value: Decimal = MAX_CURRENCY) -> Decimal:
    """
    Validate currency input.

    Args:
        value: Currency value to validate
        max_value: Maximum allowed value (matches NUMERIC(12, 2))

    Returns:
        Decimal rounded to 2 decimal places

    Raises:
        ValueError: If value is not numeric, negative or exceeds max
    """
    try:
        decimal_value = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value}") from e

    if not decimal_value.is_finite():
        raise ValueError(f"Invalid amount: {value}")

    if decimal_value < 0:
        raise ValueError("Amount cannot be negative")

    if decimal_value > max_value:
        raise ValueError(f"Amount exceeds maximum allowed: {max_value}")

    return decimal_value.quantize(Decimal("0.01"))


def validate_optional_currency(value: Any) -> Decimal | None:
    """Empty or missing amounts are stored as null; anything else must be a valid amount."""
    value = blank_to_none(value)
    if value is None:
        return None
    return validate_currency(value)


def validate_positive_int(value: Any, field_name: str = "Value") -> int | None:
    """Parse an optional positive integer from form input."""
    value = blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a whole number")
    try:
        number = int(str(value).strip())
    except ValueError as e:
        raise ValueError(f"{field_name} must be a whole number") from e
    if number <= 0:
        raise ValueError(f"{field_name} must be greater than zero")
    return number


def validate_phone(value: str | None) -> str | None:
    """
    Validate phone number format.

    Returns:
        Validated phone or None if empty

    Raises:
        ValueError: If format is invalid
    """
    if not value or not value.strip():
        return None

    cleaned = value.strip()

    # Allow: digits, spaces, +, -, (, )
    if not re.match(r"^[0-9\s+\-()]+$", cleaned):
        raise ValueError("Phone can only contain digits, spaces, +, -, (, )")

    if len(re.sub(r"[^0-9]", "", cleaned)) < 5:
        raise ValueError("Phone must contain at least 5 digits")

    return cleaned


def validate_email(value: str | None) -> str | None:
    """Basic email format validation. Empty input is treated as unset."""
    if not value or not value.strip():
        return None

    cleaned = value.strip().lower()
    if not re.match(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$", cleaned):
        raise ValueError("Invalid email format")
    return cleaned


def validate_url(value: str | None) -> str | None:
    """Accept http(s) URLs; empty input is treated as unset."""
    if not value or not value.strip():
        return None

    cleaned = value.strip()
    if not re.match(r"^https?://[^\s]+$", cleaned, re.IGNORECASE):
        raise ValueError("URL must start with http:// or https://")
    return cleaned


def sanitize_html(value: str | None) -> str | None:
    """
    Strip/escape HTML tags to prevent XSS.

    Returns:
        Sanitized text or None if empty
    """
    if not value:
        return None

    cleaned = re.sub(r"<[^>]+>", "", value)
    cleaned = (
        cleaned.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )

    return cleaned.strip() if cleaned.strip() else None
