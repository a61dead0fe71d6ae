"""Small form-field checks shared by registration and entry forms."""

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Union


Number = Union[int, float, Decimal]

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

MIN_PASSWORD_LENGTH = 8


def validate_email_string(email: str) -> str:
    """Return an error message, or "" if the address is acceptable."""
    if not email:
        return "Email is required"
    if not _EMAIL_PATTERN.match(email):
        return "Invalid email format"
    return ""


def validate_password_string(password: str) -> str:
    """Return an error message, or "" if the password is acceptable."""
    if not password:
        return "Password is required"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return ""


def validate_required(value: Any) -> bool:
    """A value counts as provided unless it is None, blank or an empty collection."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) > 0
    return True


def validate_max_length(value: str, max_length: int) -> bool:
    return len(value) <= max_length


def validate_min_value(value: Number, min_value: Number) -> bool:
    return value >= min_value


def validate_max_value(value: Number, max_value: Number) -> bool:
    return value <= max_value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def validate_decimal_volume(volume: Any) -> bool:
    """Fuel volume must be a positive number; decimals are fine."""
    return _is_number(volume) and volume > 0


def validate_zero_cost(cost: Any) -> bool:
    """Fuel cost may be zero (free fuel) but not negative."""
    return _is_number(cost) and cost >= 0
