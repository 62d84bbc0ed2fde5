"""
Validation utilities shared by request models
"""
import re

from finhelper.config import get_settings


def validate_currency(value: str) -> str:
    """
    Currency code check: three upper-case latin letters from the supported set

    Example:
        >>> validate_currency("USD")
        "USD"
        >>> validate_currency("usd")
        ValueError: currency must be one of RUB, USD, EUR
    """
    supported = get_settings().SUPPORTED_CURRENCIES
    if not re.fullmatch(r"[A-Z]{3}", value) or value not in supported:
        raise ValueError(f"currency must be one of {', '.join(supported)}")
    return value


def validate_name(value: str, field: str = "name") -> str:
    """Strip surrounding whitespace, reject empty names"""
    value = value.strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value


def validate_username(value: str) -> str:
    """Latin letters, digits and underscore, 3 to 64 characters"""
    if not re.fullmatch(r"[A-Za-z0-9_]{3,64}", value):
        raise ValueError("username must be 3-64 characters: letters, digits, underscore")
    return value


def validate_email(value: str) -> str:
    value = value.strip()
    if not re.fullmatch(r"[^@\s]+@[^@\s]+\.[^@\s]+", value):
        raise ValueError("email is not valid")
    return value.lower()
