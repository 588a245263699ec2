"""
Chefini API - Security Utilities.

Password validation and input helper functions.
"""

import uuid
from typing import Optional, Tuple

from settings import settings


def validate_password_strength(password: str) -> Tuple[bool, str]:
    """
    Validate password length requirements.

    Args:
        password: Password string to validate.

    Returns:
        Tuple[bool, str]: (is_valid, error_message)

    Example:
        >>> validate_password_strength("abc")
        (False, 'Password must be at least 6 characters long')
        >>> validate_password_strength("pantry1")
        (True, '')
    """
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"

    return True, ""


def normalize_email(email: str) -> str:
    """
    Normalize an email address for storage and lookup.

    Example:
        >>> normalize_email("  Chef@Example.COM ")
        'chef@example.com'
    """
    return email.strip().lower()


def sanitize_string(value: str, max_length: int = 255) -> str:
    """
    Sanitize a string by stripping whitespace and limiting length.

    Example:
        >>> sanitize_string("  Eggs  ")
        'Eggs'
    """
    return value.strip()[:max_length]


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    """
    Parse a public document id, returning None for malformed input.

    Example:
        >>> parse_uuid("not-a-uuid") is None
        True
    """
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None
