"""Chefini API - Utilities Package."""

from chefini.utils.security import (
    validate_password_strength,
    normalize_email,
    parse_uuid,
)
from chefini.utils.errors import (
    ChefiniException,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    ConflictError,
    UpstreamServiceError,
    AIResponseError,
)

__all__ = [
    "validate_password_strength",
    "normalize_email",
    "parse_uuid",
    "ChefiniException",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "UpstreamServiceError",
    "AIResponseError",
]
