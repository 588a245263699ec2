"""Chefini API - Services Package."""

from .auth import (
    SessionContext,
    hash_password,
    verify_password,
    create_access_token,
    verify_token,
)
from .gemini import gemini_service, GeminiService
from .email_service import email_service, EmailService
from .oauth_service import oauth_service, OAuthService

__all__ = [
    "SessionContext",
    "hash_password",
    "verify_password",
    "create_access_token",
    "verify_token",
    "gemini_service",
    "GeminiService",
    "email_service",
    "EmailService",
    "oauth_service",
    "OAuthService",
]
