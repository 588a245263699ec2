"""
Chefini API - FastAPI Dependencies.

Dependency injection helpers for routes: the session context, the current
user document, and the external collaborators (LLM, mail relay, Google
OAuth) so they can be swapped per request or in tests.
"""

from typing import Optional

from fastapi import Depends

from chefini.middleware.auth import jwt_bearer, optional_jwt_bearer
from chefini.models.mongodb import UserDocument
from chefini.services.auth import SessionContext
from chefini.services.email_service import EmailService, email_service
from chefini.services.gemini import GeminiService, gemini_service
from chefini.services.oauth_service import OAuthService, oauth_service
from chefini.utils.errors import AuthenticationError, NotFoundError
from chefini.utils.security import parse_uuid


async def get_session(
    session: SessionContext = Depends(jwt_bearer)
) -> SessionContext:
    """
    Get the authenticated session context.

    Raises:
        AuthenticationError: 401 if not authenticated.
    """
    if not session:
        raise AuthenticationError()
    return session


async def get_optional_session(
    session: Optional[SessionContext] = Depends(optional_jwt_bearer)
) -> Optional[SessionContext]:
    """Session context when a valid token is present, otherwise None."""
    return session


async def get_current_user(
    session: SessionContext = Depends(get_session)
) -> UserDocument:
    """
    Get current authenticated user from database.

    Raises:
        NotFoundError: 404 if the user behind the session no longer exists.
    """
    user_uid = parse_uuid(session.user_id)
    user = None
    if user_uid:
        user = await UserDocument.find_one(UserDocument.uid == user_uid)

    if not user:
        raise NotFoundError("User not found")

    return user


def get_gemini_service() -> GeminiService:
    """LLM client used by the AI routes."""
    return gemini_service


def get_email_service() -> EmailService:
    """Mail relay used by the account routes."""
    return email_service


def get_oauth_service() -> OAuthService:
    """Google ID-token verifier."""
    return oauth_service
