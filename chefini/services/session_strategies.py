"""
Chefini API - Session strategies.

Each sign-in method verifies its own proof of identity and yields a user
document. Tokens are minted the same way whichever strategy produced the
user.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict

from pymongo.errors import DuplicateKeyError

from chefini.models.mongodb import UserDocument, utc_now
from chefini.services.auth import (
    SessionContext,
    create_access_token,
    create_refresh_token,
    token_claims,
    verify_password,
)
from chefini.services.oauth_service import OAuthService
from chefini.utils.errors import AuthenticationError
from chefini.utils.security import normalize_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
UNVERIFIED_EMAIL_MESSAGE = "Google email is not verified"
GOOGLE_SIGN_IN_FAILED_MESSAGE = "Google sign-in failed. Please try again."


class SessionStrategy(ABC):
    """A way of proving who the caller is."""

    provider: str = "credentials"

    @abstractmethod
    async def authenticate(self) -> UserDocument:
        """
        Verify the proof held by this strategy.

        Raises:
            AuthenticationError: 401 when verification fails.
        """

    async def sign_in(self) -> SessionContext:
        """Authenticate, stamp the login time and build the session."""
        user = await self.authenticate()
        user.last_login_at = utc_now()
        await user.save()
        return SessionContext(user_id=str(user.uid), email=user.email, provider=self.provider)


class CredentialsStrategy(SessionStrategy):
    """Email + password sign-in."""

    provider = "credentials"

    def __init__(self, email: str, password: str):
        self.email = normalize_email(email)
        self.password = password

    async def authenticate(self) -> UserDocument:
        user = await UserDocument.find_one(UserDocument.email == self.email)

        # Unknown email, Google-only account and wrong password look the same
        if not user or not user.has_password:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        if not verify_password(self.password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        return user


class GoogleStrategy(SessionStrategy):
    """
    Google ID-token sign-in.

    First sign-in creates the account. An existing account with the same
    email is linked to the Google identity instead, but only when Google
    reports the email as verified.
    """

    provider = "google"

    def __init__(self, token: str, oauth: OAuthService):
        self.token = token
        self.oauth = oauth

    async def authenticate(self) -> UserDocument:
        profile = await self.oauth.verify_google_token(self.token)
        if not profile or not profile.get("email"):
            raise AuthenticationError("Invalid Google token")

        email = normalize_email(profile["email"])
        google_id = profile.get("sub")
        picture = profile.get("picture")

        user = None
        if google_id:
            user = await UserDocument.find_one(UserDocument.oauth_id == google_id)
        if not user:
            user = await UserDocument.find_one(UserDocument.email == email)
            # Only a verified Google email may take over an existing account
            if user and not profile.get("email_verified"):
                logger.warning(f"Refused to link unverified Google email to user {user.uid}")
                raise AuthenticationError(UNVERIFIED_EMAIL_MESSAGE)

        if user:
            user.oauth_provider = "google"
            user.oauth_id = google_id
            if picture:
                user.image = picture
            user.updated_at = utc_now()
            await user.save()
            return user

        user = UserDocument(
            email=email,
            name=profile.get("name") or email.split("@")[0],
            image=picture,
            oauth_provider="google",
            oauth_id=google_id,
        )
        try:
            await user.insert()
        except DuplicateKeyError:
            # Created by a concurrent sign-in for the same email
            user = await UserDocument.find_one(UserDocument.email == email)
            if not user or user.oauth_id != google_id:
                raise AuthenticationError(GOOGLE_SIGN_IN_FAILED_MESSAGE)
            return user

        logger.info(f"Created user {user.uid} from Google sign-in")
        return user


def issue_tokens(session: SessionContext) -> Dict[str, str]:
    """Mint the access/refresh pair for a session."""
    claims = token_claims(session)
    return {
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token(claims),
        "token_type": "bearer",
        "user_id": session.user_id,
    }
