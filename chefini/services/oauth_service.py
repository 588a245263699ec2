"""
Chefini OAuth Service.

Handles Google OAuth 2.0 ID-token verification and user profile extraction.
"""

import asyncio
import logging
from typing import Optional, Dict, Any

from google.auth.transport import requests
from google.oauth2 import id_token

from settings import settings

logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class OAuthService:
    """Google OAuth 2.0 integration service."""

    def __init__(self):
        """Initialize with Google Client ID."""
        self.google_client_id = settings.GOOGLE_CLIENT_ID

    async def verify_google_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify Google ID token and extract user profile.

        Args:
            token: Google ID token from frontend

        Returns:
            Dictionary with user profile:
            {
                "email": "user@gmail.com",
                "name": "Jane Cook",
                "picture": "https://...",
                "sub": "google_user_id"
            }
            Returns None if verification fails.
        """
        try:
            # Fetching Google's certs blocks
            idinfo = await asyncio.to_thread(
                id_token.verify_oauth2_token,
                token,
                requests.Request(),
                self.google_client_id
            )

            if idinfo.get("iss") not in GOOGLE_ISSUERS:
                logger.warning(f"Rejected Google token from issuer {idinfo.get('iss')}")
                return None

            return {
                "email": idinfo.get("email"),
                "name": idinfo.get("name"),
                "picture": idinfo.get("picture"),
                "sub": idinfo.get("sub"),  # Google user ID
                "email_verified": idinfo.get("email_verified", False)
            }

        except Exception as e:
            logger.warning(f"Google OAuth verification error: {e}")
            return None


# Singleton instance
oauth_service = OAuthService()
