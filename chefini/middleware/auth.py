"""
Chefini API - Authentication Middleware.

JWT verification for protected routes. The decoded token becomes the
request-scoped `SessionContext`.
"""

from typing import Optional

from fastapi import Request, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from chefini.services.auth import SessionContext, verify_token, session_from_payload


class JWTBearer(HTTPBearer):
    """
    JWT Bearer token authentication.

    Custom HTTPBearer that validates JWT tokens on protected routes and
    resolves them to a SessionContext.

    Attributes:
        required: Whether a missing or invalid token raises 401. When False
            the dependency resolves to None instead.
    """

    def __init__(self, required: bool = True):
        # Errors are raised here so every failure is a 401.
        super().__init__(auto_error=False)
        self.required = required

    def _reject(self, detail: str) -> None:
        if self.required:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"}
            )

    async def __call__(self, request: Request) -> Optional[SessionContext]:
        """
        Verify JWT token from Authorization header.

        Returns:
            Optional[SessionContext]: Session if the token is valid.

        Raises:
            HTTPException: 401 if token is invalid or missing and required.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if not credentials or credentials.scheme.lower() != "bearer":
            self._reject("Unauthorized")
            return None

        payload = verify_token(credentials.credentials)
        if not payload:
            self._reject("Invalid or expired session")
            return None

        session = session_from_payload(payload)
        if not session:
            self._reject("Invalid token payload")
            return None

        request.state.user_id = session.user_id
        return session


# Global bearer instances for dependency injection
jwt_bearer = JWTBearer()
optional_jwt_bearer = JWTBearer(required=False)
