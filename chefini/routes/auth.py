"""
Chefini API - Authentication Routes.

Signup, credentials and Google sign-in, token refresh and the
password-reset code flow. Uses Beanie ODM for async MongoDB operations.
"""

import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import DuplicateKeyError

from chefini.dependencies import get_email_service, get_oauth_service
from chefini.models.mongodb import UserDocument
from chefini.schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    GoogleSignInRequest,
    LoginRequest,
    RefreshRequest,
    ResetPasswordRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    VerifyOTPRequest,
)
from chefini.services import password_reset
from chefini.services.auth import (
    SessionContext,
    hash_password,
    session_from_payload,
    verify_refresh_token,
)
from chefini.services.email_service import EmailService
from chefini.services.oauth_service import OAuthService
from chefini.services.session_strategies import (
    CredentialsStrategy,
    GoogleStrategy,
    issue_tokens,
)
from chefini.utils.errors import AuthenticationError, ConflictError, ValidationError
from chefini.utils.security import normalize_email, parse_uuid, validate_password_strength

logger = logging.getLogger(__name__)
router = APIRouter()

EMAIL_TAKEN_MESSAGE = "An account with this email already exists"


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest) -> SignupResponse:
    """
    Register a new user with email and password.

    Raises:
        ValidationError: 400 if the password is too short.
        ConflictError: 409 if the email is already registered.
    """
    is_valid, message = validate_password_strength(request.password)
    if not is_valid:
        raise ValidationError(message)

    email = normalize_email(request.email)
    if await UserDocument.find_one(UserDocument.email == email):
        raise ConflictError(EMAIL_TAKEN_MESSAGE)

    user = UserDocument(
        email=email,
        name=request.name,
        password_hash=hash_password(request.password),
    )
    try:
        await user.insert()
    except DuplicateKeyError:
        # Lost a race with a concurrent signup for the same email
        raise ConflictError(EMAIL_TAKEN_MESSAGE)

    logger.info(f"User {user.uid} signed up")
    return SignupResponse(user_id=str(user.uid), email=user.email)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """
    Login user with email and password.

    Raises:
        AuthenticationError: 401 "Invalid email or password" for an unknown
            email, a Google-only account or a wrong password.
    """
    session = await CredentialsStrategy(request.email, request.password).sign_in()
    return TokenResponse(**issue_tokens(session))


@router.post("/google", response_model=TokenResponse)
async def google_sign_in(
    request: GoogleSignInRequest,
    oauth: OAuthService = Depends(get_oauth_service)
) -> TokenResponse:
    """
    Authenticate or register user via Google.

    Raises:
        AuthenticationError: 401 if token verification fails.
    """
    session = await GoogleStrategy(request.token, oauth).sign_in()
    return TokenResponse(**issue_tokens(session))


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(request: RefreshRequest) -> TokenResponse:
    """
    Exchange a refresh token for a new token pair.

    Raises:
        AuthenticationError: 401 if the refresh token is invalid, expired or
            belongs to a user that no longer exists.
    """
    payload = verify_refresh_token(request.refresh_token)
    session = session_from_payload(payload) if payload else None
    if not session:
        raise AuthenticationError("Invalid or expired refresh token")

    user_uid = parse_uuid(session.user_id)
    user = await UserDocument.find_one(UserDocument.uid == user_uid) if user_uid else None
    if not user:
        raise AuthenticationError("User not found")

    # Token rotation
    rotated = SessionContext(user_id=str(user.uid), email=user.email, provider=session.provider)
    return TokenResponse(**issue_tokens(rotated))


@router.post("/forgot-password", response_model=ForgotPasswordResponse, response_model_by_alias=True)
async def forgot_password(
    request: ForgotPasswordRequest,
    mailer: EmailService = Depends(get_email_service)
) -> ForgotPasswordResponse:
    """
    Email a 6-digit reset code.

    An unknown email gets the same success-shaped message with
    `shouldProceed: false`, so callers cannot probe which emails exist.
    """
    user = await password_reset.request_reset(request.email, mailer)
    if not user:
        return ForgotPasswordResponse(
            message="If an account exists with this email, you will receive an OTP.",
            should_proceed=False,
            email=None,
        )

    return ForgotPasswordResponse(
        message="OTP sent to your email.",
        should_proceed=True,
        email=user.email,
    )


@router.post("/verify-otp")
async def verify_otp(request: VerifyOTPRequest) -> dict:
    """Check a reset code without consuming it."""
    await password_reset.verify_otp(request.email, request.otp)
    return {"message": "OTP verified successfully", "verified": True}


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    mailer: EmailService = Depends(get_email_service)
) -> dict:
    """Consume a reset code and set the new password."""
    await password_reset.reset_password(
        request.email,
        request.otp,
        request.new_password,
        mailer,
    )
    return {"message": "Password reset successfully. You can now sign in."}
