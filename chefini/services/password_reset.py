"""
Chefini API - Password reset OTP flow.

States per user: no request -> code issued -> verified / expired / consumed.
Only a bcrypt hash of the 6-digit code is stored; the plaintext travels in
the reset email and nowhere else.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from chefini.models.mongodb import UserDocument, utc_now
from chefini.services.auth import hash_otp, hash_password, verify_otp_hash
from chefini.services.email_service import EmailService
from chefini.utils.errors import ChefiniException, ValidationError
from chefini.utils.security import normalize_email, validate_password_strength
from settings import settings

logger = logging.getLogger(__name__)

OTP_LENGTH = 6

NO_REQUEST_MESSAGE = "No password reset requested. Please request a new OTP."
EXPIRED_MESSAGE = "OTP has expired. Please request a new one."
INVALID_MESSAGE = "Invalid OTP code. Please check and try again."
OAUTH_ONLY_MESSAGE = "This account uses Google sign-in. Please sign in with Google."
EMAIL_FAILED_MESSAGE = "Failed to send OTP email. Please try again."


def generate_otp() -> str:
    """Random 6-digit code, zero padded."""
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def _as_utc(value: datetime) -> datetime:
    # Mongo hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def _clear_otp(user: UserDocument) -> None:
    user.reset_otp_hash = None
    user.reset_otp_expires_at = None
    user.updated_at = utc_now()
    await user.save()


async def request_reset(
    email: str,
    mailer: EmailService,
    now: Optional[datetime] = None
) -> Optional[UserDocument]:
    """
    Issue a reset code for `email` and mail it.

    Returns:
        The user the code was issued for, or None when no account uses the
        email (nothing is sent in that case).

    Raises:
        ValidationError: the account has no password (Google sign-in only).
        ChefiniException: 500 when the email could not be sent; the issued
            code is cleared again.
    """
    user = await UserDocument.find_one(UserDocument.email == normalize_email(email))
    if not user:
        logger.info("Password reset requested for unknown email")
        return None

    if not user.has_password:
        raise ValidationError(OAUTH_ONLY_MESSAGE)

    now = now or utc_now()
    otp_code = generate_otp()
    user.reset_otp_hash = hash_otp(otp_code)
    user.reset_otp_expires_at = now + timedelta(minutes=settings.OTP_EXPIRY_MINUTES)
    user.updated_at = now
    await user.save()

    sent = await mailer.send_password_reset_otp(user.email, user.name, otp_code)
    if not sent:
        await _clear_otp(user)
        raise ChefiniException(EMAIL_FAILED_MESSAGE, status_code=500)

    logger.info(f"Password reset code issued for user {user.uid}")
    return user


async def verify_otp(
    email: str,
    otp: str,
    now: Optional[datetime] = None
) -> UserDocument:
    """
    Check a reset code without consuming it.

    A code is accepted while `now <= expires_at`. An expired code is
    cleared when it is detected.

    Raises:
        ValidationError: 400 with a message distinguishing no request,
            expired code and wrong code.
    """
    user = await UserDocument.find_one(UserDocument.email == normalize_email(email))
    if not user or not user.reset_otp_hash or not user.reset_otp_expires_at:
        raise ValidationError(NO_REQUEST_MESSAGE)

    now = now or utc_now()
    if now > _as_utc(user.reset_otp_expires_at):
        await _clear_otp(user)
        raise ValidationError(EXPIRED_MESSAGE)

    if not verify_otp_hash(otp, user.reset_otp_hash):
        raise ValidationError(INVALID_MESSAGE)

    return user


async def reset_password(
    email: str,
    otp: str,
    new_password: str,
    mailer: EmailService,
    now: Optional[datetime] = None
) -> UserDocument:
    """
    Consume a reset code and set a new password.

    The code is re-validated exactly as in `verify_otp`. A confirmation
    email is sent afterwards; a send failure is only logged.
    """
    is_valid, message = validate_password_strength(new_password)
    if not is_valid:
        raise ValidationError(message)

    user = await verify_otp(email, otp, now=now)

    user.password_hash = hash_password(new_password)
    user.reset_otp_hash = None
    user.reset_otp_expires_at = None
    user.updated_at = now or utc_now()
    await user.save()

    if not await mailer.send_password_changed_email(user.email, user.name):
        logger.warning(f"Password changed email not delivered for user {user.uid}")

    logger.info(f"Password reset completed for user {user.uid}")
    return user
