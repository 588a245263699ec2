"""
Chefini API - Profile Routes.

Endpoints for reading and editing the signed-in user's profile.
"""

import logging

from fastapi import APIRouter, Depends

from chefini.dependencies import get_current_user, get_email_service
from chefini.models.mongodb import UserDocument, utc_now
from chefini.schemas.profile import ChangePasswordRequest, ProfileUpdateRequest
from chefini.services.auth import hash_password, verify_password
from chefini.services.avatars import AVATAR_OPTIONS, avatar_display, is_valid_avatar
from chefini.services.email_service import EmailService
from chefini.utils.errors import ValidationError
from chefini.utils.security import sanitize_string, validate_password_strength

logger = logging.getLogger(__name__)
router = APIRouter()


def serialize_user(user: UserDocument) -> dict:
    return {
        "id": str(user.uid),
        "name": user.name,
        "email": user.email,
        "image": user.image,
        "avatar": user.avatar,
        "avatarDisplay": avatar_display(user.avatar, user.image, user.name),
        "createdAt": user.created_at.isoformat(),
    }


@router.get("")
async def get_profile(user: UserDocument = Depends(get_current_user)) -> dict:
    """Get current user's profile."""
    return {"user": serialize_user(user)}


@router.patch("")
async def update_profile(
    request: ProfileUpdateRequest,
    user: UserDocument = Depends(get_current_user)
) -> dict:
    """
    Update name and/or avatar.

    Raises:
        ValidationError: 400 for an empty name or an unknown avatar id.
    """
    if request.name is not None:
        name = sanitize_string(request.name, max_length=100)
        if not name:
            raise ValidationError("Name cannot be empty")
        user.name = name

    if request.avatar is not None:
        if not is_valid_avatar(request.avatar):
            raise ValidationError("Unknown avatar")
        user.avatar = request.avatar

    user.updated_at = utc_now()
    await user.save()
    return {"user": serialize_user(user)}


@router.post("/change-password")
async def change_password(
    request: ChangePasswordRequest,
    user: UserDocument = Depends(get_current_user),
    mailer: EmailService = Depends(get_email_service)
) -> dict:
    """
    Change the password of a credentials account.

    Raises:
        ValidationError: 400 for Google-only accounts, a wrong current
            password or a new password that is too short.
    """
    is_valid, message = validate_password_strength(request.new_password)
    if not is_valid:
        raise ValidationError(message)

    if not user.has_password:
        raise ValidationError("Cannot change password for Google sign-in accounts")

    if not verify_password(request.current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    user.password_hash = hash_password(request.new_password)
    user.updated_at = utc_now()
    await user.save()

    if not await mailer.send_password_changed_email(user.email, user.name):
        logger.warning(f"Password changed email not delivered for user {user.uid}")

    logger.info(f"Password changed for user {user.uid}")
    return {"message": "Password changed successfully"}


@router.get("/avatars")
async def list_avatars() -> dict:
    """Selectable avatars."""
    return {"avatars": AVATAR_OPTIONS}
