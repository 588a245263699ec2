"""
Chefini API - Profile Schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdateRequest(BaseModel):
    """Only the fields that are sent are changed."""

    name: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = Field(None, description="Avatar id from GET /profile/avatars")


class ChangePasswordRequest(BaseModel):
    """Schema for changing the password of a credentials account."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "currentPassword": "leftovers",
                "newPassword": "moreleftovers"
            }
        }
    )

    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword")
