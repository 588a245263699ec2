"""
Chefini API - Authentication Schemas.

Pydantic schemas for account, token and password-reset requests.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """
    Schema for credentials signup.

    Attributes:
        name: Display name.
        email: Email address (stored lowercase).
        password: Plain password, checked against the minimum length.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Maya Rao",
                "email": "maya@example.com",
                "password": "leftovers"
            }
        }
    )

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class SignupResponse(BaseModel):
    user_id: str
    email: str
    message: str = "Account created"


class LoginRequest(BaseModel):
    """Schema for credentials login."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "maya@example.com",
                "password": "leftovers"
            }
        }
    )

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class GoogleSignInRequest(BaseModel):
    """Google ID token obtained by the frontend."""

    token: str = Field(..., min_length=1, description="Google ID token")


class TokenResponse(BaseModel):
    """
    Schema for authentication token response.

    Attributes:
        access_token: JWT access token.
        token_type: Token type (always "bearer").
        user_id: Authenticated user's ID.
        refresh_token: JWT refresh token.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "user_id": "550e8400-e29b-41d4-a716-446655440000",
                "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
            }
        }
    )

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user_id: str = Field(..., description="Authenticated user's ID")
    refresh_token: str = Field(..., description="JWT refresh token")


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email")


class ForgotPasswordResponse(BaseModel):
    """
    `shouldProceed` tells the client whether to move on to code entry.
    `email` is null when no account uses the address.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str
    should_proceed: bool = Field(..., alias="shouldProceed")
    email: Optional[str] = None


class VerifyOTPRequest(BaseModel):
    """Schema for checking a password-reset code."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "maya@example.com",
                "otp": "042317"
            }
        }
    )

    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=6, description="6-digit reset code")


class ResetPasswordRequest(BaseModel):
    """Schema for consuming a reset code."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=6)
    new_password: str = Field(..., alias="newPassword")
