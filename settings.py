"""
Chefini API Settings.

Pydantic settings management with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # MongoDB - REQUIRED from environment
    DATABASE_URL: str = Field(..., description="MongoDB connection string (required)")
    DATABASE_NAME: str = Field(default="chefini")

    # JWT - REQUIRED from environment
    SECRET_KEY: str = Field(..., description="JWT signing secret (required)")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=30)

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # CORS
    CORS_ORIGINS: str = "https://chefini.app,https://www.chefini.app,http://localhost:3000,http://localhost:5173"

    # Gemini AI (recipes, batch plans, flavor debugger, content moderation)
    GEMINI_API_KEY: str = Field(..., description="Google Gemini API key (required)")
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Email Service (Resend)
    RESEND_API_KEY: Optional[str] = None
    EMAIL_FROM: str = "Chefini <noreply@chefini.app>"

    # Google OAuth
    GOOGLE_CLIENT_ID: Optional[str] = None

    # Password reset OTP
    OTP_EXPIRY_MINUTES: int = 10

    # Password hashing
    BCRYPT_ROUNDS: int = 12
    MIN_PASSWORD_LENGTH: int = 6

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY must be changed from default in production")
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY must be set")
        if not self.RESEND_API_KEY:
            raise ValueError("RESEND_API_KEY must be set for password reset emails")


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()
