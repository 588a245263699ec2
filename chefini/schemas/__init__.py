"""Chefini API - Pydantic Schemas Package."""

from chefini.schemas.auth import (
    SignupRequest,
    LoginRequest,
    GoogleSignInRequest,
    TokenResponse,
    RefreshRequest,
    ForgotPasswordRequest,
    VerifyOTPRequest,
    ResetPasswordRequest,
)
from chefini.schemas.profile import (
    ProfileUpdateRequest,
    ChangePasswordRequest,
)
from chefini.schemas.recipe import (
    SaveRecipeRequest,
    RecipeUpdateRequest,
)
from chefini.schemas.shopping import AddItemRequest
from chefini.schemas.ai import (
    GenerateRecipeRequest,
    BatchPlanRequest,
    DebugDishRequest,
    ValidateContentRequest,
)

__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "GoogleSignInRequest",
    "TokenResponse",
    "RefreshRequest",
    "ForgotPasswordRequest",
    "VerifyOTPRequest",
    "ResetPasswordRequest",
    # Profile
    "ProfileUpdateRequest",
    "ChangePasswordRequest",
    # Recipes
    "SaveRecipeRequest",
    "RecipeUpdateRequest",
    # Shopping
    "AddItemRequest",
    # AI
    "GenerateRecipeRequest",
    "BatchPlanRequest",
    "DebugDishRequest",
    "ValidateContentRequest",
]
