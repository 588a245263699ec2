# chefini/models/mongodb.py
"""
Chefini MongoDB Document Models.

Beanie ODM models for MongoDB.
"""

from beanie import Document, Indexed
from pydantic import BaseModel, EmailStr, Field
from pymongo import ASCENDING, IndexModel
from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID, uuid4


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Macros(BaseModel):
    """Macro totals for one serving."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0


class Ingredient(BaseModel):
    """Recipe ingredient line; `missing` marks items the cook has to buy."""

    item: str
    missing: bool = False


class BuildStep(BaseModel):
    """Batch prep task done once up front."""

    task: str = ""
    duration: str = ""
    temp: str = ""
    why: str = ""


class RuntimeMeal(BaseModel):
    """Per-day dish assembled from the prepped components."""

    day: int
    title: str = ""
    time: str = ""
    instructions: List[str] = Field(default_factory=list)
    macros: Macros = Field(default_factory=Macros)


class UserDocument(Document):
    """User model for MongoDB."""

    uid: UUID = Field(default_factory=uuid4)
    email: Indexed(EmailStr, unique=True)  # stored lowercase
    name: str

    # Absent for accounts created through Google sign-in
    password_hash: Optional[str] = None

    # OAuth integration
    image: Optional[str] = None
    oauth_provider: Optional[str] = None  # "google"
    oauth_id: Optional[str] = None

    # Chosen avatar id from the avatar catalogue
    avatar: Optional[str] = None

    # Password reset (bcrypt hash of the 6-digit code, never the code itself)
    reset_otp_hash: Optional[str] = None
    reset_otp_expires_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    last_login_at: Optional[datetime] = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    class Settings:
        name = "users"
        indexes = [
            "uid",
        ]


class RecipeDocument(Document):
    """Recipe model for MongoDB."""

    uid: UUID = Field(default_factory=uuid4)
    title: str
    time: str = ""
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    macros: Macros = Field(default_factory=Macros)
    tip: str = ""
    created_by: UUID
    is_public: bool = False
    likes: int = 0
    created_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "recipes"
        indexes = [
            "uid",
            "created_by",
            "is_public",
        ]


class RecipeLikeDocument(Document):
    """One user's like of one recipe. The (user_id, recipe_id) pair is unique."""

    user_id: UUID
    recipe_id: UUID
    created_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "recipe_likes"
        indexes = [
            IndexModel(
                [("user_id", ASCENDING), ("recipe_id", ASCENDING)],
                name="user_recipe_unique",
                unique=True,
            ),
            "recipe_id",
        ]


class ShoppingListDocument(Document):
    """Shopping list model for MongoDB. One list per user."""

    uid: UUID = Field(default_factory=uuid4)
    user_id: UUID
    items: List[str] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "shopping_lists"
        indexes = [
            IndexModel([("user_id", ASCENDING)], name="user_unique", unique=True),
        ]


class BatchPlanDocument(Document):
    """Batch meal-prep plan model for MongoDB."""

    uid: UUID = Field(default_factory=uuid4)
    batch_title: str
    total_prep_time: str = ""
    build_phase: List[BuildStep] = Field(default_factory=list)
    runtime_phase: List[RuntimeMeal] = Field(default_factory=list)
    storage_tip: str = ""
    ingredients: List[str] = Field(default_factory=list)
    days: int = 3
    cooking_level: str = "intermediate"
    created_by: UUID
    created_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "batch_plans"
        indexes = [
            "uid",
            "created_by",
        ]
