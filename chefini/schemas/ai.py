"""
Chefini API - AI Feature Schemas.

Request bodies for recipe generation, batch plans, the flavor debugger
and content validation.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def clean_ingredient_list(values: List[str]) -> List[str]:
    """Drop blank entries; at least one ingredient must remain."""
    cleaned = [value.strip() for value in values if value and value.strip()]
    if not cleaned:
        raise ValueError("Please provide at least one ingredient")
    return cleaned


class GenerateRecipeRequest(BaseModel):
    """
    Schema for recipe generation.

    Attributes:
        ingredients: What the cook has on hand.
        dietary: Dietary restrictions passed to the prompt.
        healthy_mode: Ask for balanced macros.
        staples: Allow oil, salt, pepper and common spices.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ingredients": ["eggs", "leftover rice", "spring onion"],
                "dietary": ["vegetarian"],
                "healthyMode": False,
                "staples": True
            }
        }
    )

    ingredients: List[str] = Field(..., description="Ingredients on hand")
    dietary: List[str] = Field(default_factory=list)
    healthy_mode: bool = Field(False, alias="healthyMode")
    staples: bool = True

    @field_validator("ingredients")
    @classmethod
    def require_ingredients(cls, value: List[str]) -> List[str]:
        return clean_ingredient_list(value)


class BatchPlanRequest(BaseModel):
    """Schema for a batch meal-prep plan."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ingredients": ["chicken thighs", "rice", "broccoli"],
                "days": 3,
                "dietary": [],
                "cookingLevel": "intermediate"
            }
        }
    )

    ingredients: List[str]
    days: int = Field(3, ge=2, le=5, description="Days covered by the plan")
    dietary: List[str] = Field(default_factory=list)
    cooking_level: Literal["beginner", "intermediate", "advanced"] = Field(
        "intermediate", alias="cookingLevel"
    )

    @field_validator("ingredients")
    @classmethod
    def require_ingredients(cls, value: List[str]) -> List[str]:
        return clean_ingredient_list(value)


class DebugDishRequest(BaseModel):
    """
    Schema for the flavor debugger.

    `issue` is one of salty, acidic, spicy, sweet, bland, burnt or a free-text
    description.
    """

    dish: str = Field(..., min_length=1, max_length=200)
    issue: str = Field(..., min_length=1, max_length=200)
    context: Optional[str] = Field(None, max_length=1000)

    @field_validator("dish", "issue")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Dish and issue are required")
        return value


class ValidateContentRequest(BaseModel):
    text: Optional[str] = ""
