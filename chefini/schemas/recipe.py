"""
Chefini API - Recipe Schemas.

Cookbook saves and recipe edits. Responses are shaped by
`recipe_service.serialize_recipe`.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IngredientIn(BaseModel):
    item: str = Field(..., min_length=1)
    missing: bool = False


class MacrosIn(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0


class SaveRecipeRequest(BaseModel):
    """
    Recipe copied into the caller's cookbook.

    Ownership, visibility and likes are set by the server whatever the
    client sends.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Crispy Rice Frittata",
                "time": "20 mins",
                "ingredients": [{"item": "2 eggs", "missing": False}],
                "instructions": ["Whisk the eggs.", "Fold in the rice."],
                "macros": {"calories": 420, "protein": 18, "carbs": 45, "fats": 16},
                "tip": "Day-old rice crisps better because the surface starch has dried."
            }
        }
    )

    title: str = Field(..., min_length=1, max_length=200)
    time: str = ""
    ingredients: List[IngredientIn] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    macros: MacrosIn = Field(default_factory=MacrosIn)
    tip: str = ""


class RecipeUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_public: Optional[bool] = Field(None, alias="isPublic")
    title: Optional[str] = Field(None, max_length=200)
