"""
Chefini API - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from chefini.models.mongodb import (
    UserDocument,
    RecipeDocument,
    RecipeLikeDocument,
    ShoppingListDocument,
    BatchPlanDocument,
    Ingredient,
    Macros,
    BuildStep,
    RuntimeMeal,
)

__all__ = [
    "UserDocument",
    "RecipeDocument",
    "RecipeLikeDocument",
    "ShoppingListDocument",
    "BatchPlanDocument",
    "Ingredient",
    "Macros",
    "BuildStep",
    "RuntimeMeal",
]
