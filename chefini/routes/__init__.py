"""Chefini API - Routes Package."""

from chefini.routes import (
    auth,
    profile,
    recipes,
    shopping,
    batch,
    ai,
)

__all__ = [
    "auth",
    "profile",
    "recipes",
    "shopping",
    "batch",
    "ai",
]
