"""
Chefini API - Shopping List Schemas.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class AddItemRequest(BaseModel):
    """One item to add; duplicates are ignored."""

    item: Any = Field(None, validate_default=True)

    @field_validator("item")
    @classmethod
    def require_text(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Valid item required")
        return value.strip()
