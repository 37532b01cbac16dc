"""Request bodies accepted by the recipe endpoints."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Ingredient


class IngredientPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    amount: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    unit: str = ""
    notes: str = ""
    is_optional: bool = False

    @field_validator("name", "unit", "notes", mode="before")
    @classmethod
    def null_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("amount", mode="before")
    @classmethod
    def null_amount(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("is_optional", mode="before")
    @classmethod
    def null_flag(cls, value: Any) -> Any:
        return False if value is None else value

    def to_ingredient(self) -> Ingredient:
        return Ingredient(
            name=self.name,
            amount=self.amount,
            unit=self.unit,
            notes=self.notes,
            is_optional=self.is_optional,
        )


class RecipePayload(BaseModel):
    """Body of ``POST /api/recipes`` and ``PUT /api/recipes/<id>``.

    Missing or ``null`` fields fall back to empty values; whether the result
    is a usable recipe is decided by the service, not here.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    ingredients: List[IngredientPayload] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    glass: str = ""
    garnish: str = ""

    @field_validator("name", "description", "glass", "garnish", mode="before")
    @classmethod
    def null_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def ingredient_list(self) -> List[Ingredient]:
        return [item.to_ingredient() for item in self.ingredients]


__all__ = ["IngredientPayload", "RecipePayload"]
