from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class RecipeType(str, Enum):
    COCKTAIL = "cocktail"
    # No creation path produces food recipes yet; stored documents may still carry it.
    FOOD = "food"


@dataclass
class Ingredient:
    """A single line of a recipe's ingredient list."""

    name: str
    amount: float = 0.0
    unit: str = ""
    notes: str = ""
    is_optional: bool = False

    def is_measured(self) -> bool:
        """Return ``True`` when the ingredient names a positive quantity of something."""

        return bool(self.name) and self.amount > 0 and bool(self.unit)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "amount": self.amount, "unit": self.unit}
        if self.notes:
            data["notes"] = self.notes
        data["is_optional"] = self.is_optional
        return data


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Recipe:
    """Domain object representing a cocktail or food recipe.

    ``id`` stays ``None`` until a repository persists the recipe for the first
    time. Construction does not validate; call :meth:`validate` before handing
    the recipe to a repository.
    """

    name: str
    type: RecipeType
    description: str = ""
    ingredients: List[Ingredient] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    glass: str = ""
    garnish: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    @classmethod
    def new(
        cls,
        name: str,
        recipe_type: RecipeType,
        description: str,
        ingredients: List[Ingredient],
        instructions: List[str],
        glass: str = "",
        garnish: str = "",
    ) -> "Recipe":
        now = utcnow()
        return cls(
            name=name,
            type=recipe_type,
            description=description,
            ingredients=list(ingredients),
            instructions=list(instructions),
            glass=glass,
            garnish=garnish,
            created_at=now,
            updated_at=now,
        )

    def update(
        self,
        name: str,
        description: str,
        ingredients: List[Ingredient],
        instructions: List[str],
        glass: str = "",
        garnish: str = "",
    ) -> None:
        """Replace the editable fields in place. ``id`` and ``type`` never change."""

        self.name = name
        self.description = description
        self.ingredients = list(ingredients)
        self.instructions = list(instructions)
        self.glass = glass
        self.garnish = garnish
        # updated_at must never precede created_at, even if the wall clock moved back.
        self.updated_at = max(utcnow(), self.created_at)

    def validate(self) -> bool:
        if not self.name or not self.ingredients or not self.instructions:
            return False

        if self.type == RecipeType.COCKTAIL:
            return any(ingredient.is_measured() for ingredient in self.ingredients)

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON representation served by the HTTP API."""

        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "instructions": list(self.instructions),
        }
        if self.glass:
            data["glass"] = self.glass
        if self.garnish:
            data["garnish"] = self.garnish
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


__all__ = ["Ingredient", "Recipe", "RecipeType", "utcnow"]
