from __future__ import annotations

from typing import List, Optional, Protocol

from .errors import InvalidRecipeIdError
from .models import Recipe, RecipeType

MAX_RECIPE_ID_BYTES = 1500


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the recipe service."""

    def create(self, recipe: Recipe) -> None:
        """Insert ``recipe`` and set its ``id`` to the identifier chosen by the store."""

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Return the stored recipe or ``None`` when no document has that id."""

    def find_by_type(self, recipe_type: RecipeType) -> List[Recipe]:
        """Return every recipe of the given type, newest first."""

    def find_by_ingredient(self, pattern: str) -> List[Recipe]:
        """Return recipes with an ingredient name containing ``pattern``, ignoring case."""

    def update(self, recipe: Recipe) -> None:
        """Replace the stored document for ``recipe.id`` with ``recipe``."""

    def delete(self, recipe_id: str) -> None:
        """Remove a recipe. Missing ids are ignored."""

    def search(self, query: str, recipe_type: Optional[RecipeType] = None) -> List[Recipe]:
        """Return text or ingredient matches for ``query``, most relevant first."""

    def close(self) -> None:
        """Release the underlying store connection."""


def is_valid_recipe_id(recipe_id: str) -> bool:
    """Return whether ``recipe_id`` is usable as a Firestore document id."""

    if not recipe_id or recipe_id in (".", ".."):
        return False
    if "/" in recipe_id:
        return False
    if len(recipe_id) >= 4 and recipe_id.startswith("__") and recipe_id.endswith("__"):
        return False
    return len(recipe_id.encode("utf-8")) <= MAX_RECIPE_ID_BYTES


def parse_recipe_id(raw: str) -> str:
    if not is_valid_recipe_id(raw):
        raise InvalidRecipeIdError()
    return raw


__all__ = ["RecipeRepository", "is_valid_recipe_id", "parse_recipe_id"]
