from __future__ import annotations

import copy
import uuid
from typing import Dict, List, Optional

from . import search
from .models import Recipe, RecipeType
from .storage import RecipeRepository


class InMemoryRecipeStorage(RecipeRepository):
    """Process-local storage backend for development servers and tests.

    Recipes are copied on the way in and out so callers never share state
    with the store, mirroring how a document database behaves.
    """

    def __init__(self) -> None:
        self._recipes: Dict[str, Recipe] = {}

    def _newest_first(self, recipes: List[Recipe]) -> List[Recipe]:
        return sorted(recipes, key=lambda recipe: recipe.created_at, reverse=True)

    def create(self, recipe: Recipe) -> None:
        if recipe.id:
            raise ValueError("Recipe has already been stored.")

        recipe_id = uuid.uuid4().hex
        stored = copy.deepcopy(recipe)
        stored.id = recipe_id
        self._recipes[recipe_id] = stored
        recipe.id = recipe_id

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        recipe = self._recipes.get(recipe_id)
        return copy.deepcopy(recipe) if recipe is not None else None

    def find_by_type(self, recipe_type: RecipeType) -> List[Recipe]:
        matches = [r for r in self._recipes.values() if r.type == recipe_type]
        return copy.deepcopy(self._newest_first(matches))

    def find_by_ingredient(self, pattern: str) -> List[Recipe]:
        matches = [
            recipe
            for recipe in self._recipes.values()
            if search.matches_ingredient(pattern, search.ingredient_names(recipe))
        ]
        return copy.deepcopy(self._newest_first(matches))

    def update(self, recipe: Recipe) -> None:
        if not recipe.id:
            raise ValueError("Cannot update a recipe that has not been stored.")
        self._recipes[recipe.id] = copy.deepcopy(recipe)

    def delete(self, recipe_id: str) -> None:
        self._recipes.pop(recipe_id, None)

    def search(self, query: str, recipe_type: Optional[RecipeType] = None) -> List[Recipe]:
        candidates = [
            recipe
            for recipe in self._recipes.values()
            if recipe_type is None or recipe.type == recipe_type
        ]
        ranked = search.rank(query, (search.candidate(r) for r in self._newest_first(candidates)))
        return copy.deepcopy(ranked)

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._recipes)


__all__ = ["InMemoryRecipeStorage"]
