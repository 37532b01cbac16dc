from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import InvalidRecipeError, RecipeNotFoundError
from .models import Ingredient, Recipe, RecipeType
from .storage import RecipeRepository

logger = logging.getLogger(__name__)


class RecipeService:
    """Business rules for recipes.

    The service is the only caller of the repository. It validates recipes
    before they are written and turns a missing document into
    :class:`RecipeNotFoundError`; any other store failure propagates unchanged.
    """

    def __init__(self, repository: RecipeRepository) -> None:
        self._repository = repository

    def create_recipe(
        self,
        name: str,
        description: str,
        ingredients: Sequence[Ingredient],
        instructions: Sequence[str],
        glass: str = "",
        garnish: str = "",
    ) -> Recipe:
        recipe = Recipe.new(
            name,
            RecipeType.COCKTAIL,
            description,
            list(ingredients),
            list(instructions),
            glass,
            garnish,
        )

        if not recipe.validate():
            raise InvalidRecipeError()

        self._repository.create(recipe)
        logger.info("Created recipe %s", recipe.id, extra={"recipe_id": recipe.id})
        return recipe

    def get_recipe_by_id(self, recipe_id: str) -> Recipe:
        recipe = self._repository.find_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError()
        return recipe

    def get_cocktail_recipes(self) -> List[Recipe]:
        return self._repository.find_by_type(RecipeType.COCKTAIL)

    def update_recipe(
        self,
        recipe_id: str,
        name: str,
        description: str,
        ingredients: Sequence[Ingredient],
        instructions: Sequence[str],
        glass: str = "",
        garnish: str = "",
    ) -> Recipe:
        recipe = self.get_recipe_by_id(recipe_id)
        recipe.update(name, description, list(ingredients), list(instructions), glass, garnish)

        if not recipe.validate():
            raise InvalidRecipeError()

        self._repository.update(recipe)
        logger.info("Updated recipe %s", recipe.id, extra={"recipe_id": recipe.id})
        return recipe

    def delete_recipe(self, recipe_id: str) -> None:
        self.get_recipe_by_id(recipe_id)
        self._repository.delete(recipe_id)
        logger.info("Deleted recipe %s", recipe_id, extra={"recipe_id": recipe_id})

    def search_recipes(self, query: str, cocktails_only: bool = False) -> List[Recipe]:
        recipe_type = RecipeType.COCKTAIL if cocktails_only else None
        return self._repository.search(query, recipe_type)

    def find_by_ingredient(self, ingredient: str) -> List[Recipe]:
        if not ingredient:
            raise InvalidRecipeError()
        return self._repository.find_by_ingredient(ingredient)


__all__ = ["RecipeService"]
