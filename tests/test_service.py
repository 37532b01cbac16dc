from __future__ import annotations

from unittest.mock import create_autospec

import pytest

from recipe_catalog.errors import InvalidRecipeError, RecipeNotFoundError
from recipe_catalog.memory_storage import InMemoryRecipeStorage
from recipe_catalog.models import Ingredient, Recipe, RecipeType
from recipe_catalog.service import RecipeService

MARGARITA = dict(
    name="Margarita",
    description="",
    ingredients=[
        Ingredient(name="Tequila", amount=2, unit="oz"),
        Ingredient(name="Lime juice", amount=1, unit="oz"),
    ],
    instructions=["Shake", "Strain"],
    glass="Coupe",
    garnish="Lime",
)


def create_service():
    storage = InMemoryRecipeStorage()
    return RecipeService(storage), storage


def test_create_recipe_persists_a_cocktail():
    service, storage = create_service()

    recipe = service.create_recipe(**MARGARITA)

    assert recipe.id
    assert recipe.type is RecipeType.COCKTAIL
    assert storage.find_by_id(recipe.id) == recipe


def test_invalid_recipe_never_reaches_repository():
    repository = create_autospec(InMemoryRecipeStorage, instance=True)
    service = RecipeService(repository)

    with pytest.raises(InvalidRecipeError):
        service.create_recipe("", "", [], [])

    repository.create.assert_not_called()


def test_get_recipe_by_id_translates_missing_to_not_found():
    service, _ = create_service()

    with pytest.raises(RecipeNotFoundError):
        service.get_recipe_by_id("missing")


def test_store_errors_propagate_unchanged():
    repository = create_autospec(InMemoryRecipeStorage, instance=True)
    repository.find_by_id.side_effect = ConnectionError("store unreachable")
    service = RecipeService(repository)

    with pytest.raises(ConnectionError):
        service.get_recipe_by_id("abc")


def test_get_cocktail_recipes_excludes_food():
    service, storage = create_service()
    service.create_recipe(**MARGARITA)
    storage.create(
        Recipe.new("Nachos", RecipeType.FOOD, "", [Ingredient(name="Chips")], ["Bake"])
    )

    assert [r.name for r in service.get_cocktail_recipes()] == ["Margarita"]


def test_update_recipe_revalidates_and_persists():
    service, storage = create_service()
    created = service.create_recipe(**MARGARITA)

    updated = service.update_recipe(
        created.id,
        "Tommy's Margarita",
        "Agave instead of triple sec",
        [Ingredient(name="Tequila", amount=2, unit="oz")],
        ["Shake"],
        "Rocks",
        "",
    )

    assert updated.id == created.id
    assert updated.updated_at >= created.updated_at
    assert storage.find_by_id(created.id).name == "Tommy's Margarita"


def test_update_recipe_rejects_invalid_changes_without_writing():
    service, storage = create_service()
    created = service.create_recipe(**MARGARITA)

    with pytest.raises(InvalidRecipeError):
        service.update_recipe(created.id, "Margarita", "", [Ingredient(name="Tequila")], ["Shake"])

    assert storage.find_by_id(created.id).ingredients == MARGARITA["ingredients"]


def test_update_missing_recipe_is_not_found():
    service, _ = create_service()

    with pytest.raises(RecipeNotFoundError):
        service.update_recipe("missing", **MARGARITA)


def test_delete_recipe_checks_existence_first():
    service, storage = create_service()
    created = service.create_recipe(**MARGARITA)

    service.delete_recipe(created.id)

    assert storage.find_by_id(created.id) is None
    with pytest.raises(RecipeNotFoundError):
        service.delete_recipe(created.id)


def test_search_recipes_narrows_to_cocktails_when_asked():
    repository = create_autospec(InMemoryRecipeStorage, instance=True)
    repository.search.return_value = []
    service = RecipeService(repository)

    service.search_recipes("lime", cocktails_only=True)
    service.search_recipes("lime")

    assert repository.search.call_args_list[0].args == ("lime", RecipeType.COCKTAIL)
    assert repository.search.call_args_list[1].args == ("lime", None)


def test_find_by_ingredient_requires_a_pattern():
    service, _ = create_service()
    service.create_recipe(**MARGARITA)

    with pytest.raises(InvalidRecipeError):
        service.find_by_ingredient("")
    assert [r.name for r in service.find_by_ingredient("lime")] == ["Margarita"]
