from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from . import search
from .config import Config
from .models import Ingredient, Recipe, RecipeType, utcnow
from .storage import RecipeRepository

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def index_definitions(collection_name: str = "recipes") -> Dict[str, Any]:
    """Return the ``firestore.indexes.json`` document the repository's queries rely on."""

    return {
        "indexes": [
            {
                "collectionGroup": collection_name,
                "queryScope": "COLLECTION",
                "fields": [
                    {"fieldPath": "type", "order": "ASCENDING"},
                    {"fieldPath": "created_at", "order": "DESCENDING"},
                ],
            },
        ],
    }


def _parse_ingredient(data: Any) -> Optional[Ingredient]:
    if not isinstance(data, dict):
        return None

    amount = data.get("amount", 0)
    return Ingredient(
        name=data.get("name") or "",
        amount=float(amount) if isinstance(amount, (int, float)) else 0.0,
        unit=data.get("unit") or "",
        notes=data.get("notes") or "",
        is_optional=bool(data.get("is_optional", False)),
    )


def _parse_strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


class FirestoreRecipeStorage(RecipeRepository):
    """Recipe repository backed by a Firestore collection.

    Every call carries an explicit deadline and runs without the client
    library's automatic retries, so a slow or failing store surfaces to the
    caller straight away.
    """

    def __init__(
        self,
        *,
        client: Optional[firestore.Client] = None,
        project: Optional[str] = None,
        database: Optional[str] = None,
        collection_name: str = "recipes",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._collection_name = collection_name
        self._timeout = timeout

        if client is None:
            client = firestore.Client(project=project, database=database)
        self._firestore_client = client
        self._collection = self._firestore_client.collection(collection_name)

    @classmethod
    def from_config(cls, config: Config) -> "FirestoreRecipeStorage":
        """Build a storage instance from application configuration."""

        return cls(
            project=config.gcp_project,
            database=config.firestore_database,
            collection_name=config.recipes_collection,
            timeout=config.store_timeout,
        )

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def _call_options(self) -> Dict[str, Any]:
        return {"retry": None, "timeout": self._timeout}

    def create(self, recipe: Recipe) -> None:
        if recipe.id:
            raise ValueError("Recipe has already been stored.")

        doc_ref = self._collection.document()
        doc_ref.create(self._recipe_to_doc(recipe), **self._call_options())
        recipe.id = doc_ref.id
        logger.debug("Inserted recipe document %s", doc_ref.id)

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        snapshot = self._collection.document(recipe_id).get(**self._call_options())

        if not snapshot.exists:
            return None

        data = snapshot.to_dict() or {}
        return self._doc_to_recipe(snapshot.id, data)

    def find_by_type(self, recipe_type: RecipeType) -> List[Recipe]:
        query = self._type_query(recipe_type)
        return [self._doc_to_recipe(doc.id, doc.to_dict() or {}) for doc in self._stream(query)]

    def find_by_ingredient(self, pattern: str) -> List[Recipe]:
        recipes = []
        for recipe, _, names in self._candidates(self._type_query(None)):
            if search.matches_ingredient(pattern, names):
                recipes.append(recipe)
        return recipes

    def update(self, recipe: Recipe) -> None:
        if not recipe.id:
            raise ValueError("Cannot update a recipe that has not been stored.")

        doc_ref = self._collection.document(recipe.id)
        doc_ref.set(self._recipe_to_doc(recipe), **self._call_options())

    def delete(self, recipe_id: str) -> None:
        # Firestore deletes of missing documents succeed silently.
        self._collection.document(recipe_id).delete(**self._call_options())

    def search(self, query: str, recipe_type: Optional[RecipeType] = None) -> List[Recipe]:
        return search.rank(query, self._candidates(self._type_query(recipe_type)))

    def close(self) -> None:
        self._firestore_client.close()

    def _type_query(self, recipe_type: Optional[RecipeType]):
        query = self._collection
        if recipe_type is not None:
            query = query.where(filter=FieldFilter("type", "==", recipe_type.value))
        return query.order_by("created_at", direction=firestore.Query.DESCENDING)

    def _stream(self, query) -> Iterable[Any]:
        return query.stream(**self._call_options())

    def _candidates(self, query) -> Iterable[search.Candidate]:
        for doc in self._stream(query):
            data = doc.to_dict() or {}
            recipe = self._doc_to_recipe(doc.id, data)

            terms = data.get("search_terms")
            names = data.get("ingredient_names")
            if not isinstance(terms, list) or not isinstance(names, list):
                # Documents written before the derived fields existed.
                yield search.candidate(recipe)
                continue
            yield recipe, _parse_strings(terms), _parse_strings(names)

    def _recipe_to_doc(self, recipe: Recipe) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "name": recipe.name,
            "type": recipe.type.value,
            "description": recipe.description,
            "ingredients": [ingredient.to_dict() for ingredient in recipe.ingredients],
            "instructions": list(recipe.instructions),
            "created_at": recipe.created_at,
            "updated_at": recipe.updated_at,
            "search_terms": search.search_terms(recipe),
            "ingredient_names": search.ingredient_names(recipe),
        }
        if recipe.glass:
            doc["glass"] = recipe.glass
        if recipe.garnish:
            doc["garnish"] = recipe.garnish
        return doc

    def _doc_to_recipe(self, doc_id: str, data: dict) -> Recipe:
        raw_ingredients = data.get("ingredients")
        ingredients: List[Ingredient] = []
        if isinstance(raw_ingredients, list):
            for item in raw_ingredients:
                ingredient = _parse_ingredient(item)
                if ingredient is not None:
                    ingredients.append(ingredient)

        try:
            recipe_type = RecipeType(data.get("type", RecipeType.COCKTAIL.value))
        except ValueError:
            logger.warning("Recipe document %s has unknown type %r", doc_id, data.get("type"))
            recipe_type = RecipeType.COCKTAIL

        created_at = data.get("created_at")
        if not isinstance(created_at, datetime):
            created_at = utcnow()

        updated_at = data.get("updated_at")
        if not isinstance(updated_at, datetime):
            updated_at = created_at

        return Recipe(
            id=doc_id,
            name=data.get("name", ""),
            type=recipe_type,
            description=data.get("description", ""),
            ingredients=ingredients,
            instructions=_parse_strings(data.get("instructions")),
            glass=data.get("glass", ""),
            garnish=data.get("garnish", ""),
            created_at=created_at,
            updated_at=updated_at,
        )


__all__ = ["FirestoreRecipeStorage", "index_definitions"]
