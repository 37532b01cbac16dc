from __future__ import annotations

import logging
from typing import Iterable

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from .config import parse_bool
from .models import Recipe
from .schemas import RecipePayload
from .service import RecipeService
from .storage import parse_recipe_id

logger = logging.getLogger(__name__)

bp = Blueprint("recipes", __name__, url_prefix="/api/recipes")


def _service() -> RecipeService:
    return current_app.config["RECIPE_SERVICE"]


def _log_body(message: str, body: object) -> None:
    if current_app.config.get("LOG_REQUEST_BODIES"):
        logger.debug(message, extra={"body": body, "path": request.path})


def _parse_payload() -> RecipePayload:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Invalid request body: expected a JSON object.")

    try:
        payload = RecipePayload.model_validate(data)
    except ValidationError as exc:
        raise BadRequest(f"Invalid request body: {exc.error_count()} invalid field(s).") from exc

    _log_body("Received recipe body", payload.model_dump())
    return payload


def _recipe_response(recipe: Recipe, status: int = 200) -> tuple[Response, int]:
    body = recipe.to_dict()
    _log_body("Sending recipe", body)
    return jsonify(body), status


def _recipes_response(recipes: Iterable[Recipe]) -> Response:
    body = [recipe.to_dict() for recipe in recipes]
    _log_body("Sending recipes", body)
    return jsonify(body)


def _required_query(message: str) -> str:
    value = request.args.get("q", "")
    if not value:
        raise BadRequest(message)
    return value


@bp.post("")
def create_recipe():
    payload = _parse_payload()
    recipe = _service().create_recipe(
        payload.name,
        payload.description,
        payload.ingredient_list(),
        payload.instructions,
        payload.glass,
        payload.garnish,
    )
    return _recipe_response(recipe, 201)


@bp.get("")
def list_cocktail_recipes():
    return _recipes_response(_service().get_cocktail_recipes())


@bp.get("/search")
def search_recipes():
    query = _required_query("Search query is required.")
    cocktails_only = parse_bool(request.args.get("cocktails_only"))
    return _recipes_response(_service().search_recipes(query, cocktails_only))


@bp.get("/by-ingredient")
def find_by_ingredient():
    ingredient = _required_query("Ingredient query is required.")
    return _recipes_response(_service().find_by_ingredient(ingredient))


@bp.get("/<recipe_id>")
def get_recipe(recipe_id: str):
    recipe = _service().get_recipe_by_id(parse_recipe_id(recipe_id))
    return _recipe_response(recipe)


@bp.put("/<recipe_id>")
def update_recipe(recipe_id: str):
    recipe_id = parse_recipe_id(recipe_id)
    payload = _parse_payload()
    recipe = _service().update_recipe(
        recipe_id,
        payload.name,
        payload.description,
        payload.ingredient_list(),
        payload.instructions,
        payload.glass,
        payload.garnish,
    )
    return _recipe_response(recipe)


@bp.delete("/<recipe_id>")
def delete_recipe(recipe_id: str):
    _service().delete_recipe(parse_recipe_id(recipe_id))
    return "", 204


__all__ = ["bp"]
