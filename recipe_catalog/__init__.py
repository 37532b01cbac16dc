import atexit
import json
import logging
from typing import Optional

import click
from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from .api import bp as recipes_bp
from .config import Config
from .errors import (
    InvalidRecipeError,
    InvalidRecipeIdError,
    RecipeError,
    RecipeNotFoundError,
    UnauthorizedError,
)
from .gcp_storage import FirestoreRecipeStorage, index_definitions
from .logs import configure_logging
from .memory_storage import InMemoryRecipeStorage
from .models import Ingredient, Recipe, RecipeType
from .service import RecipeService
from .storage import RecipeRepository

logger = logging.getLogger(__name__)

CORS_ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"

ERROR_STATUS = {
    InvalidRecipeError: 400,
    InvalidRecipeIdError: 400,
    UnauthorizedError: 401,
    RecipeNotFoundError: 404,
}


def create_app(storage: Optional[RecipeRepository] = None, config: Optional[Config] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the backend named by
        ``config.store`` is built, which is Firestore unless configured
        otherwise.
    config:
        Optional configuration. Defaults to :meth:`Config.from_env`.
    """

    config = Config.from_env() if config is None else config
    configure_logging(config.log_level, config.log_format)

    app = Flask(__name__)
    app.config["LOG_REQUEST_BODIES"] = config.log_request_bodies
    app.config["CORS_ORIGINS"] = config.cors_origins

    if storage is None:
        storage = _build_storage(config)
        atexit.register(storage.close)
    app.config["RECIPE_STORAGE"] = storage
    app.config["RECIPE_SERVICE"] = RecipeService(storage)

    app.register_blueprint(recipes_bp)

    @app.get("/api/health")
    def health() -> Response:
        return jsonify(status="healthy", database="connected")

    @app.cli.command("export-indexes")
    def export_indexes() -> None:
        """Print the Firestore index definitions used by the recipe queries."""

        click.echo(json.dumps(index_definitions(config.recipes_collection), indent=2))

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        origin = request.headers.get("Origin")
        if origin and origin in app.config["CORS_ORIGINS"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Methods"] = CORS_ALLOWED_METHODS
            requested = request.headers.get("Access-Control-Request-Headers")
            response.headers["Access-Control-Allow-Headers"] = requested or "*"
            response.vary.add("Origin")
        return response

    @app.after_request
    def log_request(response: Response) -> Response:
        logger.info(
            "%s %s %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "remote_addr": request.remote_addr,
            },
        )
        return response

    @app.errorhandler(RecipeError)
    def handle_recipe_error(exc: RecipeError):
        status = ERROR_STATUS.get(type(exc), 400)
        return jsonify(error=str(exc)), status

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        response = jsonify(error=exc.description)
        response.status_code = exc.code or 500
        for name, value in exc.get_headers():
            if name.lower() != "content-type":
                response.headers[name] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(error="Internal server error"), 500

    return app


def _build_storage(config: Config) -> RecipeRepository:
    if config.store == "memory":
        logger.warning("Using in-memory recipe storage; data is lost on restart.")
        return InMemoryRecipeStorage()
    return FirestoreRecipeStorage.from_config(config)


__all__ = ["create_app", "Ingredient", "Recipe", "RecipeType"]
