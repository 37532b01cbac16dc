"""Errors raised by the recipe service and mapped to HTTP responses by the web layer."""

from __future__ import annotations


class RecipeError(Exception):
    """Base class for recipe domain errors."""

    message = "recipe error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidRecipeError(RecipeError):
    message = "invalid recipe data"


class RecipeNotFoundError(RecipeError):
    message = "recipe not found"


class UnauthorizedError(RecipeError):
    """Reserved for access control; nothing raises it yet."""

    message = "unauthorized"


class InvalidRecipeIdError(RecipeError):
    message = "invalid recipe id"


__all__ = [
    "InvalidRecipeError",
    "InvalidRecipeIdError",
    "RecipeError",
    "RecipeNotFoundError",
    "UnauthorizedError",
]
