"""Text matching shared by the recipe repositories.

Firestore has no full-text index, so each stored recipe carries a precomputed
``search_terms`` array (distinct lowercase word tokens of its name,
description and ingredient names) and an ``ingredient_names`` array. A search
hit is either a query token found among the search terms, or the whole query
appearing inside an ingredient name.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from .models import Recipe

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def tokenize(text: str) -> List[str]:
    """Split ``text`` into lowercase word tokens, preserving order and duplicates."""

    return [token.casefold() for token in _TOKEN_RE.findall(text or "")]


def search_terms(recipe: Recipe) -> List[str]:
    fields = [recipe.name, recipe.description]
    fields.extend(ingredient.name for ingredient in recipe.ingredients)

    terms = set()
    for value in fields:
        terms.update(tokenize(value))
    return sorted(terms)


def ingredient_names(recipe: Recipe) -> List[str]:
    return [ingredient.name.casefold() for ingredient in recipe.ingredients]


def text_score(query: str, terms: Iterable[str]) -> int:
    """Return how many distinct query tokens occur in ``terms``."""

    available = set(terms)
    return sum(1 for token in set(tokenize(query)) if token in available)


def matches_ingredient(pattern: str, names: Sequence[str]) -> bool:
    """Case-insensitive literal substring match of ``pattern`` against ingredient names."""

    needle = pattern.casefold()
    return any(needle in name.casefold() for name in names)


Candidate = Tuple[Recipe, Sequence[str], Sequence[str]]


def candidate(recipe: Recipe) -> Candidate:
    """Pair ``recipe`` with freshly derived search terms and ingredient names."""

    return recipe, search_terms(recipe), ingredient_names(recipe)


def rank(query: str, candidates: Iterable[Candidate]) -> List[Recipe]:
    """Filter ``candidates`` to search hits, best text score first.

    Each candidate is a ``(recipe, search_terms, ingredient_names)`` tuple so
    stores can supply the arrays they persisted. Ingredient-only hits score
    zero and keep their relative store order.
    """

    scored = []
    for position, (recipe, terms, names) in enumerate(candidates):
        score = text_score(query, terms)
        if score == 0 and not matches_ingredient(query, names):
            continue
        scored.append((-score, position, recipe))

    scored.sort(key=lambda item: (item[0], item[1]))
    return [recipe for _, _, recipe in scored]


__all__ = [
    "Candidate",
    "candidate",
    "ingredient_names",
    "matches_ingredient",
    "rank",
    "search_terms",
    "text_score",
    "tokenize",
]
