# datasets/base.py
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, List

# Recipe documents come from a document store and are duck-typed:
#   ingredients  -> list[str] normally, sometimes a string, None or absent
#   averageRating -> number 0..5, may be missing
INGREDIENTS_FIELD = "ingredients"
RATING_FIELD = "averageRating"


def is_recipe_document(recipe: Any) -> bool:
    return isinstance(recipe, Mapping)


def recipe_ingredients(recipe: Any) -> List[str]:
    """Return the recipe's ingredients as an ordered list of strings.

    Only a list (or tuple) counts as an ingredient list; a string, a number
    or a nested dict yields an empty list. Non-string items become "" so
    they still count toward the recipe's size but never match.
    """
    if not is_recipe_document(recipe):
        return []
    raw = recipe.get(INGREDIENTS_FIELD)
    if isinstance(raw, (list, tuple)):
        return [item if isinstance(item, str) else "" for item in raw]
    return []


def recipe_rating(recipe: Any) -> float:
    if not is_recipe_document(recipe):
        return 0.0
    raw = recipe.get(RATING_FIELD)
    if isinstance(raw, bool):
        return 0.0
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0
