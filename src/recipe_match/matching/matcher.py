"""
matcher.py

Scores how well a user's ingredient list covers one recipe's ingredient list.

Three match tiers per user ingredient, first hit wins (scores are never
summed across tiers for the same user ingredient):

  1. exact      normalized strings are equal                 -> 1.0
  2. substring  one normalized string contains the other     -> 0.8
  3. word       token overlap with the first recipe
                ingredient that shares any token             -> 0.5 * overlap / user tokens

A reverse pass flags which recipe ingredients are covered by any user
ingredient (equality or substring in either direction); that count
drives coverage_recipe.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from recipe_match.matching.text import make_token, normalize

EXACT_WEIGHT = 1.0
SUBSTRING_WEIGHT = 0.8
WORD_WEIGHT = 0.5

DEFAULT_WEIGHT_USER = 0.7
DEFAULT_WEIGHT_RECIPE = 0.3


@dataclass(frozen=True)
class MatchOutcome:
    score: float
    kind: Optional[str] = None  # "exact" | "substring" | "word"

    @property
    def matched(self) -> bool:
        return self.kind is not None


@dataclass(frozen=True)
class RecipeMatchScores:
    match_count: float
    recipe_match_count: int
    coverage_user: float
    coverage_recipe: float
    similarity_score: float


NO_MATCH = MatchOutcome(score=0.0, kind=None)


def _contains_either(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return a in b or b in a


def _word_overlap(user_words: Sequence[str], recipe_words: Sequence[str]) -> int:
    count = 0
    for uw in user_words:
        if any(_contains_either(uw, rw) for rw in recipe_words):
            count += 1
    return count


class IngredientMatcher:
    def __init__(
        self,
        weight_user: float = DEFAULT_WEIGHT_USER,
        weight_recipe: float = DEFAULT_WEIGHT_RECIPE,
    ) -> None:
        self.weight_user = weight_user
        self.weight_recipe = weight_recipe

    # ------------------------------------------------------------------
    # Single user ingredient
    # ------------------------------------------------------------------
    def match_score(self, user_ingredient: str, recipe_ingredients: Sequence[str]) -> MatchOutcome:
        """
        Score one user ingredient against a recipe's ingredients.

        Both sides are normalized here, so callers may pass raw strings.
        Returns NO_MATCH for empty input on either side.
        """
        user = make_token(user_ingredient)
        if not user.normalized:
            return NO_MATCH
        recipe = [make_token(r) for r in recipe_ingredients]

        if any(r.normalized == user.normalized for r in recipe):
            return MatchOutcome(score=EXACT_WEIGHT, kind="exact")

        if any(_contains_either(user.normalized, r.normalized) for r in recipe):
            return MatchOutcome(score=SUBSTRING_WEIGHT, kind="substring")

        user_words = user.words
        if not user_words:
            return NO_MATCH
        for r in recipe:
            overlap = _word_overlap(user_words, r.words)
            if overlap > 0:
                # Only the first overlapping recipe ingredient counts
                return MatchOutcome(
                    score=WORD_WEIGHT * (overlap / len(user_words)),
                    kind="word",
                )
        return NO_MATCH

    # ------------------------------------------------------------------
    # Reverse containment
    # ------------------------------------------------------------------
    def recipe_coverage_flags(
        self, user_ingredients: Sequence[str], recipe_ingredients: Sequence[str]
    ) -> List[bool]:
        users = [u for u in (normalize(x) for x in user_ingredients) if u]
        flags: List[bool] = []
        for r in recipe_ingredients:
            rn = normalize(r)
            flags.append(bool(rn) and any(_contains_either(u, rn) for u in users))
        return flags

    # ------------------------------------------------------------------
    # Whole recipe
    # ------------------------------------------------------------------
    def match_recipe(
        self, user_ingredients: Sequence[str], recipe_ingredients: Sequence[str]
    ) -> RecipeMatchScores:
        match_count = 0.0
        for u in user_ingredients:
            match_count += self.match_score(u, recipe_ingredients).score

        recipe_match_count = sum(1 for f in self.recipe_coverage_flags(user_ingredients, recipe_ingredients) if f)

        # Denominators floored at 1 so empty lists never divide by zero
        coverage_user = match_count / max(1, len(user_ingredients))
        coverage_recipe = recipe_match_count / max(1, len(recipe_ingredients))
        similarity = (self.weight_user * coverage_user) + (self.weight_recipe * coverage_recipe)

        return RecipeMatchScores(
            match_count=match_count,
            recipe_match_count=recipe_match_count,
            coverage_user=coverage_user,
            coverage_recipe=coverage_recipe,
            similarity_score=similarity,
        )
