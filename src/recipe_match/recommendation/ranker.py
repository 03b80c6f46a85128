"""
ranker.py

Ranks a recipe corpus against the ingredients a user has on hand.

Pipeline per request:
  - validate + normalize the user's ingredient list
  - score every recipe with IngredientMatcher (match count, coverages,
    similarity = 0.7 * coverage_user + 0.3 * coverage_recipe)
  - bucket matches into tiers: perfect > high > good > other
  - assemble: perfect, high, good; top up from other to the target size;
    below the floor, append top-rated zero-match recipes as "suggested"

The corpus is a read-only snapshot. Records are built from shallow copies of
the recipe documents and the input is never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from recipe_match.datasets.base import is_recipe_document, recipe_ingredients, recipe_rating
from recipe_match.errors import ValidationError
from recipe_match.logging_utils import get_logger
from recipe_match.matching.matcher import (
    DEFAULT_WEIGHT_RECIPE,
    DEFAULT_WEIGHT_USER,
    IngredientMatcher,
)
from recipe_match.matching.text import normalize

logger = get_logger("ranker")

TIER_PERFECT = "perfect"
TIER_HIGH = "high"
TIER_GOOD = "good"
TIER_OTHER = "other"
TIER_SUGGESTED = "suggested"
TIERS = (TIER_PERFECT, TIER_HIGH, TIER_GOOD, TIER_OTHER, TIER_SUGGESTED)

PERFECT_MIN_USER = 0.9
PERFECT_MIN_RECIPE = 0.7
HIGH_MIN_USER = 0.8
GOOD_MIN_USER = 0.6


@dataclass
class RankingOptions:
    target_size: int = 15
    suggestion_floor: int = 3
    suggestion_limit: int = 5

    # Weighting knobs
    weight_user: float = DEFAULT_WEIGHT_USER
    weight_recipe: float = DEFAULT_WEIGHT_RECIPE


@dataclass
class RecipeMatchRecord:
    recipe: Dict[str, Any]
    match_count: float
    coverage_user: float
    coverage_recipe: float
    similarity_score: float
    tier: Optional[str]

    def as_output(self) -> Dict[str, Any]:
        """Recipe fields plus the caller-facing scores; coverages stay internal."""
        out = dict(self.recipe)
        out["similarityScore"] = self.similarity_score
        out["matchCount"] = self.match_count
        out["tier"] = self.tier
        return out


@dataclass
class RankedResult:
    results: List[RecipeMatchRecord]
    total_matches: int
    total_recipes: int
    tier_counts: Dict[str, int] = field(default_factory=lambda: {t: 0 for t in TIERS})

    def as_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.as_output() for r in self.results],
            "totalMatches": self.total_matches,
            "totalRecipes": self.total_recipes,
            "tierCounts": dict(self.tier_counts),
        }


def classify_tier(match_count: float, coverage_user: float, coverage_recipe: float) -> Optional[str]:
    if coverage_user >= PERFECT_MIN_USER and coverage_recipe >= PERFECT_MIN_RECIPE:
        return TIER_PERFECT
    if coverage_user >= HIGH_MIN_USER:
        return TIER_HIGH
    if coverage_user >= GOOD_MIN_USER:
        return TIER_GOOD
    if match_count > 0:
        return TIER_OTHER
    return None


def validate_ingredient_list(ingredients: Any) -> List[str]:
    """Raise ValidationError for anything but a non-empty list of strings."""
    if not isinstance(ingredients, (list, tuple)) or len(ingredients) == 0:
        raise ValidationError("Please provide an array of ingredients")
    if not all(isinstance(i, str) for i in ingredients):
        raise ValidationError("Every ingredient must be a string")
    return list(ingredients)


def normalize_user_ingredients(ingredients: Any) -> List[str]:
    """Validate the user's list and return trimmed, lowercased entries.

    Blank entries are dropped; a list of only blanks is rejected.
    """
    normalized = [normalize(i) for i in validate_ingredient_list(ingredients)]
    normalized = [n for n in normalized if n]
    if not normalized:
        raise ValidationError("Please provide at least one non-blank ingredient")
    return normalized


class RecipeRanker:
    def __init__(self, options: Optional[RankingOptions] = None) -> None:
        self.options = options or RankingOptions()
        self.matcher = IngredientMatcher(
            weight_user=self.options.weight_user,
            weight_recipe=self.options.weight_recipe,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def rank(self, user_ingredients: Sequence[str], corpus: Sequence[Any]) -> RankedResult:
        """
        Rank every recipe in `corpus` against `user_ingredients`.

        Returns:
            RankedResult with records ordered perfect, high, good, other
            (each by similarity desc, corpus order on ties), then suggestions.
        """
        users = normalize_user_ingredients(user_ingredients)
        corpus = list(corpus or [])

        scored = [self.score_recipe(users, recipe, position=i) for i, recipe in enumerate(corpus)]

        matching = [r for r in scored if r.match_count > 0]
        # sorted() is stable: equal similarity keeps corpus order
        matching = sorted(matching, key=lambda r: r.similarity_score, reverse=True)

        perfect = [r for r in matching if r.tier == TIER_PERFECT]
        high = [r for r in matching if r.tier == TIER_HIGH]
        good = [r for r in matching if r.tier == TIER_GOOD]
        other = [r for r in matching if r.tier == TIER_OTHER]

        results = perfect + high + good
        if len(results) < self.options.target_size:
            results = results + other[: self.options.target_size - len(results)]

        if len(results) < self.options.suggestion_floor:
            results = results + self._suggestions(corpus, scored)

        tier_counts = {t: 0 for t in TIERS}
        for r in results:
            tier_counts[r.tier] += 1

        logger.info(
            "Ranked %d recipe(s) for %d ingredient(s): %d match(es), %d returned",
            len(corpus),
            len(users),
            len(matching),
            len(results),
            extra={
                "invoking_func": "rank",
                "invoking_purpose": "Rank recipe corpus by ingredient coverage",
                "next_step": "Return RankedResult",
                "resolution": "",
            },
        )

        return RankedResult(
            results=results,
            total_matches=len(matching),
            total_recipes=len(corpus),
            tier_counts=tier_counts,
        )

    def score_recipe(self, users: Sequence[str], recipe: Any, *, position: int = -1) -> RecipeMatchRecord:
        if not is_recipe_document(recipe):
            logger.debug(
                "Corpus entry #%d is not a recipe document (%s); treating as zero ingredients",
                position,
                type(recipe).__name__,
                extra={
                    "invoking_func": "score_recipe",
                    "invoking_purpose": "Score one recipe against user ingredients",
                    "next_step": "Continue with next recipe",
                    "resolution": "Fix the stored document",
                },
            )
        ingredients = recipe_ingredients(recipe)
        scores = self.matcher.match_recipe(users, ingredients)
        tier = classify_tier(scores.match_count, scores.coverage_user, scores.coverage_recipe)
        return RecipeMatchRecord(
            recipe=dict(recipe) if is_recipe_document(recipe) else {},
            match_count=scores.match_count,
            coverage_user=scores.coverage_user,
            coverage_recipe=scores.coverage_recipe,
            similarity_score=scores.similarity_score,
            tier=tier,
        )

    # ------------------------------------------------------------------
    # Fallback suggestions
    # ------------------------------------------------------------------
    def _suggestions(self, corpus: Sequence[Any], scored: Sequence[RecipeMatchRecord]) -> List[RecipeMatchRecord]:
        candidates = [
            (recipe_rating(recipe), rec)
            for recipe, rec in zip(corpus, scored)
            if rec.match_count == 0 and is_recipe_document(recipe)
        ]
        candidates = sorted(candidates, key=lambda x: x[0], reverse=True)
        out: List[RecipeMatchRecord] = []
        for _, rec in candidates[: self.options.suggestion_limit]:
            rec.tier = TIER_SUGGESTED
            out.append(rec)
        return out


def rank(
    user_ingredients: Sequence[str],
    corpus: Sequence[Any],
    options: Optional[RankingOptions] = None,
) -> RankedResult:
    return RecipeRanker(options).rank(user_ingredients, corpus)
