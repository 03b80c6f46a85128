"""
service.py

Engine facade used by the HTTP layer (and scripts/match_run.py).

Responsibilities kept here, not in the engine modules:
  - caller-side validation of ingredient input
  - choosing the corpus snapshot (argument or injected supplier)
  - per-serving view on top of nutrition totals

Collaborators are injected so the service has no hidden singletons:
  corpus_supplier   -> callable returning a list of recipe documents
  reference_loader  -> ReferenceTableLoader (defaults to the process-wide one)
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

from recipe_match.config import EngineSettings, get_engine_settings
from recipe_match.logging_utils import get_logger
from recipe_match.nutrition.aggregator import NutritionAggregator, NutritionTotals, per_serving
from recipe_match.nutrition.reference import (
    ReferenceIngredientEntry,
    ReferenceTableLoader,
    get_default_loader,
)
from recipe_match.recommendation.ranker import (
    RankedResult,
    RankingOptions,
    RecipeRanker,
    validate_ingredient_list,
)

logger = get_logger("service")

CorpusSupplier = Callable[[], List[Dict[str, Any]]]


class RecipeMatchService:
    def __init__(
        self,
        corpus_supplier: Optional[CorpusSupplier] = None,
        reference_loader: Optional[ReferenceTableLoader] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.settings = settings or get_engine_settings()
        self.corpus_supplier = corpus_supplier
        self.reference_loader = reference_loader or get_default_loader()
        self.ranker = RecipeRanker(
            RankingOptions(
                target_size=self.settings.target_size,
                suggestion_floor=self.settings.suggestion_floor,
                suggestion_limit=self.settings.suggestion_limit,
            )
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search_by_ingredients(
        self, ingredients: Any, corpus: Optional[Sequence[Any]] = None
    ) -> RankedResult:
        users = validate_ingredient_list(ingredients)
        if corpus is None:
            if self.corpus_supplier is None:
                logger.warning(
                    "No corpus given and no corpus supplier configured",
                    extra={
                        "invoking_func": "search_by_ingredients",
                        "invoking_purpose": "Search recipes by ingredients",
                        "next_step": "Rank an empty corpus",
                        "resolution": "Pass corpus= or construct the service with corpus_supplier",
                    },
                )
                corpus = []
            else:
                corpus = self.corpus_supplier()
        return self.ranker.rank(users, corpus)

    # ------------------------------------------------------------------
    # Nutrition
    # ------------------------------------------------------------------
    def calculate_nutrition(self, ingredients: Any) -> Dict[str, NutritionTotals]:
        lines = validate_ingredient_list(ingredients)
        totals = NutritionAggregator(self.reference_loader.load()).aggregate(lines)
        return {
            "total": totals,
            "perServing": per_serving(totals, self.settings.serving_divisor),
        }

    def reference_ingredients(self) -> Dict[str, ReferenceIngredientEntry]:
        return self.reference_loader.ingredients()
