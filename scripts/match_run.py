"""
match_run.py

Purpose:
    Command-line runner for the ingredient-matching engine.

    - search mode (default): rank a recipe corpus against the given
      ingredients and print the ranked result as JSON
    - nutrition mode (--nutrition): treat the ingredients as recipe lines
      and print total + per-serving nutrition as JSON

Usage:
    python scripts/match_run.py --corpus data/sample_recipes.json -i egg -i flour
    python scripts/match_run.py --supabase -i "egg, milk, sugar"
    python scripts/match_run.py --nutrition -i "1/2 cup flour" -i "2 tbsp butter"
"""

from __future__ import annotations

import argparse
import datetime
import json
import sys
from typing import List

from recipe_match.config import get_supabase_client
from recipe_match.datasets.corpus import fetch_recipe_corpus, load_recipe_corpus
from recipe_match.errors import RecipeMatchError
from recipe_match.logging_utils import LOG_RUN_ID, log_error, log_info
from recipe_match.service import RecipeMatchService

MODULE_PURPOSE = "Command-line runner for recipe search and nutrition totals."


# ---------------------------------------------------------------------------
# RUN BANNER
# ---------------------------------------------------------------------------
def print_run_banner(mode: str, ingredients: List[str]) -> None:
    now = datetime.datetime.now(datetime.timezone.utc)
    banner = [
        "\n===============================================================",
        "  RECIPE-MATCH RUN",
        f"  Run ID       : {LOG_RUN_ID}",
        f"  UTC Time     : {now.strftime('%Y-%m-%d %H:%M:%S')}",
        f"  Mode         : {mode}",
        "  Ingredients  :",
    ]
    for ing in ingredients:
        banner.append(f"    • {ing}")
    banner.append("===============================================================\n")
    print("\n".join(banner), file=sys.stderr)


def collect_ingredients(raw: List[str], split_commas: bool) -> List[str]:
    """Flatten repeated -i flags; search mode also splits comma lists."""
    out: List[str] = []
    for item in raw or []:
        parts = item.split(",") if split_commas else [item]
        out.extend(p.strip() for p in parts if p.strip())
    return out


def run(args) -> int:
    mode = "nutrition" if args.nutrition else "search"
    # Nutrition lines may legitimately contain commas ("1 cup flour, sifted")
    ingredients = collect_ingredients(args.ingredients, split_commas=not args.nutrition)
    print_run_banner(mode, ingredients)

    if args.nutrition:
        service = RecipeMatchService()
        data = service.calculate_nutrition(ingredients)
        payload = {"success": True, "data": {k: v.as_dict() for k, v in data.items()}}
    else:
        if args.supabase:
            client = get_supabase_client()
            supplier = lambda: fetch_recipe_corpus(client, table=args.table)  # noqa: E731
        else:
            supplier = lambda: load_recipe_corpus(args.corpus)  # noqa: E731
        service = RecipeMatchService(corpus_supplier=supplier)
        result = service.search_by_ingredients(ingredients).as_dict()
        payload = {"success": True, "count": len(result["results"]), **result}

    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
    log_info(
        f"{mode} run finished",
        module_purpose=MODULE_PURPOSE,
        invoking_function="run",
        invoking_purpose="Execute one CLI request",
        next_step="Exit",
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recipe ingredient matching runner")
    parser.add_argument(
        "-i",
        "--ingredients",
        action="append",
        default=[],
        help="Ingredient (repeatable). Search mode also accepts comma lists.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--corpus", default="data/sample_recipes.json", help="Recipe corpus JSON file")
    source.add_argument("--supabase", action="store_true", help="Read the corpus from Supabase")
    parser.add_argument("--table", default="recipes", help="Supabase table holding recipes")
    parser.add_argument("--nutrition", action="store_true", help="Compute nutrition instead of searching")
    return parser


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except RecipeMatchError as exc:
        log_error(
            "Request rejected",
            module_purpose=MODULE_PURPOSE,
            invoking_function="main",
            invoking_purpose="CLI entry point",
            next_step="Exit with status 2",
            resolution="Pass at least one ingredient with -i",
            exc=exc,
        )
        print(json.dumps({"success": False, "error": str(exc)}), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
