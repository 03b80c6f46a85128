"""
corpus.py

Purpose:
    Recipe corpus suppliers for search requests.

    Both suppliers return a *snapshot*: plain dicts that the ranker can read
    without ever touching the store again. Ranking never writes to them.

Usage:
    from recipe_match.datasets.corpus import fetch_recipe_corpus, load_recipe_corpus
"""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from supabase import Client

from recipe_match.errors import MalformedRecipeData
from recipe_match.logging_utils import get_logger

logger = get_logger("corpus")

PAGE_SIZE = 1000


def load_recipe_corpus(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load recipes from a JSON file.

    The file holds either a list of recipe objects or {"recipes": [...]}.
    A missing file is an empty corpus.
    """
    p = Path(path)
    if not p.exists():
        logger.warning(
            "Corpus file %s not found; using empty corpus",
            p,
            extra={
                "invoking_func": "load_recipe_corpus",
                "invoking_purpose": "Read recipe corpus snapshot from disk",
                "next_step": "Return []",
                "resolution": "Check the --corpus path",
            },
        )
        return []
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("recipes")
    if not isinstance(data, list):
        raise MalformedRecipeData(str(p), "expected a list of recipes or {'recipes': [...]}")

    logger.info(
        "Loaded %d recipe(s) from %s",
        len(data),
        p,
        extra={
            "invoking_func": "load_recipe_corpus",
            "invoking_purpose": "Read recipe corpus snapshot from disk",
            "next_step": "Rank corpus",
            "resolution": "",
        },
    )
    return data


def fetch_recipe_corpus(
    client: Client,
    *,
    table: str = "recipes",
    columns: str = "*",
    page_size: int = PAGE_SIZE,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Read the whole recipe table from Supabase in pages.

    Returns deep copies so later writes to the store (or to the client's
    response objects) are never observed by a ranking in progress.
    """
    rows: List[Dict[str, Any]] = []
    start = 0
    while True:
        end = start + page_size - 1
        if limit is not None:
            end = min(end, limit - 1)
        res = client.table(table).select(columns).range(start, end).execute()
        batch = res.data or []
        rows.extend(batch)
        if len(batch) < (end - start + 1):
            break
        if limit is not None and len(rows) >= limit:
            break
        start = end + 1

    logger.info(
        "Fetched %d recipe(s) from table '%s'",
        len(rows),
        table,
        extra={
            "invoking_func": "fetch_recipe_corpus",
            "invoking_purpose": "Snapshot recipe corpus from Supabase",
            "next_step": "Rank corpus",
            "resolution": "",
        },
    )
    return copy.deepcopy(rows)
