# src/recipe_match/matching/text.py
from __future__ import annotations

"""
text.py

Purpose:
    Deterministic text helpers shared by the matcher and the parser.

    This is the "Layer 0" of ingredient matching: no fuzzy libraries,
    just trim / lowercase / whitespace tokens.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Tuple

# Tokens of this length or shorter ("of", "a", "to") are noise.
MIN_TOKEN_LENGTH = 3

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class IngredientToken:
    raw: str
    normalized: str
    words: Tuple[str, ...]


def normalize(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return text.strip().lower()


def tokenize(text: Any) -> List[str]:
    """Split a string on whitespace and drop tokens of 2 chars or less."""
    t = normalize(text)
    if not t:
        return []
    return [w for w in _WHITESPACE.split(t) if len(w) >= MIN_TOKEN_LENGTH]


def make_token(raw: Any) -> IngredientToken:
    raw_str = raw if isinstance(raw, str) else ""
    return IngredientToken(
        raw=raw_str,
        normalized=normalize(raw_str),
        words=tuple(tokenize(raw_str)),
    )
