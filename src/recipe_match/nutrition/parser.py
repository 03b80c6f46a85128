"""
parser.py

Purpose:
    Parse one free-text ingredient line into quantity + unit + name.

    "1/2 cup flour"      -> ParsedIngredientLine(0.5, "cup", "flour")
    "2 tbsp olive oil"   -> ParsedIngredientLine(2.0, "tablespoon", "olive oil")
    "tomato"             -> ParsedIngredientLine(1.0, None, "tomato")

Parsing never fails: anything unrecognised degrades to quantity 1,
no unit, and the whole normalized line as the name.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from recipe_match.matching.text import normalize

DEFAULT_QUANTITY = 1.0

# Canonical units; None means "per item / unit-less"
UNIT_SYNONYMS = {
    "cup": "cup",
    "cups": "cup",
    "tablespoon": "tablespoon",
    "tablespoons": "tablespoon",
    "tbsp": "tablespoon",
    "teaspoon": "teaspoon",
    "teaspoons": "teaspoon",
    "tsp": "teaspoon",
    "whole": "whole",
    "white": "white",
    "ounce": "ounce",
    "ounces": "ounce",
    "oz": "ounce",
}

# Longest alternatives first so "cups" wins over "cup"
_UNIT_ALTERNATION = "|".join(sorted(UNIT_SYNONYMS, key=len, reverse=True))
_LINE_PATTERN = re.compile(
    rf"^([\d./]+)?\s*(?:({_UNIT_ALTERNATION})\b)?\s*(.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class ParsedIngredientLine:
    quantity: float
    unit: Optional[str]
    name: str


def parse_amount(raw: Optional[str]) -> float:
    """Integer, decimal or simple fraction a/b; anything else is 1."""
    if not raw:
        return DEFAULT_QUANTITY
    try:
        if "/" in raw:
            num, denom = raw.split("/")
            value = float(num) / float(denom)
        else:
            value = float(raw)
    except (ValueError, ZeroDivisionError):
        return DEFAULT_QUANTITY
    if not math.isfinite(value) or value < 0:
        return DEFAULT_QUANTITY
    return value


def canonical_unit(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    return UNIT_SYNONYMS.get(raw.lower())


def parse_ingredient_line(line: Any) -> ParsedIngredientLine:
    text = normalize(line)
    match = _LINE_PATTERN.match(text)
    if not match:
        return ParsedIngredientLine(quantity=DEFAULT_QUANTITY, unit=None, name=text)

    amount, unit, rest = match.groups()
    return ParsedIngredientLine(
        quantity=parse_amount(amount),
        unit=canonical_unit(unit),
        name=(rest or "").strip(),
    )


class IngredientParser:
    """Object form of parse_ingredient_line for callers that inject a parser."""

    def parse(self, line: Any) -> ParsedIngredientLine:
        return parse_ingredient_line(line)
