"""
aggregator.py

Aggregates nutrient totals over free-text ingredient lines.

For every line:
  1. parse it (quantity, unit, name)
  2. resolve the name against the reference table:
       exact key -> a key contains the name -> name contains a key
     Unresolved names are skipped and contribute nothing.
  3. convert the parsed unit to the entry's unit (tablespoon/teaspoon/cup)
  4. add multiplier * per-unit value to each of the five nutrients

Totals are rounded to one decimal at the end. The per-serving view is a
caller-side helper (per_serving) and not part of aggregate().
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from recipe_match.errors import ValidationError
from recipe_match.logging_utils import get_logger
from recipe_match.nutrition.parser import ParsedIngredientLine, parse_ingredient_line
from recipe_match.nutrition.reference import ReferenceIngredientEntry

logger = get_logger("aggregator")

# nutrient -> (display unit, reference field)
NUTRIENTS: Dict[str, Tuple[str, str]] = {
    "calories": ("kcal", "calories_per_unit"),
    "protein": ("g", "protein_per_unit"),
    "carbs": ("g", "carbs_per_unit"),
    "fats": ("g", "fats_per_unit"),
    "fiber": ("g", "fiber_per_unit"),
}

# (from unit, to unit) -> divisor
UNIT_CONVERSIONS: Dict[Tuple[str, str], float] = {
    ("tablespoon", "cup"): 16.0,
    ("teaspoon", "tablespoon"): 3.0,
    ("teaspoon", "cup"): 48.0,
}

DEFAULT_SERVINGS = 4


@dataclass
class NutrientQuantity:
    value: float
    unit: str

    def as_dict(self) -> Dict[str, object]:
        return {"value": self.value, "unit": self.unit}


@dataclass
class NutritionTotals:
    values: Dict[str, NutrientQuantity] = field(
        default_factory=lambda: {name: NutrientQuantity(0.0, unit) for name, (unit, _) in NUTRIENTS.items()}
    )

    def __getitem__(self, nutrient: str) -> NutrientQuantity:
        return self.values[nutrient]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def as_dict(self) -> Dict[str, Dict[str, object]]:
        return {name: q.as_dict() for name, q in self.values.items()}


@dataclass
class IngredientNutrition:
    line: str
    parsed: ParsedIngredientLine
    reference_name: Optional[str]
    multiplier: float
    contributions: Dict[str, float]

    @property
    def resolved(self) -> bool:
        return self.reference_name is not None


def resolve_reference_name(name: str, reference: Mapping[str, ReferenceIngredientEntry]) -> Optional[str]:
    if not name:
        return None
    if name in reference:
        return name
    # First, the parsed name contained in a known ingredient ("rice" -> "brown rice")
    for known in reference:
        if name in known:
            return known
    # Next, a known ingredient contained in the parsed name ("large egg" -> "egg")
    for known in reference:
        if known and known in name:
            return known
    return None


def unit_multiplier(quantity: float, unit: Optional[str], reference_unit: str) -> float:
    """Quantity expressed in the reference entry's unit.

    Unknown conversion pairs fall back to the raw quantity.
    """
    if not unit or unit == reference_unit:
        return quantity
    divisor = UNIT_CONVERSIONS.get((unit, reference_unit))
    if divisor is None:
        return quantity
    return quantity / divisor


def _round1(value: float) -> float:
    # Half-up, not banker's rounding
    return math.floor(value * 10 + 0.5) / 10


class NutritionAggregator:
    def __init__(self, reference: Mapping[str, ReferenceIngredientEntry]) -> None:
        self.reference = reference

    def breakdown(self, lines: Sequence[str]) -> List[IngredientNutrition]:
        """Per-line detail, unrounded. Unresolved lines carry zero contributions."""
        out: List[IngredientNutrition] = []
        for line in lines or []:
            parsed = parse_ingredient_line(line)
            ref_name = resolve_reference_name(parsed.name, self.reference)
            if ref_name is None:
                logger.debug(
                    "Unresolved ingredient '%s' (from line %r); skipping",
                    parsed.name,
                    line,
                    extra={
                        "invoking_func": "breakdown",
                        "invoking_purpose": "Resolve ingredient lines against reference table",
                        "next_step": "Continue with next line",
                        "resolution": "Add the ingredient to the nutrition reference table",
                    },
                )
                out.append(
                    IngredientNutrition(
                        line=line if isinstance(line, str) else "",
                        parsed=parsed,
                        reference_name=None,
                        multiplier=0.0,
                        contributions={n: 0.0 for n in NUTRIENTS},
                    )
                )
                continue

            entry = self.reference[ref_name]
            multiplier = unit_multiplier(parsed.quantity, parsed.unit, entry.unit)
            out.append(
                IngredientNutrition(
                    line=line,
                    parsed=parsed,
                    reference_name=ref_name,
                    multiplier=multiplier,
                    contributions={n: multiplier * getattr(entry, fld) for n, (_, fld) in NUTRIENTS.items()},
                )
            )
        return out

    def aggregate(self, lines: Sequence[str]) -> NutritionTotals:
        totals = NutritionTotals()
        items = self.breakdown(lines)
        for item in items:
            for nutrient, value in item.contributions.items():
                totals[nutrient].value += value

        # Round values to 1 decimal place
        for nutrient in totals:
            totals[nutrient].value = _round1(totals[nutrient].value)

        resolved = sum(1 for i in items if i.resolved)
        logger.info(
            "Aggregated nutrition for %d line(s), %d resolved",
            len(items),
            resolved,
            extra={
                "invoking_func": "aggregate",
                "invoking_purpose": "Compute nutrient totals for ingredient lines",
                "next_step": "Return NutritionTotals",
                "resolution": "",
            },
        )
        return totals


def aggregate(lines: Sequence[str], reference: Mapping[str, ReferenceIngredientEntry]) -> NutritionTotals:
    return NutritionAggregator(reference).aggregate(lines)


def per_serving(totals: NutritionTotals, servings: int = DEFAULT_SERVINGS) -> NutritionTotals:
    if servings <= 0:
        raise ValidationError("Servings must be a positive number", field="servings")
    out = NutritionTotals()
    for nutrient in totals:
        q = totals[nutrient]
        out.values[nutrient] = NutrientQuantity(_round1(q.value / servings), q.unit)
    return out
