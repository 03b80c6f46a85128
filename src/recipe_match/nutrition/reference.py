"""
reference.py

Purpose:
    Load the static nutrition reference table and cache it.

File format (JSON):
    {
      "ingredients": {
        "flour": {"unit": "cup", "calories_per_unit": 455, "protein_per_unit": 12.9,
                  "carbs_per_unit": 95.4, "fats_per_unit": 1.2, "fiber_per_unit": 3.4},
        ...
      }
    }

Lifecycle:
    ReferenceTableLoader reads the file on first load() and keeps the
    parsed table for its own lifetime. There is no invalidation; a changed
    file needs a new loader (or a process restart for the default one).
    After population the mapping is only read, so concurrent readers need
    no locking.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from recipe_match.config import get_engine_settings
from recipe_match.logging_utils import get_logger

logger = get_logger("reference")

DEFAULT_REFERENCE_PATH = Path(__file__).resolve().parents[1] / "data" / "nutrition_reference.json"

NUTRIENT_FIELDS = (
    "calories_per_unit",
    "protein_per_unit",
    "carbs_per_unit",
    "fats_per_unit",
    "fiber_per_unit",
)


@dataclass(frozen=True)
class ReferenceIngredientEntry:
    name: str
    unit: str
    calories_per_unit: float = 0.0
    protein_per_unit: float = 0.0
    carbs_per_unit: float = 0.0
    fats_per_unit: float = 0.0
    fiber_per_unit: float = 0.0


def _as_float(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def parse_reference_table(data: Mapping[str, Any]) -> Dict[str, ReferenceIngredientEntry]:
    """Turn the raw JSON mapping into entries keyed by lowercase name.

    Rows that are not objects are skipped. Insertion order is kept because
    substring resolution walks the table in order.
    """
    rows = data.get("ingredients", data) if isinstance(data, Mapping) else {}
    table: Dict[str, ReferenceIngredientEntry] = {}
    if not isinstance(rows, Mapping):
        return table
    for name, row in rows.items():
        if not isinstance(name, str) or not isinstance(row, Mapping):
            continue
        key = name.strip().lower()
        if not key:
            continue
        table[key] = ReferenceIngredientEntry(
            name=key,
            unit=str(row.get("unit") or "").strip().lower(),
            **{f: _as_float(row.get(f)) for f in NUTRIENT_FIELDS},
        )
    return table


class ReferenceTableLoader:
    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path else DEFAULT_REFERENCE_PATH
        self._table: Optional[Dict[str, ReferenceIngredientEntry]] = None

    @property
    def loaded(self) -> bool:
        return self._table is not None

    def load(self) -> Dict[str, ReferenceIngredientEntry]:
        if self._table is not None:
            return self._table

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            table = parse_reference_table(data)
        except (OSError, ValueError) as exc:
            # Not cached: the next call retries the read
            logger.error(
                "Could not load nutrition reference table from %s: %s",
                self.path,
                exc,
                extra={
                    "invoking_func": "load",
                    "invoking_purpose": "Load nutrition reference table once",
                    "next_step": "Continue with empty reference table, retry on next load",
                    "resolution": "Check NUTRITION_DATA_PATH and the JSON file contents",
                },
            )
            return {}
        else:
            logger.info(
                "Loaded %d reference ingredient(s) from %s",
                len(table),
                self.path,
                extra={
                    "invoking_func": "load",
                    "invoking_purpose": "Load nutrition reference table once",
                    "next_step": "Serve cached table for the process lifetime",
                    "resolution": "",
                },
            )

        self._table = table
        return table

    def ingredients(self) -> Dict[str, ReferenceIngredientEntry]:
        """Copy of the table for listing; entries themselves are immutable."""
        return dict(self.load())


_default_loader: Optional[ReferenceTableLoader] = None


def get_default_loader() -> ReferenceTableLoader:
    """Process-wide loader; callers that need another table inject their own."""
    global _default_loader
    if _default_loader is None:
        _default_loader = ReferenceTableLoader(get_engine_settings().nutrition_data_path)
    return _default_loader
