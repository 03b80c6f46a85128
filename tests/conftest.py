import sys
from pathlib import Path

import pytest

# Ensure src/ is importable when tests run from a plain checkout
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))  # noqa: E402

from recipe_match.nutrition.reference import parse_reference_table  # noqa: E402


@pytest.fixture
def reference():
    return parse_reference_table(
        {
            "ingredients": {
                "flour": {"unit": "cup", "calories_per_unit": 455, "protein_per_unit": 12.9,
                          "carbs_per_unit": 95.4, "fats_per_unit": 1.2, "fiber_per_unit": 3.4},
                "sugar": {"unit": "cup", "calories_per_unit": 774, "protein_per_unit": 0,
                          "carbs_per_unit": 200, "fats_per_unit": 0, "fiber_per_unit": 0},
                "butter": {"unit": "tablespoon", "calories_per_unit": 102, "protein_per_unit": 0.1,
                           "carbs_per_unit": 0, "fats_per_unit": 11.5, "fiber_per_unit": 0},
                "peanut butter": {"unit": "tablespoon", "calories_per_unit": 94, "protein_per_unit": 4,
                                  "carbs_per_unit": 3.1, "fats_per_unit": 8, "fiber_per_unit": 1},
                "egg": {"unit": "whole", "calories_per_unit": 72, "protein_per_unit": 6.3,
                        "carbs_per_unit": 0.4, "fats_per_unit": 4.8, "fiber_per_unit": 0},
                "brown rice": {"unit": "cup", "calories_per_unit": 216, "protein_per_unit": 5,
                               "carbs_per_unit": 44.8, "fats_per_unit": 1.8, "fiber_per_unit": 3.5},
            }
        }
    )
