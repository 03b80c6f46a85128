import pytest

from recipe_match.errors import ValidationError
from recipe_match.nutrition.aggregator import (
    NutritionAggregator,
    aggregate,
    per_serving,
    resolve_reference_name,
    unit_multiplier,
)
from recipe_match.nutrition.reference import parse_reference_table


def _values(totals):
    return {k: totals[k].value for k in totals}


def test_empty_input_gives_all_zero_totals(reference):
    totals = aggregate([], reference)
    assert totals.as_dict() == {
        "calories": {"value": 0.0, "unit": "kcal"},
        "protein": {"value": 0.0, "unit": "g"},
        "carbs": {"value": 0.0, "unit": "g"},
        "fats": {"value": 0.0, "unit": "g"},
        "fiber": {"value": 0.0, "unit": "g"},
    }


def test_teaspoons_scale_to_cups(reference):
    items = NutritionAggregator(reference).breakdown(["3 tsp sugar"])
    assert items[0].reference_name == "sugar"
    assert items[0].multiplier == pytest.approx(3 / 48)

    totals = aggregate(["3 tsp sugar"], reference)
    assert totals["calories"].value == pytest.approx(48.4)
    assert totals["carbs"].value == pytest.approx(12.5)


def test_tablespoons_scale_to_cups(reference):
    totals = aggregate(["2 tbsp flour"], reference)
    assert totals["calories"].value == pytest.approx(56.9)


def test_teaspoons_scale_to_tablespoons(reference):
    totals = aggregate(["1 tsp butter"], reference)
    assert totals["calories"].value == pytest.approx(34.0)
    assert totals["fats"].value == pytest.approx(3.8)


def test_unknown_conversion_uses_raw_quantity(reference):
    totals = aggregate(["2 oz flour"], reference)
    assert totals["calories"].value == pytest.approx(910.0)


def test_unitless_lines_and_substring_resolution(reference):
    totals = aggregate(["2 eggs"], reference)
    assert totals["calories"].value == pytest.approx(144.0)
    assert totals["protein"].value == pytest.approx(12.6)


def test_totals_accumulate_and_round(reference):
    totals = aggregate(["1 cup flour", "2 eggs", "dragon fruit"], reference)
    assert _values(totals) == pytest.approx(
        {"calories": 599.0, "protein": 25.5, "carbs": 96.2, "fats": 10.8, "fiber": 3.4}
    )


def test_unresolved_lines_contribute_nothing(reference):
    items = NutritionAggregator(reference).breakdown(["dragon fruit", ""])
    assert [i.resolved for i in items] == [False, False]
    assert aggregate(["dragon fruit"], reference)["calories"].value == 0.0


def test_resolution_order(reference):
    assert resolve_reference_name("peanut butter", reference) == "peanut butter"
    assert resolve_reference_name("unsalted butter", reference) == "butter"
    assert resolve_reference_name("large egg", reference) == "egg"
    assert resolve_reference_name("rice", reference) == "brown rice"
    assert resolve_reference_name("", reference) is None
    assert resolve_reference_name("kale", reference) is None


def test_key_containing_name_wins_over_name_containing_key():
    ref = parse_reference_table({"egg": {"unit": "whole"}, "egg noodles": {"unit": "cup"}})
    assert resolve_reference_name("egg noodle", ref) == "egg noodles"
    assert resolve_reference_name("large egg", ref) == "egg"


def test_unit_multiplier():
    assert unit_multiplier(2, None, "cup") == 2
    assert unit_multiplier(2, "cup", "cup") == 2
    assert unit_multiplier(16, "tablespoon", "cup") == 1.0
    assert unit_multiplier(3, "teaspoon", "tablespoon") == 1.0
    assert unit_multiplier(2, "cup", "tablespoon") == 2


def test_per_serving_divides_by_four(reference):
    totals = aggregate(["4 eggs"], reference)
    serving = per_serving(totals)
    assert _values(serving) == pytest.approx(
        {"calories": 72.0, "protein": 6.3, "carbs": 0.4, "fats": 4.8, "fiber": 0.0}
    )
    assert serving["calories"].unit == "kcal"
    # totals are untouched
    assert totals["calories"].value == pytest.approx(288.0)


def test_per_serving_rejects_non_positive(reference):
    with pytest.raises(ValidationError):
        per_serving(aggregate([], reference), 0)
