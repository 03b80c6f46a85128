import pytest

from recipe_match.nutrition.parser import IngredientParser, ParsedIngredientLine, parse_amount, parse_ingredient_line


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1/2 cup flour", ParsedIngredientLine(0.5, "cup", "flour")),
        ("tomato", ParsedIngredientLine(1.0, None, "tomato")),
        ("2 tbsp Olive Oil", ParsedIngredientLine(2.0, "tablespoon", "olive oil")),
        ("3 tsp sugar", ParsedIngredientLine(3.0, "teaspoon", "sugar")),
        ("4 oz cheddar cheese", ParsedIngredientLine(4.0, "ounce", "cheddar cheese")),
        ("1.5 cups milk", ParsedIngredientLine(1.5, "cup", "milk")),
        ("2 tablespoons butter", ParsedIngredientLine(2.0, "tablespoon", "butter")),
        ("1 whole egg", ParsedIngredientLine(1.0, "whole", "egg")),
        ("  2 EGGS ", ParsedIngredientLine(2.0, None, "eggs")),
        ("2cups water", ParsedIngredientLine(2.0, "cup", "water")),
    ],
)
def test_parse_ingredient_line(line, expected):
    assert parse_ingredient_line(line) == expected


def test_unit_must_be_a_whole_word():
    assert parse_ingredient_line("cupcake") == ParsedIngredientLine(1.0, None, "cupcake")
    assert parse_ingredient_line("2 tspoons salt").unit is None


@pytest.mark.parametrize("line", ["1/0 cup water", "1.2.3 cup water", "/ cup water", "1/2/3 cup water"])
def test_unparseable_amount_defaults_to_one(line):
    parsed = parse_ingredient_line(line)
    assert parsed.quantity == 1.0
    assert parsed.unit == "cup"
    assert parsed.name == "water"


def test_parse_never_fails():
    assert parse_ingredient_line("") == ParsedIngredientLine(1.0, None, "")
    assert parse_ingredient_line(None) == ParsedIngredientLine(1.0, None, "")


def test_parse_amount():
    assert parse_amount("3") == 3.0
    assert parse_amount("0.25") == 0.25
    assert parse_amount("3/4") == 0.75
    assert parse_amount(None) == 1.0


def test_parser_object_delegates():
    assert IngredientParser().parse("1/2 cup flour").quantity == 0.5
