import json

import pytest

from recipe_match.datasets.base import recipe_ingredients, recipe_rating
from recipe_match.datasets.corpus import fetch_recipe_corpus, load_recipe_corpus
from recipe_match.errors import MalformedRecipeData


class _Response:
    def __init__(self, data):
        self.data = data


class _Query:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.bounds = (0, 0)

    def select(self, columns):
        self.client.selected.append(columns)
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def execute(self):
        self.client.calls.append(self.bounds)
        start, end = self.bounds
        return _Response(self.client.rows[start : end + 1])


class FakeSupabase:
    def __init__(self, rows):
        self.rows = rows
        self.calls = []
        self.selected = []

    def table(self, name):
        return _Query(self, name)


@pytest.mark.parametrize(
    "recipe, expected",
    [
        ({"ingredients": ["egg", "flour"]}, ["egg", "flour"]),
        ({"ingredients": ("egg",)}, ["egg"]),
        ({"ingredients": "egg, flour\nmilk"}, []),
        ({"ingredients": ["egg", None, 3, {"name": "x"}]}, ["egg", "", "", ""]),
        ({"ingredients": None}, []),
        ({"ingredients": {"egg": 1}}, []),
        ({"ingredients": 12}, []),
        ({}, []),
        (None, []),
        ("egg", []),
    ],
)
def test_recipe_ingredients_accessor(recipe, expected):
    assert recipe_ingredients(recipe) == expected


@pytest.mark.parametrize(
    "recipe, expected",
    [
        ({"averageRating": 4.5}, 4.5),
        ({"averageRating": "3"}, 3.0),
        ({"averageRating": "n/a"}, 0.0),
        ({"averageRating": float("nan")}, 0.0),
        ({"averageRating": True}, 0.0),
        ({}, 0.0),
        (None, 0.0),
    ],
)
def test_recipe_rating_accessor(recipe, expected):
    assert recipe_rating(recipe) == expected


def test_load_recipe_corpus_list_and_wrapped(tmp_path):
    p = tmp_path / "recipes.json"
    p.write_text(json.dumps([{"title": "A"}]), encoding="utf-8")
    assert load_recipe_corpus(p) == [{"title": "A"}]

    p.write_text(json.dumps({"recipes": [{"title": "B"}]}), encoding="utf-8")
    assert load_recipe_corpus(str(p)) == [{"title": "B"}]


def test_load_recipe_corpus_missing_file(tmp_path):
    assert load_recipe_corpus(tmp_path / "missing.json") == []


def test_load_recipe_corpus_rejects_non_list(tmp_path):
    p = tmp_path / "recipes.json"
    p.write_text(json.dumps({"title": "not a corpus"}), encoding="utf-8")
    with pytest.raises(MalformedRecipeData):
        load_recipe_corpus(p)


def test_fetch_recipe_corpus_pages_and_copies():
    rows = [{"title": f"R{i}", "ingredients": ["egg"]} for i in range(5)]
    client = FakeSupabase(rows)

    corpus = fetch_recipe_corpus(client, page_size=2)

    assert [r["title"] for r in corpus] == ["R0", "R1", "R2", "R3", "R4"]
    assert client.calls == [(0, 1), (2, 3), (4, 5)]
    assert client.selected == ["*", "*", "*"]

    corpus[0]["ingredients"].append("flour")
    assert rows[0]["ingredients"] == ["egg"]


def test_fetch_recipe_corpus_respects_limit():
    client = FakeSupabase([{"title": f"R{i}"} for i in range(10)])
    corpus = fetch_recipe_corpus(client, page_size=4, limit=6)
    assert len(corpus) == 6
    assert client.calls == [(0, 3), (4, 5)]
