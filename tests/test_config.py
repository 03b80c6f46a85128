import pytest

from recipe_match.config import get_engine_settings, get_supabase_client


def test_engine_settings_defaults(monkeypatch):
    for name in (
        "RECIPE_MATCH_TARGET_SIZE",
        "RECIPE_MATCH_SUGGESTION_FLOOR",
        "RECIPE_MATCH_SUGGESTION_LIMIT",
        "RECIPE_MATCH_SERVING_DIVISOR",
        "NUTRITION_DATA_PATH",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_engine_settings()
    assert settings.target_size == 15
    assert settings.suggestion_floor == 3
    assert settings.suggestion_limit == 5
    assert settings.serving_divisor == 4
    assert settings.nutrition_data_path is None


def test_engine_settings_from_env(monkeypatch):
    monkeypatch.setenv("RECIPE_MATCH_TARGET_SIZE", "7")
    monkeypatch.setenv("RECIPE_MATCH_SUGGESTION_FLOOR", "oops")
    monkeypatch.setenv("RECIPE_MATCH_SUGGESTION_LIMIT", "-2")
    monkeypatch.setenv("RECIPE_MATCH_SERVING_DIVISOR", "0")
    monkeypatch.setenv("NUTRITION_DATA_PATH", "/tmp/ref.json")

    settings = get_engine_settings()
    assert settings.target_size == 7
    assert settings.suggestion_floor == 3
    assert settings.suggestion_limit == 5
    assert settings.serving_divisor == 4
    assert settings.nutrition_data_path == "/tmp/ref.json"


def test_supabase_client_requires_env(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(KeyError):
        get_supabase_client()
