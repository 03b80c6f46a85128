"""
config.py

Purpose:
    Environment-driven configuration for the recipe_match engine.

    - get_supabase_client(): Supabase client for the recipe corpus supplier
    - get_engine_settings(): ranking / nutrition knobs with safe defaults

Usage:
    from recipe_match.config import get_engine_settings, get_supabase_client
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# Supabase connection details come from env vars, never hardcoded.
from supabase import create_client, Client

from dotenv import load_dotenv

from recipe_match.logging_utils import get_logger

load_dotenv()  # loads .env

logger = get_logger("config")

DEFAULT_TARGET_SIZE = 15
DEFAULT_SUGGESTION_FLOOR = 3
DEFAULT_SUGGESTION_LIMIT = 5
DEFAULT_SERVING_DIVISOR = 4


@dataclass
class EngineSettings:
    target_size: int = DEFAULT_TARGET_SIZE
    suggestion_floor: int = DEFAULT_SUGGESTION_FLOOR
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT
    serving_divisor: int = DEFAULT_SERVING_DIVISOR
    nutrition_data_path: Optional[str] = None


def get_supabase_client() -> Client:
    """Create a Supabase client using env vars."""
    url = os.environ["SUPABASE_URL"]
    key = os.environ["SUPABASE_SERVICE_ROLE_KEY"]  # read-only corpus access still needs a key
    return create_client(url, key)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            "Env var %s=%r is not an integer; using default %d",
            name,
            raw,
            default,
            extra={
                "invoking_func": "_env_int",
                "invoking_purpose": "Read integer engine setting",
                "next_step": "Continue with default value",
                "resolution": f"Set {name} to a whole number",
            },
        )
        return default
    if value < 0:
        logger.warning(
            "Env var %s=%d is negative; using default %d",
            name,
            value,
            default,
            extra={
                "invoking_func": "_env_int",
                "invoking_purpose": "Read integer engine setting",
                "next_step": "Continue with default value",
                "resolution": f"Set {name} to zero or more",
            },
        )
        return default
    return value


def get_engine_settings() -> EngineSettings:
    """Build EngineSettings from RECIPE_MATCH_* env vars."""
    return EngineSettings(
        target_size=_env_int("RECIPE_MATCH_TARGET_SIZE", DEFAULT_TARGET_SIZE),
        suggestion_floor=_env_int("RECIPE_MATCH_SUGGESTION_FLOOR", DEFAULT_SUGGESTION_FLOOR),
        suggestion_limit=_env_int("RECIPE_MATCH_SUGGESTION_LIMIT", DEFAULT_SUGGESTION_LIMIT),
        serving_divisor=_env_int("RECIPE_MATCH_SERVING_DIVISOR", DEFAULT_SERVING_DIVISOR) or DEFAULT_SERVING_DIVISOR,
        nutrition_data_path=os.getenv("NUTRITION_DATA_PATH") or None,
    )
