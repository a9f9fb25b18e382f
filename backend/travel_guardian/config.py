"""Runtime configuration loaded from the environment (and .env)."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

# Load variables from .env into environment
load_dotenv()


@dataclass
class Settings:
    """Holds runtime configuration shared by the pipeline and the API."""

    tavily_api_key: Optional[str] = None
    mongodb_uri: Optional[str] = None
    mongodb_db: str = "travel_guardian"
    search_timeout_seconds: float = 8.0
    search_max_results: int = 5
    price_check_seed: Optional[int] = None


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings so every module shares the same values.

    Missing credentials are not fatal: without TAVILY_API_KEY every lookup
    falls back to simulated prices, without MONGODB_URI persistence is off.
    """
    return Settings(
        tavily_api_key=os.getenv("TAVILY_API_KEY") or None,
        mongodb_uri=os.getenv("MONGODB_URI") or None,
        mongodb_db=os.getenv("MONGODB_DB", "travel_guardian"),
        search_timeout_seconds=float(os.getenv("SEARCH_TIMEOUT_SECONDS", "8")),
        search_max_results=int(os.getenv("SEARCH_MAX_RESULTS", "5")),
        price_check_seed=_optional_int(os.getenv("PRICE_CHECK_SEED")),
    )
