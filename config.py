import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

STORE_BACKENDS = ("memory", "firebase")


@dataclass(frozen=True)
class Settings:
    basket_store: str
    firebase_cred_path: str
    firebase_db_url: str
    cors_origins: List[str]
    currency_minor_units: int
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment (and a ``.env`` file if present)."""
    load_dotenv()

    store = os.getenv("BASKET_STORE", "memory").strip().lower()
    if store not in STORE_BACKENDS:
        raise ValueError(f"BASKET_STORE must be one of {STORE_BACKENDS}, got {store!r}")

    raw_units = os.getenv("CURRENCY_MINOR_UNITS", "0")
    try:
        minor_units = int(raw_units)
    except ValueError:
        raise ValueError(f"CURRENCY_MINOR_UNITS must be an integer, got {raw_units!r}")
    if minor_units < 0:
        raise ValueError("CURRENCY_MINOR_UNITS must not be negative")

    origins = os.getenv("CORS_ORIGINS", "http://127.0.0.1:5500")

    return Settings(
        basket_store=store,
        firebase_cred_path=os.getenv("FIREBASE_CRED_JSON", "./firebase-adminsdk.json"),
        firebase_db_url=os.getenv("FIREBASE_DB_URL", ""),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        currency_minor_units=minor_units,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
