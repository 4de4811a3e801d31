import os
from pathlib import Path

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent
DEFAULT_DATABASE_URL = f"sqlite:///{BACKEND_ROOT / 'campus_coffee.db'}"
DEFAULT_OSM_API_BASE_URL = "https://www.openstreetmap.org/api/0.6/node"
DEFAULT_OSM_USER_AGENT = "campus-coffee/0.1"


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL: str = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
        self.OSM_API_BASE_URL: str = (os.getenv("OSM_API_BASE_URL") or DEFAULT_OSM_API_BASE_URL).rstrip("/")
        self.OSM_USER_AGENT: str | None = os.getenv("OSM_USER_AGENT")
        self.OSM_API_TIMEOUT_SECONDS: float = _as_float(os.getenv("OSM_API_TIMEOUT_SECONDS"), 10.0)
        self.LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").upper()


settings = Settings()
