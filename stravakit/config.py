"""Configuration management for stravakit."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration."""

    # Base paths
    BASE_DIR = Path(__file__).parent.parent
    LOGS_DIR = BASE_DIR / "logs"

    # Strava API
    API_BASE_URL = os.environ.get("STRAVA_API_BASE_URL", "https://www.strava.com/api/v3")
    ACCESS_TOKEN = os.environ.get("STRAVA_ACCESS_TOKEN")
    REQUEST_TIMEOUT = _get_int_env("STRAVA_REQUEST_TIMEOUT", 30)  # seconds

    # Paging limits enforced before any request is sent
    DEFAULT_PER_PAGE = 30
    MAX_PER_PAGE = 200

    # Worker threads shared by every *_async operation
    ASYNC_MAX_WORKERS = _get_int_env("STRAVA_ASYNC_MAX_WORKERS", 4)

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_TO_FILE = _get_bool_env("STRAVA_LOG_TO_FILE")

    @classmethod
    def ensure_directories(cls):
        """Ensure all required directories exist."""
        cls.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    def __repr__(self):
        return f"Config(API_BASE_URL={self.API_BASE_URL}, TIMEOUT={self.REQUEST_TIMEOUT})"
