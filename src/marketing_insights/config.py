"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the data-source settings from the environment (a `.env` file at the
project root is loaded first).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_DATA_URL = "https://www.amanabootcamp.org/api/fs-classwork-data/amana-marketing"


@dataclass(frozen=True)
class Settings:
    """Container for data-source configuration read from the environment.

    Attributes:
        data_url: URL of the marketing data JSON API.
        request_timeout: Seconds to wait for the API before giving up.
        cache_dir: Local directory where the fetched document is cached.
    """
    data_url: str
    request_timeout: float
    cache_dir: Path


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `MARKETING_DATA_URL` is blank or
            `MARKETING_REQUEST_TIMEOUT` is not a positive number.
    """
    data_url = os.getenv("MARKETING_DATA_URL", DEFAULT_DATA_URL).strip()
    raw_timeout = os.getenv("MARKETING_REQUEST_TIMEOUT", "30").strip()
    cache_dir = Path(os.getenv("MARKETING_CACHE_DIR", "data/cache"))

    if not data_url:
        raise RuntimeError(
            "MARKETING_DATA_URL is required. Set it in .env "
            "(example: 'https://example.com/api/marketing-data')."
        )

    try:
        request_timeout = float(raw_timeout)
    except ValueError:
        raise RuntimeError(
            f"MARKETING_REQUEST_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
        ) from None
    if request_timeout <= 0:
        raise RuntimeError("MARKETING_REQUEST_TIMEOUT must be greater than zero.")

    return Settings(
        data_url=data_url,
        request_timeout=request_timeout,
        cache_dir=cache_dir,
    )
