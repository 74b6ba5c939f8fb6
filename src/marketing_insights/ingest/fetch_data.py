"""Download (and cache) the marketing data document.

The data API returns a single JSON document with a top-level `campaigns`
array. `fetch_marketing_document` downloads it, optionally caching the body
on disk; `load_marketing_document` reads a previously saved copy.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

log = logging.getLogger(__name__)

CACHE_FILE_NAME = "marketing_data.json"


class DataSourceError(RuntimeError):
    """Raised when the marketing document cannot be fetched or decoded."""


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DataSourceError(f"Failed to fetch marketing data: invalid JSON from {source} ({e})") from e


def load_marketing_document(path: Path) -> Any:
    """Read a marketing document from a local JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The decoded document.

    Raises:
        DataSourceError: if the file is missing or does not contain JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataSourceError(f"Failed to fetch marketing data: cannot read {path} ({e})") from e
    return _decode(text, str(path))


def fetch_marketing_document(
    url: str,
    cache_dir: Path | None = None,
    timeout: float = 30.0,
    force: bool = False,
) -> Any:
    """Download the marketing document, using a local cache when available.

    Args:
        url: Marketing data API URL.
        cache_dir: Optional directory where the response body is cached.
        timeout: Request timeout in seconds.
        force: Ignore an existing cached copy and download again.

    Returns:
        The decoded JSON document.

    Raises:
        DataSourceError: on network failure, a non-2xx status, or invalid JSON.
    """
    cache_path = cache_dir / CACHE_FILE_NAME if cache_dir is not None else None

    if cache_path is not None and not force and cache_path.exists() and cache_path.stat().st_size > 0:
        log.info("Cache hit: %s", cache_path)
        return load_marketing_document(cache_path)

    log.info("Downloading %s", url)
    try:
        r = requests.get(url, headers={"Content-Type": "application/json"}, timeout=timeout)
        r.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise DataSourceError(f"Failed to fetch marketing data: HTTP error! status: {status}") from e
    except requests.RequestException as e:
        raise DataSourceError(f"Failed to fetch marketing data: {e}") from e

    data = _decode(r.text, url)

    if cache_path is not None:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(r.text, encoding="utf-8")
        log.info("Saved: %s (%d bytes)", cache_path, cache_path.stat().st_size)

    return data
