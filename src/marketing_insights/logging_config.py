"""Utilities to configure consistent logging for the CLI and dashboard."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into a logging constant.

    Unknown names fall back to ``default``.
    """
    if name is None:
        return default
    if isinstance(name, int):
        return name
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(log_path: Path | None = None, level: int = logging.INFO) -> None:
    """Route every logger to stdout (and optionally a file) with one format.

    Existing root handlers are replaced, so the CLI and each Streamlit rerun
    can call this without stacking duplicate handlers.

    Args:
        log_path: Extra log file, created with its parent directory if needed.
        level: Root threshold, e.g. from `resolve_level`.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
