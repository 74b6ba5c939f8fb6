"""Command-line interface for fetching and summarizing marketing data.

Provides subcommands: `fetch`, `report`, and `all`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel

from marketing_insights.config import get_settings
from marketing_insights.logging_config import configure_logging, resolve_level

# INGEST
from marketing_insights.ingest.fetch_data import (
    DataSourceError,
    fetch_marketing_document,
    load_marketing_document,
)

# AGGREGATE
from marketing_insights.aggregate import BREAKDOWNS, aggregate
from marketing_insights.aggregate.frames import result_frame

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _load_document(args: argparse.Namespace) -> Any:
    """Return the marketing document from `--input` or from the configured API."""
    input_path = getattr(args, "input", None)
    if input_path is not None:
        log.info("Reading marketing document from %s", input_path)
        return load_marketing_document(Path(input_path))

    s = get_settings()
    return fetch_marketing_document(
        s.data_url,
        cache_dir=s.cache_dir,
        timeout=s.request_timeout,
        force=getattr(args, "force", False),
    )


def _jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump()
    return [r.model_dump() for r in result]


def render(result: Any, fmt: str) -> str:
    """Render an `aggregate()` result as a text table or JSON.

    Args:
        result: Breakdown result (model or list of models).
        fmt: ``"table"`` or ``"json"``.
    """
    if fmt == "json":
        return json.dumps(_jsonable(result), indent=2)
    frame = result_frame(result)
    if frame.empty:
        return "(no data)"
    return frame.to_string(index=False)


# --------------------------------------------------
# FETCH
# --------------------------------------------------
def cmd_fetch(args: argparse.Namespace) -> None:
    """Download the marketing document into the configured cache directory.

    Args:
        args: argparse namespace with `force`.
    """
    s = get_settings()
    doc = fetch_marketing_document(
        s.data_url,
        cache_dir=s.cache_dir,
        timeout=s.request_timeout,
        force=args.force,
    )
    campaigns = doc.get("campaigns") if isinstance(doc, dict) else None
    log.info(
        "Fetch completed: %d campaigns",
        len(campaigns) if isinstance(campaigns, list) else 0,
    )


# --------------------------------------------------
# REPORT
# --------------------------------------------------
def cmd_report(args: argparse.Namespace) -> None:
    """Print one breakdown.

    Args:
        args: argparse namespace with `breakdown`, `input`, `format`, `force`.
    """
    doc = _load_document(args)
    print(render(aggregate(doc, args.breakdown), args.format))


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(args: argparse.Namespace) -> None:
    """Convenience: load the document once and print every breakdown."""
    doc = _load_document(args)
    for name in BREAKDOWNS:
        print(f"== {name} ==")
        print(render(aggregate(doc, name), args.format))
        print()


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `fetch`, `report`, and `all`.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="marketing_insights")
    p.add_argument("--log-level", default="INFO")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_fetch = sub.add_parser("fetch")
    p_fetch.add_argument("--force", action="store_true")

    p_report = sub.add_parser("report")
    p_report.add_argument("breakdown", choices=list(BREAKDOWNS))
    p_report.add_argument("--input", type=Path, default=None)
    p_report.add_argument("--format", choices=["table", "json"], default="table")
    p_report.add_argument("--force", action="store_true")

    p_all = sub.add_parser("all")
    p_all.add_argument("--input", type=Path, default=None)
    p_all.add_argument("--format", choices=["table", "json"], default="table")
    p_all.add_argument("--force", action="store_true")

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(Path("logs/marketing.log"), level=resolve_level(args.log_level))

    try:
        if args.cmd == "fetch":
            cmd_fetch(args)
        elif args.cmd == "report":
            cmd_report(args)
        elif args.cmd == "all":
            cmd_all(args)
        else:
            raise SystemExit(2)
    except DataSourceError as e:
        log.error("%s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
