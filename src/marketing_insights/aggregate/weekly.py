"""Weekly breakdown: spend and revenue per reporting week."""
from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from marketing_insights.aggregate.helpers import (
    amount,
    build_frame,
    campaigns_of,
    records,
    round_revenue,
    round_spend,
)
from marketing_insights.models import WeekMetric

log = logging.getLogger(__name__)

# relative keywords pandas would resolve against the wall clock
_RELATIVE_DATES = {"now", "today"}


def _to_timestamp(value: str) -> pd.Timestamp | None:
    if value.strip().lower() in _RELATIVE_DATES:
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts


def parse_week_start(value: str) -> pd.Timestamp | None:
    """Parse a week-start string as naive UTC; ``None`` when it is not a date."""
    ts = _to_timestamp(value)
    if ts is not None and ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts


def week_label(value: str) -> str:
    """Return a short "Mon D" label for a week start, e.g. "Jan 8".

    The label uses the date as written (its own offset, not UTC). Unparseable
    values are returned unchanged.
    """
    ts = _to_timestamp(value)
    if ts is None:
        return value
    return f"{ts.strftime('%b')} {ts.day}"


def compute_weekly_metrics(document: Any) -> list[WeekMetric]:
    """Return spend and revenue summed per `week_start`.

    Weeks are grouped by exact `week_start` string, so the same calendar week
    written in two formats stays as two entries. Slices without a
    `week_start` are ignored.

    Args:
        document: Marketing document.

    Returns:
        `WeekMetric` records sorted by week start date; weeks whose start
        cannot be parsed come last in first-seen order.
    """
    rows = [
        {
            "week_start": sl.get("week_start"),
            "spend": amount(sl.get("spend")),
            "revenue": amount(sl.get("revenue")),
        }
        for campaign in campaigns_of(document)
        for sl in records(campaign, "weekly_performance")
        if isinstance(sl.get("week_start"), str) and sl.get("week_start").strip()
    ]
    df = build_frame(rows, ["week_start", "spend", "revenue"], money=("spend", "revenue"))
    if df.empty:
        return []

    grouped = (
        df.groupby("week_start", sort=False)
        .agg(first_row=("row", "min"), spend=("spend", "sum"), revenue=("revenue", "sum"))
        .sort_values("first_row", kind="stable")
    )

    def _sort_key(start: str) -> tuple[int, int]:
        ts = parse_week_start(start)
        return (1, 0) if ts is None else (0, ts.value)

    out = [
        WeekMetric(
            week_start=start,
            week_label=week_label(start),
            spend=round_spend(float(r.spend)),
            revenue=round_revenue(float(r.revenue)),
        )
        for start, r in zip(grouped.index, grouped.itertuples(index=False))
    ]
    out.sort(key=lambda w: _sort_key(w.week_start))
    log.debug("Weekly breakdown: %d weeks", len(out))
    return out
