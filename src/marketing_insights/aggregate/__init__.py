"""Breakdown aggregation helpers.

This package contains pure routines that reshape a marketing document into
grouped summaries (gender, age group, gender x age group, device, region,
week). `aggregate` dispatches on a breakdown name for callers that pick the
breakdown at runtime (CLI, dashboard).
"""

from __future__ import annotations

from typing import Any, Callable

from marketing_insights.aggregate.demographics import (
    compute_age_group_metrics,
    compute_gender_age_group_metrics,
    compute_gender_metrics,
)
from marketing_insights.aggregate.devices import compute_device_metrics
from marketing_insights.aggregate.regions import compute_region_metrics
from marketing_insights.aggregate.weekly import compute_weekly_metrics

BREAKDOWNS: dict[str, Callable[[Any], Any]] = {
    "gender": compute_gender_metrics,
    "age_group": compute_age_group_metrics,
    "gender_age_group": compute_gender_age_group_metrics,
    "device": compute_device_metrics,
    "region": compute_region_metrics,
    "week": compute_weekly_metrics,
}


def aggregate(document: Any, breakdown: str) -> Any:
    """Run the named breakdown over `document`.

    Raises:
        ValueError: if `breakdown` is not one of `BREAKDOWNS`.
    """
    try:
        fn = BREAKDOWNS[breakdown]
    except KeyError:
        raise ValueError(
            f"Unknown breakdown {breakdown!r}; expected one of {', '.join(BREAKDOWNS)}"
        ) from None
    return fn(document)


__all__ = [
    "BREAKDOWNS",
    "aggregate",
    "compute_age_group_metrics",
    "compute_device_metrics",
    "compute_gender_age_group_metrics",
    "compute_gender_metrics",
    "compute_region_metrics",
    "compute_weekly_metrics",
]
