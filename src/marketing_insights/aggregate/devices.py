"""Device breakdown built from campaign-level totals.

Unlike the demographic breakdowns, each campaign is attributed whole to its
`target_demographics.primary_device`.
"""
from __future__ import annotations

import logging
from typing import Any

from marketing_insights.aggregate.helpers import (
    amount,
    build_frame,
    campaigns_of,
    exact_sum,
    num,
    round_count,
    round_rate,
    round_revenue,
    round_spend,
    safe_rate,
    section,
)
from marketing_insights.models import DeviceMetrics

log = logging.getLogger(__name__)

DEVICES = ("Mobile", "Desktop", "Tablet")
DEFAULT_DEVICE = "Mobile"

_COUNTS = ("impressions", "clicks", "conversions")
_MONEY = ("spend", "revenue")


def primary_device(campaign: Any) -> str:
    """Return the campaign's primary device, "Mobile" when absent or blank."""
    device = section(campaign, "target_demographics").get("primary_device")
    if isinstance(device, str) and device.strip():
        return device.strip()
    return DEFAULT_DEVICE


def compute_device_metrics(document: Any) -> list[DeviceMetrics]:
    """Return per-device totals with click-through, conversion and traffic shares.

    Args:
        document: Marketing document.

    Returns:
        One `DeviceMetrics` per device seen, in first-seen order. `ctr` and
        `conversion_rate` are 0 when their denominator is 0;
        `percentage_of_traffic` is the device's share of all impressions.
    """
    rows = [
        {
            "device": primary_device(campaign),
            **{field: num(campaign.get(field)) for field in _COUNTS},
            **{field: amount(campaign.get(field)) for field in _MONEY},
        }
        for campaign in campaigns_of(document)
    ]
    df = build_frame(rows, ["device", *_COUNTS, *_MONEY], money=_MONEY)
    if df.empty:
        return []

    grouped = (
        df.groupby("device", sort=False)
        .agg(
            first_row=("row", "min"),
            **{field: (field, exact_sum) for field in _COUNTS},
            **{field: (field, "sum") for field in _MONEY},
        )
        .sort_values("first_row", kind="stable")
    )
    total_impressions = exact_sum(grouped["impressions"])

    out = [
        DeviceMetrics(
            device=device,
            impressions=round_count(r.impressions),
            clicks=round_count(r.clicks),
            conversions=round_count(r.conversions),
            spend=round_spend(float(r.spend)),
            revenue=round_revenue(float(r.revenue)),
            ctr=round_rate(safe_rate(r.clicks, r.impressions)),
            conversion_rate=round_rate(safe_rate(r.conversions, r.clicks)),
            percentage_of_traffic=round_rate(safe_rate(r.impressions, total_impressions)),
        )
        for device, r in zip(grouped.index, grouped.itertuples(index=False))
    ]
    log.debug("Device breakdown: %s", [m.device for m in out])
    return out
