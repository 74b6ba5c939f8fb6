"""Region breakdown: summed revenue/spend per region plus map placement."""
from __future__ import annotations

import logging
from typing import Any

from marketing_insights.aggregate.helpers import (
    amount,
    build_frame,
    campaigns_of,
    records,
    round_rate,
    round_revenue,
    round_spend,
)
from marketing_insights.aggregate.region_coords import get_coords
from marketing_insights.models import MapPoint, RegionBreakdown, RegionMetric

log = logging.getLogger(__name__)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def compute_region_metrics(document: Any) -> RegionBreakdown:
    """Return per-region totals and the subset that can be placed on a map.

    Regional slices are merged by exact `region` name across campaigns; the
    first `country` seen for a region is kept as a fallback label. For each
    region `value = revenue + spend` and `performance = revenue / spend`,
    where zero spend counts as 1 (and performance is 0 without revenue).

    Args:
        document: Marketing document.

    Returns:
        `RegionBreakdown` where `region_list` holds regions with `value > 0`
        and `map_data` holds the ones whose region (or fallback country) has
        known coordinates.
    """
    rows = [
        {
            "region": _optional_text(sl.get("region")),
            "country": _optional_text(sl.get("country")),
            "revenue": amount(sl.get("revenue")),
            "spend": amount(sl.get("spend")),
        }
        for campaign in campaigns_of(document)
        for sl in records(campaign, "regional_performance")
    ]
    df = build_frame(rows, ["region", "country", "revenue", "spend"], money=("revenue", "spend"))
    if df.empty:
        return RegionBreakdown(region_list=[], map_data=[])

    grouped = (
        df.groupby("region", sort=False, dropna=False)
        .agg(first_row=("row", "min"), revenue=("revenue", "sum"), spend=("spend", "sum"))
        .sort_values("first_row", kind="stable")
    )

    region_list: list[RegionMetric] = []
    map_data: list[MapPoint] = []

    for r in grouped.itertuples(index=False):
        # labels from the first slice; country may be null
        region = df.at[r.first_row, "region"]
        country = df.at[r.first_row, "country"]
        revenue, spend = float(r.revenue), float(r.spend)
        value = revenue + spend
        if value <= 0:
            continue
        performance = revenue / (spend or 1) if revenue > 0 else 0.0

        region_list.append(
            RegionMetric(
                region=region,
                country=country,
                revenue=round_revenue(revenue),
                spend=round_spend(spend),
                value=round_spend(value),
                performance=round_rate(performance),
            )
        )

        coords = get_coords(region, country)
        if coords is None:
            log.debug("No coordinates for region=%s country=%s", region, country)
            continue
        lat, lng = coords
        map_data.append(
            MapPoint(
                city=region,
                lat=lat,
                lng=lng,
                value=round_spend(value),
                performance=round_rate(performance),
            )
        )

    return RegionBreakdown(region_list=region_list, map_data=map_data)
