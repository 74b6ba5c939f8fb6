"""Demographic breakdowns: gender, age group, and gender x age group.

Demographic slices carry engagement counts but no money. Spend and revenue
are attributed to a slice by splitting the campaign totals in proportion to
the slice's `percentage_of_audience`.

Expectations:
- Input: a marketing document (`{"campaigns": [...]}`), possibly malformed.
- Outputs: fresh pydantic records documented on each function.
"""
from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from marketing_insights.aggregate.helpers import (
    age_group_sort_key,
    allocate,
    amount,
    build_frame,
    campaigns_of,
    exact_sum,
    label,
    num,
    records,
    round_count,
    round_rate,
    round_revenue,
    round_spend,
    safe_rate,
    section,
)
from marketing_insights.models import (
    AgeGroupMetric,
    GenderAgeGroupBreakdown,
    GenderAgeGroupMetric,
    GenderBreakdown,
    GenderMetrics,
)

log = logging.getLogger(__name__)

GENDERS = ("Male", "Female")

_COUNTS = ("clicks", "impressions", "conversions")


def _slice_frame(document: Any, genders: tuple[str, ...] | None = None) -> pd.DataFrame:
    """Flatten every demographic slice into one row, tagged with its campaign.

    Each row carries the campaign's spend and revenue so allocations can be
    computed per slice. When `genders` is given, other slices are dropped.
    """
    rows: list[dict[str, Any]] = []
    for idx, campaign in enumerate(campaigns_of(document)):
        spend = amount(campaign.get("spend"))
        revenue = amount(campaign.get("revenue"))
        for sl in records(campaign, "demographic_breakdown"):
            gender = sl.get("gender")
            if genders is not None and (not isinstance(gender, str) or gender not in genders):
                continue
            perf = section(sl, "performance")
            rows.append({
                "campaign": idx,
                "gender": gender if isinstance(gender, str) else None,
                "age_group": label(sl.get("age_group")),
                "pct": amount(sl.get("percentage_of_audience")),
                "campaign_spend": spend,
                "campaign_revenue": revenue,
                **{field: num(perf.get(field)) for field in _COUNTS},
            })
    return build_frame(
        rows,
        ["campaign", "gender", "age_group", "pct", "campaign_spend", "campaign_revenue", *_COUNTS],
        money=("pct", "campaign_spend", "campaign_revenue"),
    )


def _allocate_money(df: pd.DataFrame, total_pct: pd.Series) -> pd.DataFrame:
    """Add per-slice `spend` and `revenue` shares of the campaign totals."""
    df = df.assign(total_pct=total_pct)
    df["spend"] = [
        allocate(t, p, s) for t, p, s in zip(df["campaign_spend"], df["pct"], df["total_pct"])
    ]
    df["revenue"] = [
        allocate(t, p, s) for t, p, s in zip(df["campaign_revenue"], df["pct"], df["total_pct"])
    ]
    return df


# =========================================================
# GENDER
# =========================================================

def compute_gender_metrics(document: Any) -> GenderBreakdown:
    """Return spend, revenue and engagement totals for male and female audiences.

    Clicks, impressions and conversions are summed from each demographic
    slice. Each campaign's spend and revenue are split between the genders in
    proportion to their share of the campaign's male + female audience
    percentage; campaigns where that sum is 0 contribute no money.

    Args:
        document: Marketing document.

    Returns:
        `GenderBreakdown` with spend rounded to 2 decimals and revenue to an
        integer for each gender.
    """
    df = _slice_frame(document, GENDERS)
    if df.empty:
        return GenderBreakdown(male=GenderMetrics(), female=GenderMetrics())

    # share of male + female audience, not of 100
    df = _allocate_money(df, df.groupby("campaign")["pct"].transform("sum"))

    grouped = df.groupby("gender", sort=False).agg(
        spend=("spend", "sum"),
        revenue=("revenue", "sum"),
        **{field: (field, exact_sum) for field in _COUNTS},
    )

    def _metrics(gender: str) -> GenderMetrics:
        if gender not in grouped.index:
            return GenderMetrics()
        t = grouped.loc[gender]
        return GenderMetrics(
            spend=round_spend(float(t["spend"])),
            revenue=round_revenue(float(t["revenue"])),
            clicks=round_count(t["clicks"]),
            impressions=round_count(t["impressions"]),
            conversions=round_count(t["conversions"]),
        )

    return GenderBreakdown(male=_metrics("Male"), female=_metrics("Female"))


# =========================================================
# AGE GROUP
# =========================================================

def compute_age_group_metrics(document: Any) -> list[AgeGroupMetric]:
    """Return spend and revenue allocated to each age group.

    For each campaign, every slice receives `percentage_of_audience /
    totalPct` of the campaign's spend and revenue, where `totalPct` is the
    sum over all of the campaign's slices. Campaigns with `totalPct == 0` are
    skipped.

    Args:
        document: Marketing document.

    Returns:
        One `AgeGroupMetric` per distinct `age_group`, sorted by the leading
        integer of the label (stable on ties).
    """
    df = _slice_frame(document)
    if df.empty:
        return []

    total_pct = df.groupby("campaign")["pct"].transform("sum")
    df = _allocate_money(df[total_pct != 0], total_pct[total_pct != 0])
    if df.empty:
        return []

    grouped = (
        df.groupby("age_group", sort=False)
        .agg(first_row=("row", "min"), spend=("spend", "sum"), revenue=("revenue", "sum"))
        .sort_values("first_row", kind="stable")
    )

    out = [
        AgeGroupMetric(
            age_group=group,
            spend=round_spend(float(r.spend)),
            revenue=round_revenue(float(r.revenue)),
        )
        for group, r in zip(grouped.index, grouped.itertuples(index=False))
    ]
    out.sort(key=lambda m: age_group_sort_key(m.age_group))
    log.debug("Age-group breakdown: %d groups", len(out))
    return out


# =========================================================
# GENDER x AGE GROUP
# =========================================================

def compute_gender_age_group_metrics(document: Any) -> GenderAgeGroupBreakdown:
    """Return engagement per age group, separately for male and female slices.

    Args:
        document: Marketing document.

    Returns:
        `GenderAgeGroupBreakdown` whose lists hold impressions, clicks,
        conversions, `ctr` (clicks / impressions %) and `conversion_rate`
        (conversions / clicks %) per age group, both rounded to 2 decimals
        and 0 when the denominator is 0.
    """
    df = _slice_frame(document, GENDERS)
    if df.empty:
        return GenderAgeGroupBreakdown(male=[], female=[])

    grouped = (
        df.groupby(["gender", "age_group"], sort=False)
        .agg(first_row=("row", "min"), **{field: (field, exact_sum) for field in _COUNTS})
        .sort_values("first_row", kind="stable")
    )

    rows: dict[str, list[GenderAgeGroupMetric]] = {g: [] for g in GENDERS}
    for (gender, group), r in zip(grouped.index, grouped.itertuples(index=False)):
        rows[gender].append(
            GenderAgeGroupMetric(
                age_group=group,
                impressions=round_count(r.impressions),
                clicks=round_count(r.clicks),
                conversions=round_count(r.conversions),
                ctr=round_rate(safe_rate(r.clicks, r.impressions)),
                conversion_rate=round_rate(safe_rate(r.conversions, r.clicks)),
            )
        )

    for g in GENDERS:
        rows[g].sort(key=lambda m: age_group_sort_key(m.age_group))
    return GenderAgeGroupBreakdown(male=rows["Male"], female=rows["Female"])
