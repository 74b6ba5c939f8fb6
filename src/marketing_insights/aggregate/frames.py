"""Conversion of breakdown results into pandas DataFrames and chart rows.

The CLI prints these frames and the Streamlit app hands them to Altair.
"""
from __future__ import annotations

from typing import Any, Iterable

import pandas as pd
from pydantic import BaseModel

from marketing_insights.aggregate.devices import DEVICES
from marketing_insights.models import (
    DeviceMetrics,
    GenderAgeGroupBreakdown,
    GenderBreakdown,
    RegionBreakdown,
)

DEVICE_CHART_METRICS = ("Revenue", "Spend", "Conversions", "Clicks")


def to_frame(rows: Iterable[BaseModel]) -> pd.DataFrame:
    """Return a DataFrame with one row per model (empty when there are none)."""
    return pd.DataFrame([r.model_dump() for r in rows])


def gender_frame(breakdown: GenderBreakdown) -> pd.DataFrame:
    """Return a two-row frame (Male, Female) with a leading `gender` column."""
    return pd.DataFrame([
        {"gender": "Male", **breakdown.male.model_dump()},
        {"gender": "Female", **breakdown.female.model_dump()},
    ])


def gender_age_group_frame(breakdown: GenderAgeGroupBreakdown) -> pd.DataFrame:
    """Return the male and female rows stacked with a `gender` column."""
    rows = [{"gender": "Male", **m.model_dump()} for m in breakdown.male]
    rows += [{"gender": "Female", **m.model_dump()} for m in breakdown.female]
    return pd.DataFrame(rows)


def device_chart_rows(devices: list[DeviceMetrics]) -> list[dict[str, Any]]:
    """Reshape device metrics into grouped-bar rows.

    Returns one row per metric in `DEVICE_CHART_METRICS`, each shaped like
    ``{"name": "Revenue", "Mobile": ..., "Desktop": ..., "Tablet": ...}``;
    devices with no campaigns read as 0.
    """
    by_device = {d.device: d for d in devices}
    rows: list[dict[str, Any]] = []
    for metric in DEVICE_CHART_METRICS:
        row: dict[str, Any] = {"name": metric}
        for device in DEVICES:
            m = by_device.get(device)
            row[device] = getattr(m, metric.lower()) if m is not None else 0
        rows.append(row)
    return rows


def result_frame(result: Any) -> pd.DataFrame:
    """Return a flat DataFrame for any `aggregate()` result."""
    if isinstance(result, GenderBreakdown):
        return gender_frame(result)
    if isinstance(result, GenderAgeGroupBreakdown):
        return gender_age_group_frame(result)
    if isinstance(result, RegionBreakdown):
        return to_frame(result.region_list)
    return to_frame(result)
