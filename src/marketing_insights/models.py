"""Pydantic models for the derived breakdown records.

Every aggregation returns instances of these models. They are created fresh
on each call; `model_dump()` gives the plain dictionaries consumed by tables
and charts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


class GenderMetrics(BaseModel):
    """Totals attributed to one gender.

    Attributes:
        spend: Allocated spend, rounded to 2 decimals.
        revenue: Allocated revenue, rounded to the nearest integer.
        clicks: Sum of slice clicks.
        impressions: Sum of slice impressions.
        conversions: Sum of slice conversions.
    """
    model_config = ConfigDict(extra="forbid")
    spend: float = 0.0
    revenue: int = 0
    clicks: int = 0
    impressions: int = 0
    conversions: int = 0


class GenderBreakdown(BaseModel):
    """Gender metrics for the two supported genders."""
    model_config = ConfigDict(extra="forbid")
    male: GenderMetrics
    female: GenderMetrics


class AgeGroupMetric(BaseModel):
    """Spend and revenue allocated to an age group across campaigns."""
    model_config = ConfigDict(extra="forbid")
    age_group: str
    spend: float
    revenue: int


class GenderAgeGroupMetric(BaseModel):
    """Engagement for one (gender, age group) bucket.

    `ctr` and `conversion_rate` are percentages rounded to 2 decimals and are
    0 when their denominator is 0.
    """
    model_config = ConfigDict(extra="forbid")
    age_group: str
    impressions: int
    clicks: int
    conversions: int
    ctr: float
    conversion_rate: float


class GenderAgeGroupBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid")
    male: list[GenderAgeGroupMetric]
    female: list[GenderAgeGroupMetric]


class DeviceMetrics(BaseModel):
    """Campaign totals grouped by the campaign's primary device."""
    model_config = ConfigDict(extra="forbid")
    device: str
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: int
    ctr: float
    conversion_rate: float
    percentage_of_traffic: float


class RegionMetric(BaseModel):
    """Revenue and spend summed per region.

    Attributes:
        region: Region display name (grouping key).
        country: First country seen for the region, used as a map fallback.
        value: revenue + spend.
        performance: revenue / spend, with zero spend treated as 1.
    """
    model_config = ConfigDict(extra="forbid")
    region: str | None
    country: str | None
    revenue: int
    spend: float
    value: float
    performance: float


class MapPoint(BaseModel):
    """A region placed on the map at its approximate center."""
    model_config = ConfigDict(extra="forbid")
    city: str | None
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    value: float
    performance: float


class RegionBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid")
    region_list: list[RegionMetric]
    map_data: list[MapPoint]


class WeekMetric(BaseModel):
    """Spend and revenue summed per reporting week."""
    model_config = ConfigDict(extra="forbid")
    week_start: str
    week_label: str
    spend: float
    revenue: int
