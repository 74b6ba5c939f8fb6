from __future__ import annotations

import math

import pytest

from marketing_insights.aggregate.helpers import (
    age_group_sort_key,
    allocate,
    campaigns_of,
    exact_sum,
    num,
    round_count,
    round_half_up,
    round_revenue,
    round_spend,
    safe_rate,
)


def test_campaigns_of_reads_defensively() -> None:
    assert campaigns_of(None) == []
    assert campaigns_of([{"spend": 1}]) == []
    assert campaigns_of({"campaigns": [{"spend": 1}, 3, None]}) == [{"spend": 1}]


@pytest.mark.parametrize(
    "value,expected",
    [(5, 5), (2.5, 2.5), ("7.25", 7.25), (None, 0), (True, 0), ("abc", 0), (math.nan, 0), (math.inf, 0), ([1], 0)],
)
def test_num_coerces_or_defaults_to_zero(value: object, expected: float) -> None:
    assert num(value) == expected


def test_round_half_up_rounds_halves_away_from_zero() -> None:
    assert round_half_up(2.675, 2) == 2.68
    assert round_spend(0.125) == 0.13
    assert round_revenue(2.5) == 3
    assert round_revenue(-2.5) == -3
    assert round_revenue(119.99999999999999) == 120


def test_allocate_splits_total_by_share_of_bucket_sum() -> None:
    parts = [allocate(123.45, pct, 70) for pct in (10, 25, 35)]
    assert sum(parts) == pytest.approx(123.45)
    assert allocate(100, 50, 0) == 0
    assert allocate(100, 50, -5) == 0


def test_safe_rate_guards_zero_denominator() -> None:
    assert safe_rate(5, 0) == 0
    assert safe_rate(0, 0) == 0
    assert safe_rate(1, 4) == 25


@pytest.mark.parametrize(
    "label,key",
    [("18-24", 18), ("65+", 65), (" 35-44", 35), ("Unknown", 0), ("", 0), ("-5", 0)],
)
def test_age_group_sort_key(label: str, key: int) -> None:
    assert age_group_sort_key(label) == key


def test_rounding_large_values_does_not_raise() -> None:
    assert round_spend(1e27) == 1e27
    assert round_revenue(1e30) == 10**30
    assert round_revenue(10**40) == 10**40


def test_round_count_keeps_ints_exact() -> None:
    assert round_count(2**53 + 1) == 2**53 + 1
    assert round_count(10**30) == 10**30
    assert round_count(2.5) == 3


def test_exact_sum_preserves_python_ints() -> None:
    import pandas as pd

    assert exact_sum(pd.Series([2**53, 1], dtype=object)) == 2**53 + 1
    assert exact_sum(pd.Series([], dtype=object)) == 0
