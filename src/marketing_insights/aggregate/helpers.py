"""Shared readers and arithmetic for the breakdown functions.

The marketing document is untrusted JSON: any field may be missing or of the
wrong type. Everything here reads defensively and never raises, so the
breakdowns built on top of it degrade to zero/empty results instead.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

import pandas as pd

UNKNOWN_LABEL = "Unknown"

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def campaigns_of(document: Any) -> list[Mapping[str, Any]]:
    """Return the campaign records of a marketing document.

    A non-mapping document, a missing or non-list `campaigns` entry, and
    non-mapping elements all read as empty.
    """
    if not isinstance(document, Mapping):
        return []
    campaigns = document.get("campaigns")
    if not isinstance(campaigns, list):
        return []
    return [c for c in campaigns if isinstance(c, Mapping)]


def records(parent: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    """Return the mapping elements of the list stored under `key`."""
    value = parent.get(key)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def section(parent: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return the nested object stored under `key`, or an empty mapping."""
    value = parent.get(key)
    return value if isinstance(value, Mapping) else {}


def num(value: Any) -> float:
    """Coerce a JSON value to a finite number; anything unusable reads as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return 0
        return parsed if math.isfinite(parsed) else 0
    return 0


def label(value: Any, default: str = UNKNOWN_LABEL) -> str:
    """Return a grouping label; missing or blank values map to `default`."""
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def amount(value: Any) -> float:
    """Coerce a money or percentage value to float; out-of-range values read as 0."""
    try:
        return float(num(value))
    except OverflowError:
        return 0.0


def _quantize(value: float, ndigits: int) -> Decimal:
    """Half-up quantize `value` with enough precision for its magnitude."""
    if isinstance(value, float) and not math.isfinite(value):
        return Decimal(0)
    d = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = max(28, d.adjusted() + ndigits + 2)
        return d.quantize(Decimal(10) ** -ndigits, rounding=ROUND_HALF_UP)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like the dashboard displays figures (0.5 always rounds away from zero)."""
    return float(_quantize(value, ndigits))


def round_spend(value: float) -> float:
    return round_half_up(value, 2)


def round_rate(value: float) -> float:
    return round_half_up(value, 2)


def round_revenue(value: float) -> int:
    return int(_quantize(value, 0))


def round_count(value: float) -> int:
    """Integer sums pass through unchanged; fractional input is rounded half up."""
    if isinstance(value, int):
        return value
    return int(_quantize(value, 0))


def exact_sum(values: pd.Series) -> float:
    """Sum a column of Python numbers; a column of ints sums to an exact int."""
    return sum(values.tolist(), 0)


def build_frame(
    rows: list[dict[str, Any]],
    columns: Sequence[str],
    money: Sequence[str] = (),
) -> pd.DataFrame:
    """Build a slice DataFrame from reader output.

    `money` columns are float64; every other column keeps its Python objects
    (so counts stay exact ints and `None` keys stay `None`). A `row` column
    records first-seen order and equals the index.
    """
    frame = pd.DataFrame({
        c: pd.Series([r[c] for r in rows], dtype=float if c in money else object)
        for c in columns
    })
    frame["row"] = range(len(frame))
    return frame


def allocate(total: float, bucket_pct: float, total_pct: float) -> float:
    """Split `total` proportionally to `bucket_pct` out of `total_pct`.

    `total_pct` is the sum of all buckets' percentages (not 100), so the
    allocations of every bucket add back up to `total`. Returns 0 when
    `total_pct` is not positive.
    """
    if total_pct <= 0:
        return 0.0
    return total * (bucket_pct / total_pct)


def safe_rate(numerator: float, denominator: float) -> float:
    """Return `numerator / denominator` as a percentage, 0 for a zero denominator."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator * 100


def age_group_sort_key(age_group: str) -> int:
    """Sort key for age-group labels: the integer before the first "-".

    "18-24" -> 18, "65+" -> 65; labels without a leading integer sort as 0.
    """
    m = _LEADING_INT_RE.match(age_group.split("-", 1)[0])
    return int(m.group(1)) if m else 0
