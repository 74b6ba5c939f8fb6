from __future__ import annotations

import pytest

from marketing_insights.aggregate.demographics import (
    compute_age_group_metrics,
    compute_gender_age_group_metrics,
    compute_gender_metrics,
)


def _slice(gender: str, age_group: str, pct: float, clicks: int, impressions: int, conversions: int) -> dict:
    return {
        "gender": gender,
        "age_group": age_group,
        "percentage_of_audience": pct,
        "performance": {"clicks": clicks, "impressions": impressions, "conversions": conversions},
    }


TWO_SLICE_DOC = {
    "campaigns": [
        {
            "spend": 100,
            "revenue": 200,
            "demographic_breakdown": [
                _slice("Male", "18-24", 60, 10, 100, 2),
                _slice("Female", "25-34", 40, 5, 50, 1),
            ],
        }
    ]
}


def test_gender_metrics_split_spend_and_revenue_by_audience_share() -> None:
    g = compute_gender_metrics(TWO_SLICE_DOC)
    assert g.male.spend == 60.00
    assert g.male.revenue == 120
    assert g.male.clicks == 10
    assert g.male.impressions == 100
    assert g.male.conversions == 2
    assert g.female.spend == 40.00
    assert g.female.revenue == 80
    assert g.female.clicks == 5


def test_gender_share_is_relative_to_male_plus_female_not_100() -> None:
    doc = {
        "campaigns": [
            {
                "spend": 90,
                "revenue": 30,
                "demographic_breakdown": [
                    _slice("Male", "18-24", 20, 1, 1, 0),
                    _slice("Female", "18-24", 10, 1, 1, 0),
                ],
            }
        ]
    }
    g = compute_gender_metrics(doc)
    assert g.male.spend == 60.00
    assert g.female.spend == 30.00
    assert g.male.revenue == 20
    assert g.female.revenue == 10


def test_gender_ignores_other_values_and_zero_percentage_campaigns() -> None:
    doc = {
        "campaigns": [
            {
                "spend": 500,
                "revenue": 500,
                "demographic_breakdown": [
                    _slice("Male", "18-24", 0, 3, 30, 1),
                    _slice("Other", "18-24", 100, 99, 999, 9),
                ],
            },
            {"spend": 1000, "revenue": 1000},
        ]
    }
    g = compute_gender_metrics(doc)
    assert g.male.clicks == 3
    assert g.male.spend == 0
    assert g.male.revenue == 0
    assert g.female.clicks == 0
    assert g.female.spend == 0


def test_gender_rounding_spend_two_decimals_revenue_integer() -> None:
    doc = {
        "campaigns": [
            {
                "spend": 100,
                "revenue": 100,
                "demographic_breakdown": [
                    _slice("Male", "18-24", 1, 0, 0, 0),
                    _slice("Female", "18-24", 2, 0, 0, 0),
                ],
            }
        ]
    }
    g = compute_gender_metrics(doc)
    assert g.male.spend == 33.33
    assert g.female.spend == 66.67
    assert g.male.revenue == 33
    assert g.female.revenue == 67


@pytest.mark.parametrize("doc", [None, [], "x", {}, {"campaigns": None}, {"campaigns": {"a": 1}}])
def test_demographics_empty_for_documents_without_campaigns(doc: object) -> None:
    g = compute_gender_metrics(doc)
    assert g.male.model_dump() == {"spend": 0.0, "revenue": 0, "clicks": 0, "impressions": 0, "conversions": 0}
    assert g.female.model_dump() == g.male.model_dump()
    assert compute_age_group_metrics(doc) == []
    ga = compute_gender_age_group_metrics(doc)
    assert ga.male == [] and ga.female == []


def test_demographics_tolerate_malformed_slices() -> None:
    doc = {
        "campaigns": [
            "not a campaign",
            {
                "spend": "100",
                "revenue": None,
                "demographic_breakdown": [
                    "junk",
                    {"gender": ["Male"], "percentage_of_audience": 50},
                    {"gender": "Male", "age_group": "18-24", "percentage_of_audience": "abc", "performance": "x"},
                    {"gender": "Female", "age_group": "25-34", "percentage_of_audience": 50},
                ],
            },
        ]
    }
    g = compute_gender_metrics(doc)
    assert g.female.spend == 100.00
    assert g.female.revenue == 0
    assert g.male.spend == 0
    ga = compute_gender_age_group_metrics(doc)
    assert [m.age_group for m in ga.male] == ["18-24"]
    assert ga.male[0].ctr == 0


def test_age_group_allocation_sums_to_campaign_spend() -> None:
    doc = {
        "campaigns": [
            {
                "spend": 300,
                "revenue": 900,
                "demographic_breakdown": [
                    _slice("Male", "35-44", 30, 0, 0, 0),
                    _slice("Female", "18-24", 30, 0, 0, 0),
                    _slice("Male", "18-24", 20, 0, 0, 0),
                    _slice("Female", "25-34", 10, 0, 0, 0),
                ],
            },
            {
                "spend": 50,
                "revenue": 50,
                "demographic_breakdown": [_slice("Male", "18-24", 0, 0, 0, 0)],
            },
        ]
    }
    out = compute_age_group_metrics(doc)
    assert [m.age_group for m in out] == ["18-24", "25-34", "35-44"]
    by_group = {m.age_group: m for m in out}
    assert by_group["18-24"].spend == 166.67
    assert by_group["25-34"].spend == 33.33
    assert by_group["35-44"].spend == 100.00
    assert by_group["18-24"].revenue == 500
    assert sum(m.spend for m in out) == pytest.approx(300, abs=0.01)


def test_age_group_accumulates_across_campaigns() -> None:
    doc = {
        "campaigns": [
            {"spend": 10, "revenue": 20, "demographic_breakdown": [_slice("Male", "45-54", 100, 0, 0, 0)]},
            {"spend": 5, "revenue": 5, "demographic_breakdown": [_slice("Female", "45-54", 50, 0, 0, 0)]},
        ]
    }
    out = compute_age_group_metrics(doc)
    assert len(out) == 1
    assert out[0].spend == 15.00
    assert out[0].revenue == 25


def test_age_group_sort_by_numeric_prefix_with_unparseable_first() -> None:
    groups = ["65+", "25-34", "Unknown", "18-24", "13-17"]
    doc = {
        "campaigns": [
            {
                "spend": 100,
                "revenue": 100,
                "demographic_breakdown": [_slice("Male", g, 20, 0, 0, 0) for g in groups],
            }
        ]
    }
    out = compute_age_group_metrics(doc)
    assert [m.age_group for m in out] == ["Unknown", "13-17", "18-24", "25-34", "65+"]


def test_gender_age_group_rates_and_zero_guards() -> None:
    doc = {
        "campaigns": [
            {
                "demographic_breakdown": [
                    _slice("Male", "25-34", 10, 3, 200, 1),
                    _slice("Male", "18-24", 10, 0, 0, 0),
                    _slice("Female", "25-34", 10, 10, 0, 5),
                ]
            },
            {"demographic_breakdown": [_slice("Male", "25-34", 10, 3, 100, 0)]},
        ]
    }
    ga = compute_gender_age_group_metrics(doc)
    assert [m.age_group for m in ga.male] == ["18-24", "25-34"]
    young, mid = ga.male
    assert young.ctr == 0 and young.conversion_rate == 0
    assert mid.impressions == 300
    assert mid.clicks == 6
    assert mid.ctr == 2.00
    assert mid.conversion_rate == 16.67
    (female,) = ga.female
    assert female.ctr == 0
    assert female.conversion_rate == 50.00


def test_age_group_ties_keep_first_seen_order() -> None:
    doc = {
        "campaigns": [
            {
                "spend": 100,
                "revenue": 100,
                "demographic_breakdown": [
                    _slice("Male", "25-34", 25, 0, 0, 0),
                    _slice("Male", "18+", 25, 0, 0, 0),
                    _slice("Female", "18-24", 25, 0, 0, 0),
                    _slice("Female", "13-17", 25, 0, 0, 0),
                ],
            }
        ]
    }
    out = compute_age_group_metrics(doc)
    assert [m.age_group for m in out] == ["13-17", "18+", "18-24", "25-34"]


def test_gender_age_group_ties_keep_first_seen_order() -> None:
    doc = {
        "campaigns": [
            {
                "demographic_breakdown": [
                    _slice("Female", "18+", 10, 1, 10, 0),
                    _slice("Female", "18-24", 10, 1, 10, 0),
                    _slice("Male", "18-24", 10, 1, 10, 0),
                    _slice("Male", "18+", 10, 1, 10, 0),
                ]
            }
        ]
    }
    ga = compute_gender_age_group_metrics(doc)
    assert [m.age_group for m in ga.female] == ["18+", "18-24"]
    assert [m.age_group for m in ga.male] == ["18-24", "18+"]


def test_gender_metrics_handle_very_large_spend() -> None:
    doc = {
        "campaigns": [
            {
                "spend": 1e27,
                "revenue": 1e30,
                "demographic_breakdown": [_slice("Male", "18-24", 100, 0, 0, 0)],
            }
        ]
    }
    g = compute_gender_metrics(doc)
    assert g.male.spend == 1e27
    assert g.male.revenue == 10**30
    assert g.female.spend == 0


def test_gender_counts_are_exact_integer_sums() -> None:
    doc = {
        "campaigns": [
            {"demographic_breakdown": [_slice("Male", "18-24", 50, 2**53, 10**30, 0)]},
            {"demographic_breakdown": [_slice("Male", "18-24", 50, 1, 1, 0)]},
        ]
    }
    g = compute_gender_metrics(doc)
    assert g.male.clicks == 2**53 + 1
    assert g.male.impressions == 10**30 + 1
    ga = compute_gender_age_group_metrics(doc)
    assert ga.male[0].clicks == 2**53 + 1
