"""
Unit tests for the aggregator.
"""

import pytest

from geotweets.batch.aggregate import (
    AFRICA_SUB_REGIONS,
    aggregate,
    normalize_and_order,
    order_for_display,
    total_count,
)
from geotweets.batch.enrich import filter_and_enrich
from geotweets.core.errors import UnmappedCategoryError
from geotweets.core.models import AggregateRow, SubRegionOrder
from geotweets.observability import metrics


def enriched_row(record, code, name, sub_region, **kwargs):
    return record(code, **kwargs) + (name, sub_region)


@pytest.fixture
def mixed_enriched(make_enriched, record):
    rows = (
        [enriched_row(record, "KE", "Kenya", "Eastern Africa")] * 3
        + [enriched_row(record, "CD", "Democratic Republic of the Congo", "Middle Africa")] * 2
        + [enriched_row(record, "NG", "Nigeria", "Western Africa")] * 5
        + [enriched_row(record, "TZ", "United Republic of Tanzania", "Eastern Africa")] * 4
        + [enriched_row(record, "ZA", "South Africa", "Southern Africa")]
    )
    return make_enriched(rows)


def test_aggregate_scenario(scenario_records, africa_reference_df):
    enriched = filter_and_enrich(scenario_records, africa_reference_df)
    rows = {
        r["country_code"]: r["count"] for r in aggregate(enriched).collect()
    }
    assert rows == {"KE": 2, "EG": 1}


def test_aggregate_rows_validate_as_models(scenario_records, africa_reference_df):
    enriched = filter_and_enrich(scenario_records, africa_reference_df)
    rows = sorted(
        (AggregateRow.from_row(r) for r in aggregate(enriched).collect()),
        key=lambda r: r.country_code,
    )
    assert rows == [
        AggregateRow(country_code="EG", country_name="Egypt", sub_region="Northern Africa", count=1),
        AggregateRow(country_code="KE", country_name="Kenya", sub_region="Eastern Africa", count=2),
    ]


def test_counts_sum_to_enriched_total(mixed_enriched):
    assert total_count(aggregate(mixed_enriched)) == mixed_enriched.count()


def test_only_observed_groups(scenario_records, reference_df):
    # FR is in the reference but EG-only records produce no FR row
    records = scenario_records.filter(scenario_records.country_code == "EG")
    enriched = filter_and_enrich(records, reference_df)

    codes = [r["country_code"] for r in aggregate(enriched).collect()]
    assert codes == ["EG"]


def test_aggregate_empty(make_enriched):
    rows = aggregate(make_enriched([]))
    assert rows.count() == 0
    assert total_count(rows) == 0


def test_normalize_and_order_rewrites_names(mixed_enriched):
    table = normalize_and_order(aggregate(mixed_enriched))

    names = {r["country_code"]: r["country_name"] for r in table.rows.collect()}
    assert names["CD"] == "DRC"
    assert names["TZ"] == "Tanzania"
    assert names["KE"] == "Kenya"


def test_normalize_and_order_attaches_order(mixed_enriched):
    table = normalize_and_order(aggregate(mixed_enriched))

    assert table.order == AFRICA_SUB_REGIONS
    assert table.unmapped_sub_regions == []
    ranks = {r["sub_region"]: r["sub_region_rank"] for r in table.rows.collect()}
    assert ranks == {
        "Western Africa": 0,
        "Middle Africa": 2,
        "Eastern Africa": 3,
        "Southern Africa": 4,
    }


def test_normalize_and_order_keeps_counts(mixed_enriched):
    rows = aggregate(mixed_enriched)
    table = normalize_and_order(rows)

    assert table.rows.count() == rows.count()
    assert total_count(table.rows) == total_count(rows)


def test_custom_order(mixed_enriched):
    order = SubRegionOrder(regions=(
        "Southern Africa", "Eastern Africa", "Middle Africa", "Northern Africa", "Western Africa"
    ))
    table = normalize_and_order(aggregate(mixed_enriched), order=order)

    first = order_for_display(table).collect()[0]
    assert first["country_code"] == "ZA"


def test_unmapped_sub_region_warns_and_keeps_row(make_enriched, record):
    enriched = make_enriched([
        enriched_row(record, "KE", "Kenya", "Eastern Africa"),
        enriched_row(record, "XA", "Atlantis", "Atlantic Ocean"),
    ])
    before = metrics.REGISTRY.get_sample_value(
        "geotweets_unmapped_sub_regions_total", {"sub_region": "Atlantic Ocean"}
    ) or 0.0

    table = normalize_and_order(aggregate(enriched))

    assert table.unmapped_sub_regions == ["Atlantic Ocean"]
    rows = {r["country_code"]: r for r in table.rows.collect()}
    assert rows["XA"]["sub_region"] == "Atlantic Ocean"
    assert rows["XA"]["sub_region_rank"] is None
    after = metrics.REGISTRY.get_sample_value(
        "geotweets_unmapped_sub_regions_total", {"sub_region": "Atlantic Ocean"}
    )
    assert after == before + 1


def test_unmapped_sub_region_strict_raises(make_enriched, record):
    enriched = make_enriched([enriched_row(record, "XA", "Atlantis", "Atlantic Ocean")])

    with pytest.raises(UnmappedCategoryError) as exc_info:
        normalize_and_order(aggregate(enriched), strict=True)
    assert exc_info.value.values == ["Atlantic Ocean"]
    assert "Western Africa" in exc_info.value.domain


def test_order_for_display(mixed_enriched):
    table = normalize_and_order(aggregate(mixed_enriched))

    rows = [(r["sub_region"], r["country_name"], r["count"]) for r in order_for_display(table).collect()]
    assert rows == [
        ("Western Africa", "Nigeria", 5),
        ("Middle Africa", "DRC", 2),
        ("Eastern Africa", "Tanzania", 4),
        ("Eastern Africa", "Kenya", 3),
        ("Southern Africa", "South Africa", 1),
    ]
