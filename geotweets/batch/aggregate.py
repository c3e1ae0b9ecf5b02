"""
Aggregator: record counts per country, display-name normalization and the
sub-region rank order.
"""

from itertools import chain

from pyspark.sql import DataFrame
from pyspark.sql.functions import coalesce, col, create_map, lit

from geotweets.core.config import DEFAULT_COUNTRY_NAME_REWRITES, DEFAULT_SUB_REGION_ORDER
from geotweets.core.errors import UnmappedCategoryError
from geotweets.core.models import AggregateTable, SubRegionOrder
from geotweets.observability import metrics
from geotweets.observability.logger import get_logger


logger = get_logger(__name__)

GROUP_KEY = ["country_code", "country_name", "sub_region"]

# Official names too long for a dot-plot axis or a legend
COUNTRY_NAME_REWRITES = dict(DEFAULT_COUNTRY_NAME_REWRITES)

AFRICA_SUB_REGIONS = SubRegionOrder(regions=DEFAULT_SUB_REGION_ORDER)


def aggregate(enriched: DataFrame) -> DataFrame:
    """
    Count enriched records per (country_code, country_name, sub_region).

    Only observed groups get a row; a reference country with no records is
    absent, not listed with a zero count.

    Returns:
        DataFrame of country_code, country_name, sub_region, count
    """
    return enriched.groupBy(*GROUP_KEY).count()


def normalize_country_name(name: str | None, rewrites: dict[str, str] | None = None) -> str | None:
    """
    Map an official country name to its display form.

    Names without a rewrite pass through unchanged.

    >>> normalize_country_name("Democratic Republic of the Congo")
    'DRC'
    >>> normalize_country_name("Kenya")
    'Kenya'
    """
    rewrites = COUNTRY_NAME_REWRITES if rewrites is None else rewrites
    if name is None:
        return None
    return rewrites.get(name, name)


def _lookup(mapping: dict, column):
    """Spark expression looking column up in a literal mapping (null when absent)."""
    return create_map(*[lit(x) for x in chain(*mapping.items())])[column]


def normalize_and_order(
    rows: DataFrame,
    order: SubRegionOrder | None = None,
    rewrites: dict[str, str] | None = None,
    strict: bool = False,
) -> AggregateTable:
    """
    Rewrite country display names and rank sub-regions.

    Adds sub_region_rank (zero-based position in order); rows are not
    re-sorted. A sub-region outside the order is a reference-data mismatch:
    with strict it raises, otherwise it is logged as a warning, counted, and
    the row kept with a null rank.

    Args:
        rows: Output of aggregate()
        order: Sub-region rank order (defaults to the African sub-regions)
        rewrites: Country name rewrites (defaults to COUNTRY_NAME_REWRITES)
        strict: Raise UnmappedCategoryError on unknown sub-regions

    Returns:
        AggregateTable with the normalized rows and the order used

    Raises:
        UnmappedCategoryError: If strict and a sub-region is outside order
    """
    order = AFRICA_SUB_REGIONS if order is None else order
    rewrites = COUNTRY_NAME_REWRITES if rewrites is None else rewrites

    normalized = rows
    if rewrites:
        normalized = normalized.withColumn(
            "country_name",
            coalesce(_lookup(rewrites, col("country_name")), col("country_name")),
        )

    ranks = {name: idx for idx, name in enumerate(order.regions)}
    normalized = normalized.withColumn(
        "sub_region_rank", _lookup(ranks, col("sub_region")).cast("int")
    )

    outside = [
        row["sub_region"]
        for row in normalized.filter(col("sub_region_rank").isNull()).select("sub_region").collect()
    ]
    unmapped = order.unmapped(outside)

    if unmapped:
        if strict:
            raise UnmappedCategoryError(unmapped, order.regions)
        metrics.record_unmapped_sub_regions(outside)
        logger.warning(
            f"Sub-region(s) {unmapped} are not in the configured order; "
            "check the reference data",
            extra={"unmapped_sub_regions": unmapped, "order": list(order.regions)},
        )

    return AggregateTable(rows=normalized, order=order, unmapped_sub_regions=unmapped)


def order_for_display(table: AggregateTable) -> DataFrame:
    """
    Sort aggregate rows for the per-country dot plot.

    Sub-regions follow the table's order (unknown ones last); countries within
    a sub-region run from most to fewest records.
    """
    return table.rows.orderBy(
        col("sub_region_rank").asc_nulls_last(),
        col("count").desc(),
        col("country_name").asc(),
    )


def total_count(rows: DataFrame) -> int:
    """Sum of the count column (equals the number of enriched records)."""
    result = rows.agg({"count": "sum"}).collect()[0][0]
    return int(result or 0)
