"""
Tables handed to the map renderers.

The static choropleth joins the aggregate to a world geometry table by
display name; the interactive map plots sampled points coloured by language.
Nothing here draws anything.
"""

import re

from pyspark.sql import DataFrame
from pyspark.sql.functions import col, concat, lit, regexp_replace

from geotweets.core.models import AggregateTable, BoundingBox


# Geometry table names that differ from the reference display names.
# Applied in order, as substring replacements.
GEOMETRY_NAME_REWRITES = (
    ("Ivory Coast", "Côte D'Ivoire"),
    ("Democratic Republic of the Congo", "DRC"),
    ("Republic of Congo", "Congo"),
)

# ColorBrewer "Paired"
PAIRED = (
    "#A6CEE3", "#1F78B4", "#B2DF8A", "#33A02C", "#FB9A99", "#E31A1C",
    "#FDBF6F", "#FF7F00", "#CAB2D6", "#6A3D9A", "#FFFF99", "#B15928",
)


def choropleth_table(table: AggregateTable) -> DataFrame:
    """
    Key the aggregate by display name for the choropleth fill join.

    Returns:
        DataFrame of region (display name), un_region (sub-region),
        country_code, count
    """
    return table.rows.select(
        col("country_name").alias("region"),
        col("sub_region").alias("un_region"),
        col("country_code"),
        col("count"),
    )


def normalize_geometry_name(name: str | None) -> str | None:
    """
    Rewrite a geometry-table country name to the display name used by the
    aggregate.

    >>> normalize_geometry_name("Ivory Coast")
    "Côte D'Ivoire"
    >>> normalize_geometry_name("Kenya")
    'Kenya'
    """
    if name is None:
        return None
    for old, new in GEOMETRY_NAME_REWRITES:
        name = name.replace(old, new, 1)
    return name


def normalize_geometry_names(geometry: DataFrame, column: str = "region") -> DataFrame:
    """Apply GEOMETRY_NAME_REWRITES to the name column of a geometry table."""
    names = col(column)
    for old, new in GEOMETRY_NAME_REWRITES:
        names = regexp_replace(names, re.escape(old), new)
    return geometry.withColumn(column, names)


def geometry_patterns(reference: DataFrame) -> list[str]:
    """Name patterns for selecting the reference countries from a geometry source."""
    rows = (
        reference.filter(col("country_name_regex").isNotNull())
        .select("country_name_regex")
        .collect()
    )
    return [row["country_name_regex"] for row in rows]


def point_layer(sampled: DataFrame) -> DataFrame:
    """
    Per-point attributes for the interactive map.

    The popup reads "<author>: <text>" and is null when either part is.

    Returns:
        DataFrame of latitude, longitude, language_tag, popup
    """
    return sampled.select(
        col("latitude"),
        col("longitude"),
        col("language_tag"),
        concat(col("author_handle"), lit(": "), col("text")).alias("popup"),
    )


def language_palette(records: DataFrame, palette: tuple[str, ...] = PAIRED) -> dict[str, str]:
    """
    Assign a colour to each distinct language tag.

    Tags are sorted and take palette colours in turn, cycling when there are
    more tags than colours. Null tags get no colour.

    Args:
        records: Any table with a language_tag column
        palette: Hex colours

    Returns:
        Mapping of language tag to colour
    """
    if not palette:
        raise ValueError("palette must contain at least one colour")

    tags = sorted(
        row["language_tag"]
        for row in records.select("language_tag").distinct().collect()
        if row["language_tag"] is not None
    )
    return {tag: palette[idx % len(palette)] for idx, tag in enumerate(tags)}


def points_within(points: DataFrame, bbox: BoundingBox) -> DataFrame:
    """Keep the points inside a zoom window; points without coordinates are dropped."""
    return points.filter(
        col("latitude").between(bbox.min_lat, bbox.max_lat)
        & col("longitude").between(bbox.min_lon, bbox.max_lon)
    )
