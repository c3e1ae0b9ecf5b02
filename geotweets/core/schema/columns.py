"""
Column contracts for the two input tables.

Source tables use the column names of the country reference data and of the
stream collector's output; readers rename them to the internal names below
before any stage sees them.
"""

from pyspark.sql import DataFrame
from pyspark.sql.functions import col, lit
from pyspark.sql.types import DoubleType, StringType, StructField, StructType

from geotweets.core.errors import SourceUnavailableError


# source column -> internal column
REFERENCE_COLUMNS = {
    "iso2c": "country_code",
    "country.name.en": "country_name",
    "continent": "continent",
    "region": "sub_region",
}
REFERENCE_OPTIONAL_COLUMNS = {
    "country.name.en.regex": "country_name_regex",
}

RECORD_COLUMNS = {
    "country_code": "country_code",
    "lang": "language_tag",
    "place_lat": "latitude",
    "place_lon": "longitude",
    "screen_name": "author_handle",
    "text": "text",
}

REFERENCE_SCHEMA = StructType([
    StructField("country_code", StringType(), nullable=False),
    StructField("country_name", StringType(), nullable=True),
    StructField("continent", StringType(), nullable=True),
    StructField("sub_region", StringType(), nullable=True),
    StructField("country_name_regex", StringType(), nullable=True),
])

RECORD_SCHEMA = StructType([
    StructField("country_code", StringType(), nullable=True),
    StructField("language_tag", StringType(), nullable=True),
    StructField("latitude", DoubleType(), nullable=True),
    StructField("longitude", DoubleType(), nullable=True),
    StructField("author_handle", StringType(), nullable=True),
    StructField("text", StringType(), nullable=True),
])

ENRICHED_SCHEMA = StructType(
    RECORD_SCHEMA.fields + [
        StructField("country_name", StringType(), nullable=False),
        StructField("sub_region", StringType(), nullable=False),
    ]
)


def missing_columns(df: DataFrame, required) -> list[str]:
    """Return the required column names absent from df, in declaration order."""
    present = set(df.columns)
    return [name for name in required if name not in present]


def select_mapped(
    df: DataFrame,
    mapping: dict[str, str],
    target: StructType,
    source: str,
    optional: dict[str, str] | None = None,
) -> DataFrame:
    """
    Project a source table onto an internal schema.

    Columns are renamed per mapping and cast to the types in target; optional
    columns missing from the source are filled with nulls.

    Args:
        df: Source DataFrame
        mapping: Required source column -> internal column
        target: Internal schema (column order and types)
        source: Source description for error messages
        optional: Optional source column -> internal column

    Returns:
        DataFrame with exactly the columns of target

    Raises:
        SourceUnavailableError: If a required column is missing
    """
    missing = missing_columns(df, mapping)
    if missing:
        raise SourceUnavailableError(
            source, f"missing required column(s) {missing}; found {df.columns}"
        )

    renames = dict(mapping)
    for src_name, internal in (optional or {}).items():
        if src_name in df.columns:
            renames[src_name] = internal

    by_internal = {internal: src_name for src_name, internal in renames.items()}
    projected = []
    for field in target.fields:
        if field.name in by_internal:
            # Backticks: source names such as "country.name.en" contain dots
            expr = col(f"`{by_internal[field.name]}`").cast(field.dataType)
        else:
            expr = lit(None).cast(field.dataType)
        projected.append(expr.alias(field.name))

    return df.select(*projected)
