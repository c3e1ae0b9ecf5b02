"""
Record filter and enricher.

Keeps the collected records whose country is in the filtered reference set
and attaches the reference country name and sub-region. Records from
outside the set (the bounding box also captures the Middle East and the
Mediterranean) are dropped without error.
"""

import logging
from pathlib import Path

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import broadcast, col, monotonically_increasing_id

from geotweets.batch.readers import FileReader
from geotweets.core.schema import ENRICHED_SCHEMA, RECORD_COLUMNS, RECORD_SCHEMA, select_mapped
from geotweets.observability.logger import get_logger


logger = get_logger(__name__)

RECORD_FIELDS = [field.name for field in RECORD_SCHEMA.fields]
ENRICHED_FIELDS = [field.name for field in ENRICHED_SCHEMA.fields]


def load_records(
    spark: SparkSession,
    source: str | Path,
    file_format: str = "parquet",
    **read_options
) -> DataFrame:
    """
    Load the collector's persisted records.

    Args:
        spark: Active Spark session
        source: Path to the records (Parquet, JSON lines or CSV)
        file_format: parquet, json or csv
        **read_options: Passed to the file reader

    Returns:
        DataFrame with the internal record columns

    Raises:
        SourceUnavailableError: If the source is missing, unreadable or lacks
            a required column
    """
    reader = FileReader(spark)
    raw = reader.read(source, file_format=file_format, **read_options)
    return select_mapped(raw, RECORD_COLUMNS, RECORD_SCHEMA, source=str(source))


def filter_and_enrich(records: DataFrame, reference: DataFrame) -> DataFrame:
    """
    Restrict records to the reference countries and attach their attributes.

    Relative input order is preserved. Records with a null country code never
    match. Extra columns on the input (including attributes from an earlier
    enrichment) are replaced, so enriching an enriched table is a no-op.

    Args:
        records: Records with the internal record columns
        reference: Filtered reference entries (unique country_code)

    Returns:
        DataFrame with the record columns plus country_name and sub_region
    """
    attributes = reference.select("country_code", "country_name", "sub_region")

    ordered = records.select(*RECORD_FIELDS).withColumn("_pos", monotonically_increasing_id())
    kept = ordered.join(broadcast(attributes.select("country_code")), on="country_code", how="left_semi")
    enriched = (
        kept.join(broadcast(attributes), on="country_code", how="left")
        .orderBy("_pos")
        .select(*ENRICHED_FIELDS)
    )

    if logger.isEnabledFor(logging.DEBUG):
        total = records.count()
        kept_count = enriched.count()
        logger.debug(
            f"Dropped {total - kept_count} of {total} records outside the reference set",
            extra={"kept": kept_count, "dropped": total - kept_count},
        )

    return enriched


def leaked_records(enriched: DataFrame, reference: DataFrame) -> DataFrame:
    """Enriched records whose country code is not in the reference set (expected empty)."""
    return enriched.join(
        reference.select("country_code"), on="country_code", how="left_anti"
    )
