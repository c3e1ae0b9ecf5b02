"""
Reference loader: the static country table and its continent filter.
"""

from functools import reduce
from operator import and_
from pathlib import Path

from py4j.protocol import Py4JJavaError
from pyspark.errors import AnalysisException
from pyspark.sql import DataFrame, SparkSession, Window
from pyspark.sql.functions import col, monotonically_increasing_id, row_number, trim

from geotweets.batch.readers import FileReader
from geotweets.core.errors import SourceUnavailableError
from geotweets.core.schema import (
    REFERENCE_COLUMNS,
    REFERENCE_OPTIONAL_COLUMNS,
    REFERENCE_SCHEMA,
    select_mapped,
)
from geotweets.observability import metrics
from geotweets.observability.logger import get_logger
from geotweets.utils.validation import validate_continent


logger = get_logger(__name__)

DEFAULT_REFERENCE_PATH = Path(__file__).resolve().parent.parent / "data" / "countrycode_reference.csv"

REQUIRED_VALUES = ("country_code", "country_name", "sub_region")


def clean_reference(entries: DataFrame, source: str = "<dataframe>") -> DataFrame:
    """
    Trim and validate reference entries.

    Rows with a null or blank country code, country name or sub-region are
    rejected: an enriched record must always carry a name and a sub-region.
    Duplicate codes keep their first occurrence, so each record matches at
    most one entry.

    Args:
        entries: DataFrame with the internal reference columns
        source: Source description for log lines

    Returns:
        Cleaned reference DataFrame, cached
    """
    trimmed = entries
    for name in REQUIRED_VALUES:
        trimmed = trimmed.withColumn(name, trim(col(name)))

    complete = trimmed.filter(
        reduce(and_, [col(name).isNotNull() & (col(name) != "") for name in REQUIRED_VALUES])
    )

    # First occurrence wins for duplicated codes
    first = Window.partitionBy("country_code").orderBy("_pos")
    deduped = (
        complete.withColumn("_pos", monotonically_increasing_id())
        .withColumn("_dup", row_number().over(first))
        .filter(col("_dup") == 1)
        .orderBy("_pos")
        .drop("_pos", "_dup")
        .cache()
    )

    total = trimmed.count()
    valid = complete.count()
    kept = deduped.count()

    rejected = total - valid
    if rejected:
        metrics.increment_counter(metrics.reference_rows_rejected_total, rejected)
        logger.warning(
            f"Rejected {rejected} reference row(s) without a country code, name or sub-region",
            extra={"source": source, "rejected": rejected},
        )
    if valid != kept:
        logger.warning(
            f"Dropped {valid - kept} duplicated country code(s) from reference",
            extra={"source": source},
        )

    logger.info(f"Loaded {kept} reference entries", extra={"source": source})
    return deduped


def load_reference(
    spark: SparkSession,
    source: str | Path,
    file_format: str = "csv",
    **read_options
) -> DataFrame:
    """
    Load the country reference table.

    Source columns iso2c, continent, country.name.en and region are required;
    country.name.en.regex is carried when present. Rows without a country
    code, name or sub-region are rejected and duplicate codes keep their
    first occurrence (see clean_reference).

    Args:
        spark: Active Spark session
        source: Path to the reference table
        file_format: csv, json or parquet
        **read_options: Passed to the file reader

    Returns:
        DataFrame with the internal reference columns, cached

    Raises:
        SourceUnavailableError: If the source is missing, unreadable or lacks
            a required column
    """
    reader = FileReader(spark)
    raw = reader.read(source, file_format=file_format, **read_options)
    entries = select_mapped(
        raw,
        REFERENCE_COLUMNS,
        REFERENCE_SCHEMA,
        source=str(source),
        optional=REFERENCE_OPTIONAL_COLUMNS,
    )

    try:
        return clean_reference(entries, source=str(source))
    except (AnalysisException, Py4JJavaError) as e:
        raise SourceUnavailableError(str(source), str(e)) from e


def load_default_reference(spark: SparkSession) -> DataFrame:
    """Load the reference table bundled with the package."""
    return load_reference(spark, DEFAULT_REFERENCE_PATH, file_format="csv")


def filter_by_continent(entries: DataFrame, continent: str) -> DataFrame:
    """
    Keep the reference entries of one continent.

    Matching is exact and case-sensitive ("africa" matches nothing).

    Args:
        entries: Reference DataFrame from load_reference
        continent: Continent name

    Returns:
        Filtered reference DataFrame
    """
    validate_continent(continent)
    return entries.filter(col("continent") == continent)


def reference_codes(entries: DataFrame) -> set[str]:
    """Collect the country-code key set of a reference DataFrame."""
    return {row["country_code"] for row in entries.select("country_code").collect()}
