"""
Sampler: a fixed-size, seeded subsample of enriched records for the point map.
"""

from pyspark.sql import DataFrame
from pyspark.sql.functions import col, lit, xxhash64

from geotweets.core.config import DEFAULT_SAMPLE_SIZE, DEFAULT_SEED
from geotweets.utils.validation import validate_sample_size, validate_seed


SAMPLE_KEY = "_sample_key"


def sample(enriched: DataFrame, n: int = DEFAULT_SAMPLE_SIZE, seed: int = DEFAULT_SEED) -> DataFrame:
    """
    Draw min(n, len(enriched)) records uniformly without replacement.

    Each row gets a pseudo-random key hashed from the seed and its own
    content; the n smallest keys win. The result depends only on the rows,
    n and seed, never on partitioning or row order. Identical duplicate rows
    share a key and are tie-broken by their columns.

    Records without point coordinates stay in the candidate pool.

    Args:
        enriched: Enriched records
        n: Sample size (non-negative)
        seed: Integer seed

    Returns:
        DataFrame with the input columns; row order is unspecified

    Raises:
        InvalidSampleSizeError: If n is negative
    """
    validate_sample_size(n)
    validate_seed(seed)

    if n == 0:
        return enriched.limit(0)

    columns = enriched.columns
    keyed = enriched.withColumn(SAMPLE_KEY, xxhash64(lit(seed), *[col(c) for c in columns]))
    return (
        keyed.orderBy(col(SAMPLE_KEY), *[col(c).asc_nulls_first() for c in columns])
        .limit(n)
        .drop(SAMPLE_KEY)
    )
