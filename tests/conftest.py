"""
Pytest configuration and fixtures for geotweets tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
import pytest
from typing import Callable, Generator
from pyspark.sql import DataFrame, SparkSession

from geotweets.core.schema import ENRICHED_SCHEMA, RECORD_SCHEMA, REFERENCE_SCHEMA


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run the full pipeline on a local Spark session"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the command line"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# SPARK FIXTURES
# =======================

@pytest.fixture(scope="session")
def spark_session() -> Generator[SparkSession, None, None]:
    """
    Create a Spark session for testing with local mode

    Yields:
        SparkSession configured for local testing
    """
    spark = (
        SparkSession.builder
        .appName("geotweets-test")
        .master("local[2]")
        .config("spark.sql.shuffle.partitions", "2")
        .config("spark.sql.adaptive.enabled", "true")
        .config("spark.driver.memory", "1g")
        .config("spark.ui.enabled", "false")  # Disable UI for tests
        .config("spark.sql.session.timeZone", "UTC")
        .getOrCreate()
    )

    # Set log level to WARN to reduce test output noise
    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


@pytest.fixture(scope="function")
def spark(spark_session) -> SparkSession:
    """
    Function-scoped Spark session that clears cached tables between tests
    """
    spark_session.catalog.clearCache()
    return spark_session


# =======================
# TABLE FIXTURES
# =======================

REFERENCE_ROWS = [
    ("KE", "Kenya", "Africa", "Eastern Africa", "kenya"),
    ("EG", "Egypt", "Africa", "Northern Africa", "egypt"),
    ("FR", "France", "Europe", "Western Europe", "france"),
]


def make_record(country_code, lang="en", lat=None, lon=None, author="user", text="hello"):
    """Tuple in RECORD_SCHEMA column order."""
    return (
        country_code,
        lang,
        None if lat is None else float(lat),
        None if lon is None else float(lon),
        author,
        text,
    )


@pytest.fixture(scope="session")
def record() -> Callable[..., tuple]:
    """Factory for record tuples in RECORD_SCHEMA column order"""
    return make_record


@pytest.fixture(scope="function")
def reference_df(spark) -> DataFrame:
    """KE, EG (Africa) and FR (Europe) reference entries"""
    return spark.createDataFrame(REFERENCE_ROWS, schema=REFERENCE_SCHEMA)


@pytest.fixture(scope="function")
def africa_reference_df(reference_df) -> DataFrame:
    return reference_df.filter(reference_df.continent == "Africa")


@pytest.fixture(scope="function")
def make_records(spark) -> Callable[[list], DataFrame]:
    """Build a records DataFrame from tuples made with record()"""
    def _make(rows: list) -> DataFrame:
        return spark.createDataFrame(rows, schema=RECORD_SCHEMA)
    return _make


@pytest.fixture(scope="function")
def make_enriched(spark) -> Callable[[list], DataFrame]:
    """Build an enriched DataFrame from record() tuples plus (country_name, sub_region)"""
    def _make(rows: list) -> DataFrame:
        return spark.createDataFrame(rows, schema=ENRICHED_SCHEMA)
    return _make


@pytest.fixture(scope="function")
def scenario_records(make_records) -> DataFrame:
    """KE, FR, EG, KE in that order"""
    return make_records([
        make_record("KE", "en", -1.28, 36.82, "nairobi", "first"),
        make_record("FR", "fr", 48.85, 2.35, "paris", "second"),
        make_record("EG", "ar", 30.04, 31.24, "cairo", "third"),
        make_record("KE", "sw", -4.04, 39.67, "mombasa", "fourth"),
    ])


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture(scope="session")
def reference_csv(test_data_dir) -> str:
    return os.path.join(test_data_dir, "reference.csv")


@pytest.fixture(scope="session")
def records_json(test_data_dir) -> str:
    return os.path.join(test_data_dir, "tweets_africa.json")
