"""
Generic file reader for multiple formats (CSV, JSON, Parquet).
"""

from pathlib import Path
from urllib.parse import urlparse

from pyspark.errors import AnalysisException
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import StructType

from geotweets.core.errors import SourceUnavailableError
from geotweets.observability.logger import get_logger

from .csv_reader import CSVReader


logger = get_logger(__name__)

SUPPORTED_FORMATS = ("csv", "json", "parquet")


class FileReader:
    """
    Generic file reader supporting multiple formats.

    Any failure to open a source surfaces as SourceUnavailableError; there is
    no fallback data.
    """

    def __init__(self, spark: SparkSession):
        self.spark = spark
        self.csv_reader = CSVReader(spark)

    def read(
        self,
        file_path: str | Path,
        file_format: str = "csv",
        schema: StructType | None = None,
        **options
    ) -> DataFrame:
        """
        Read file into Spark DataFrame.

        Args:
            file_path: Path or URI of the file
            file_format: Format (csv, json, parquet)
            schema: Optional explicit schema
            **options: Format-specific options

        Returns:
            Spark DataFrame

        Raises:
            ValueError: If file format is unsupported
            SourceUnavailableError: If the file is missing or unreadable
        """
        file_format = file_format.lower()
        if file_format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported file format: {file_format}")

        file_path = str(file_path)
        local_path = self._local_path(file_path)
        if local_path is not None and not local_path.exists():
            raise SourceUnavailableError(file_path, "file not found")

        logger.debug(f"Reading {file_format} source {file_path}")
        try:
            if file_format == "csv":
                return self.csv_reader.read(file_path, schema=schema, **options)
            reader = self.spark.read.options(**options)
            if schema is not None:
                reader = reader.schema(schema)
            return reader.format(file_format).load(file_path)
        except AnalysisException as e:
            raise SourceUnavailableError(file_path, str(e)) from e

    @staticmethod
    def _local_path(file_path: str) -> Path | None:
        """Filesystem path for local sources, None for remote URIs."""
        parsed = urlparse(file_path)
        if parsed.scheme == "file":
            return Path(parsed.path)
        # Single letters are Windows drive prefixes
        if parsed.scheme == "" or len(parsed.scheme) == 1:
            return Path(file_path)
        return None
