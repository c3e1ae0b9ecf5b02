"""
CSV reader for the country reference table and CSV record exports.
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import StructType


# Every column is read as a string unless a schema is given: country codes
# such as "NA" (Namibia) must not turn into nulls or numbers.
CSV_OPTIONS = {
    "header": "true",
    "encoding": "UTF-8",
    "multiLine": "true",
    "quote": "\"",
    "escape": "\"",
    "nullValue": "",
    "mode": "FAILFAST",
}


class CSVReader:
    """Reads quoted, header-first CSV files with Spark."""

    def __init__(self, spark: SparkSession):
        self.spark = spark

    def read(self, file_path: str, schema: StructType | None = None, **options) -> DataFrame:
        """
        Read a CSV file.

        Args:
            file_path: Path to the CSV file
            schema: Optional explicit schema
            **options: Spark CSV options overriding CSV_OPTIONS
                (e.g. delimiter=";")

        Returns:
            Spark DataFrame
        """
        reader = self.spark.read.options(**{**CSV_OPTIONS, **options})
        if schema is not None:
            reader = reader.schema(schema)
        return reader.csv(str(file_path))
