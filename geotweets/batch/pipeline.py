"""
Map-data pipeline orchestration.

Coordinates the flow: load reference → filter continent → load records →
filter & enrich → aggregate → sample → map inputs
"""

from pathlib import Path

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import col

from geotweets.batch.aggregate import aggregate, normalize_and_order
from geotweets.batch.enrich import filter_and_enrich, load_records
from geotweets.batch.map_inputs import choropleth_table, language_palette, point_layer, points_within
from geotweets.batch.reference import (
    clean_reference,
    filter_by_continent,
    load_default_reference,
    load_reference,
)
from geotweets.batch.sample import sample
from geotweets.core.config import PipelineConfig
from geotweets.core.models import PipelineResult
from geotweets.observability import metrics
from geotweets.observability.logger import get_logger, log_operation


logger = get_logger(__name__)


class MapDataPipeline:
    """
    Builds the tables behind the static and interactive maps.

    Flow:
    1. Load the country reference table and keep one continent
    2. Load collected records
    3. Keep records from reference countries and attach name and sub-region
    4. Count records per country, normalize names, rank sub-regions
    5. Draw the seeded point sample
    6. Shape choropleth table, point layer and language palette

    A failure in steps 1-3 aborts the run; there is no partial output.
    """

    def __init__(self, spark: SparkSession, config: PipelineConfig | None = None):
        """
        Initialize the pipeline.

        Args:
            spark: Active Spark session
            config: Pipeline settings (defaults to PipelineConfig())
        """
        self.spark = spark
        self.config = config or PipelineConfig()

    def load_reference(self, reference_source: str | Path | None = None) -> DataFrame:
        """Load the reference table and filter it to the configured continent."""
        if reference_source is None:
            entries = load_default_reference(self.spark)
        else:
            entries = load_reference(
                self.spark, reference_source, file_format=self.config.reference_format
            )
        return filter_by_continent(entries, self.config.continent).cache()

    def run(
        self,
        records_source: str | Path | DataFrame,
        reference_source: str | Path | DataFrame | None = None,
    ) -> PipelineResult:
        """
        Run the pipeline end to end.

        Args:
            records_source: Path to the collected records, or a DataFrame
                with the internal record columns
            reference_source: Path to the reference table, a reference
                DataFrame, or None for the bundled table

        Returns:
            PipelineResult with counts and in-memory tables

        Raises:
            SourceUnavailableError: If either input cannot be loaded
            UnmappedCategoryError: If strict_sub_regions and the aggregate
                has an unknown sub-region
        """
        continent = self.config.continent
        logger.info(f"Starting map-data pipeline for {continent}")

        try:
            result = self._run(records_source, reference_source)
        except Exception:
            metrics.record_pipeline_failure(continent)
            raise

        metrics.record_pipeline_run(
            continent=continent,
            total_records=result.total_records,
            enriched_records=result.enriched_records,
            group_count=result.group_count,
            sampled_records=result.sample_size,
        )
        logger.info("Map-data pipeline complete", extra=result.summary())
        return result

    def _run(self, records_source, reference_source) -> PipelineResult:
        config = self.config

        with log_operation("Loading reference", logger=logger), metrics.track_duration("reference"):
            if isinstance(reference_source, DataFrame):
                reference = filter_by_continent(
                    clean_reference(reference_source), config.continent
                ).cache()
            else:
                reference = self.load_reference(reference_source)
            reference_count = reference.count()
        if reference_count == 0:
            logger.warning(f"No reference entries for continent {config.continent!r}")

        with log_operation("Loading records", logger=logger), metrics.track_duration("records"):
            if isinstance(records_source, DataFrame):
                records = records_source
            else:
                records = load_records(self.spark, records_source, file_format=config.records_format)
            total_records = records.count()
        logger.info(f"Read {total_records} records")

        with log_operation("Filtering and enriching", logger=logger), metrics.track_duration("enrich"):
            enriched = filter_and_enrich(records, reference).cache()
            enriched_records = enriched.count()
        logger.info(
            f"Kept {enriched_records} of {total_records} records from {config.continent}",
            extra={"dropped": total_records - enriched_records},
        )

        located = enriched.filter(col("latitude").isNotNull() & col("longitude").isNotNull()).count()
        outside_collection_box = located - points_within(enriched, config.collection_bbox).count()
        if outside_collection_box:
            logger.warning(
                f"{outside_collection_box} enriched record(s) lie outside the collection box",
                extra={"collection_bbox": config.collection_bbox.to_list()},
            )

        with log_operation("Aggregating", logger=logger), metrics.track_duration("aggregate"):
            table = normalize_and_order(
                aggregate(enriched),
                order=config.sub_region_order,
                rewrites=config.country_name_rewrites,
                strict=config.strict_sub_regions,
            )
            table.rows.cache()
            group_count = table.rows.count()

        with log_operation("Sampling", logger=logger, n=config.sample_size, seed=config.seed), \
                metrics.track_duration("sample"):
            sampled = sample(enriched, config.sample_size, config.seed).cache()
            sample_size = sampled.count()

        return PipelineResult(
            continent=config.continent,
            total_records=total_records,
            enriched_records=enriched_records,
            dropped_records=total_records - enriched_records,
            group_count=group_count,
            sample_size=sample_size,
            outside_collection_box=outside_collection_box,
            enriched=enriched,
            aggregate=table,
            choropleth=choropleth_table(table),
            points=point_layer(sampled),
            palette=language_palette(enriched),
        )
