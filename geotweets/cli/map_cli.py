"""
Command-line interface for preparing map data.

Usage:
    python -m geotweets.cli.map_cli prepare --records <path> [options]
"""

import argparse
import json
import sys
from pathlib import Path
from pyspark.sql import SparkSession

from geotweets.batch.aggregate import order_for_display
from geotweets.batch.map_inputs import points_within
from geotweets.batch.pipeline import MapDataPipeline
from geotweets.core.config import PipelineConfig, PipelineConfigLoader
from geotweets.observability.logger import get_logger


logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config/pipeline.yaml"


def create_spark_session(app_name: str = "GeotweetsMapData") -> SparkSession:
    """
    Create a local Spark session.

    Args:
        app_name: Application name

    Returns:
        SparkSession
    """
    spark = SparkSession.builder \
        .appName(app_name) \
        .master("local[*]") \
        .config("spark.sql.adaptive.enabled", "true") \
        .config("spark.sql.adaptive.coalescePartitions.enabled", "true") \
        .config("spark.ui.enabled", "false") \
        .getOrCreate()

    return spark


def load_config(args) -> PipelineConfig:
    """Build the pipeline config from the YAML file and command-line overrides."""
    overrides = {
        "sample_size": args.sample_size,
        "seed": args.seed,
        "continent": args.continent,
        "records_format": args.format,
        "reference_format": args.reference_format,
    }
    config_path = Path(args.config)
    if config_path.exists():
        return PipelineConfigLoader(config_path).load(**overrides)

    if args.config != DEFAULT_CONFIG_PATH:
        raise FileNotFoundError(f"Pipeline configuration file not found: {args.config}")

    logger.info("No configuration file, using defaults")
    return PipelineConfig.model_validate({k: v for k, v in overrides.items() if v is not None})


def prepare_command(args) -> int:
    """
    Execute the prepare command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    logger.info(f"Preparing map data from {args.records}")

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.zoom and args.zoom not in config.zoom_bboxes:
        logger.error(f"Unknown zoom window {args.zoom!r}; configured: {sorted(config.zoom_bboxes)}")
        return 1

    spark = create_spark_session()
    try:
        pipeline = MapDataPipeline(spark, config)
        result = pipeline.run(args.records, reference_source=args.reference)

        logger.info("=" * 60)
        logger.info("MAP DATA READY")
        logger.info("=" * 60)
        logger.info(f"Records read: {result.total_records}")
        logger.info(f"Records in {result.continent}: {result.enriched_records}")
        logger.info(f"Records dropped: {result.dropped_records}")
        logger.info(f"Countries with records: {result.group_count}")
        logger.info(f"Point sample size: {result.sample_size}")
        if result.outside_collection_box:
            logger.warning(f"Records outside the collection box: {result.outside_collection_box}")
        logger.info(f"Language colours: {json.dumps(result.palette, ensure_ascii=False)}")
        if result.aggregate.unmapped_sub_regions:
            logger.warning(f"Unmapped sub-regions: {result.aggregate.unmapped_sub_regions}")
        logger.info("=" * 60)

        if args.show:
            order_for_display(result.aggregate).show(n=max(result.group_count, 1), truncate=False)

        if args.zoom:
            zoomed = points_within(result.points, config.zoom_bboxes[args.zoom]).cache()
            logger.info(f"Sampled points in {args.zoom}: {zoomed.count()}")
            if args.show:
                zoomed.show(truncate=False)

    except Exception as e:
        logger.error(f"Error preparing map data: {e}", exc_info=True)
        return 1
    finally:
        spark.stop()

    return 0


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Prepare geotagged post data for choropleth and point maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use the bundled country reference table
  python -m geotweets.cli.map_cli prepare --records data/tweets_africa.parquet

  # Custom reference table and a smaller point sample
  python -m geotweets.cli.map_cli prepare --records data/tweets_africa.parquet \\
      --reference data/countrycode.csv --sample-size 200 --seed 42

  # Records exported as JSON lines, print the per-country counts
  python -m geotweets.cli.map_cli prepare --records data/tweets.json --format json --show

  # Only the sampled points inside the South Africa window
  python -m geotweets.cli.map_cli prepare --records data/tweets_africa.parquet --zoom south_africa --show
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    prepare_parser = subparsers.add_parser("prepare", help="Build the map tables in memory")
    prepare_parser.add_argument(
        "--records",
        required=True,
        help="Path to the collected records"
    )
    prepare_parser.add_argument(
        "--reference",
        default=None,
        help="Path to the country reference table (default: bundled table)"
    )
    prepare_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to pipeline configuration YAML (default: {DEFAULT_CONFIG_PATH})"
    )
    prepare_parser.add_argument(
        "--format",
        default=None,
        choices=["csv", "json", "parquet"],
        help="Records file format (default: from config, parquet)"
    )
    prepare_parser.add_argument(
        "--reference-format",
        default=None,
        choices=["csv", "json", "parquet"],
        help="Reference file format (default: from config, csv)"
    )
    prepare_parser.add_argument(
        "--continent",
        default=None,
        help="Continent to keep (default: from config, Africa)"
    )
    prepare_parser.add_argument(
        "--sample-size",
        type=int,
        default=None,
        help="Number of points to sample (default: from config, 1000)"
    )
    prepare_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Sampling seed (default: from config)"
    )
    prepare_parser.add_argument(
        "--zoom",
        default=None,
        help="Zoom window from the config (e.g. south_africa) to cut the point sample to"
    )
    prepare_parser.add_argument(
        "--show",
        action="store_true",
        help="Print the per-country counts in display order"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "prepare":
        sys.exit(prepare_command(args))


if __name__ == "__main__":
    main()
