"""
Prometheus metrics for geotweets

Counts what each pipeline stage keeps and drops so a run can be compared
against the collected volume. Metrics live in a private registry; nothing
is exported unless generate_metrics() is called.
"""
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CollectorRegistry,
    generate_latest,
)


REGISTRY = CollectorRegistry()


# =======================
# PIPELINE METRICS
# =======================

records_read_total = Counter(
    name="geotweets_records_read_total",
    documentation="Total number of collected records read",
    labelnames=["continent"],
    registry=REGISTRY,
)

records_enriched_total = Counter(
    name="geotweets_records_enriched_total",
    documentation="Total number of records kept and enriched with reference attributes",
    labelnames=["continent"],
    registry=REGISTRY,
)

records_dropped_total = Counter(
    name="geotweets_records_dropped_total",
    documentation="Total number of records outside the reference country set",
    labelnames=["continent"],
    registry=REGISTRY,
)

aggregate_groups = Gauge(
    name="geotweets_aggregate_groups",
    documentation="Number of (country, sub-region) groups in the last aggregate",
    labelnames=["continent"],
    registry=REGISTRY,
)

sample_size = Gauge(
    name="geotweets_sample_size",
    documentation="Number of records in the last point sample",
    labelnames=["continent"],
    registry=REGISTRY,
)

stage_duration_seconds = Histogram(
    name="geotweets_stage_duration_seconds",
    documentation="Time spent in each pipeline stage in seconds",
    labelnames=["stage"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

pipeline_runs_total = Counter(
    name="geotweets_pipeline_runs_total",
    documentation="Total number of pipeline runs",
    labelnames=["continent", "status"],  # status: success, failure
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

unmapped_sub_regions_total = Counter(
    name="geotweets_unmapped_sub_regions_total",
    documentation="Aggregate rows whose sub-region is outside the configured order",
    labelnames=["sub_region"],
    registry=REGISTRY,
)

reference_rows_rejected_total = Counter(
    name="geotweets_reference_rows_rejected_total",
    documentation="Reference rows rejected for a missing country code, name or sub-region",
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


class track_duration:
    """
    Context manager for tracking stage duration

    Usage:
        with track_duration("aggregate"):
            table = aggregate(enriched)
    """

    def __init__(self, stage: str):
        self.stage = stage
        self.timer = None

    def __enter__(self):
        self.timer = stage_duration_seconds.labels(stage=self.stage).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    gauge.labels(**labels).set(value)


def record_pipeline_run(
    continent: str,
    total_records: int,
    enriched_records: int,
    group_count: int,
    sampled_records: int,
) -> None:
    """
    Record the counters of a completed pipeline run.

    Args:
        continent: Continent the reference table was filtered to
        total_records: Records read from the collector output
        enriched_records: Records kept after the reference join
        group_count: Aggregate rows produced
        sampled_records: Records in the point sample
    """
    increment_counter(records_read_total, total_records, continent=continent)
    increment_counter(records_enriched_total, enriched_records, continent=continent)
    increment_counter(records_dropped_total, total_records - enriched_records, continent=continent)
    set_gauge(aggregate_groups, group_count, continent=continent)
    set_gauge(sample_size, sampled_records, continent=continent)
    increment_counter(pipeline_runs_total, 1, continent=continent, status="success")


def record_pipeline_failure(continent: str) -> None:
    increment_counter(pipeline_runs_total, 1, continent=continent, status="failure")


def record_unmapped_sub_regions(values: list[str]) -> None:
    """
    Record sub-region values found outside the configured order.

    Args:
        values: Offending sub-region names, one entry per aggregate row
    """
    for value in values:
        increment_counter(unmapped_sub_regions_total, 1, sub_region=str(value))
