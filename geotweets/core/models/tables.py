"""
Table containers returned by the aggregation stage and the pipeline.
"""

from pydantic import BaseModel, Field
from pyspark.sql import DataFrame

from .sub_region_order import SubRegionOrder


class AggregateTable(BaseModel):
    """
    Aggregate rows paired with the sub-region order they are ranked by.

    Attributes:
        rows: DataFrame of country_code, country_name, sub_region, count,
            sub_region_rank
        order: Sub-region order used to compute sub_region_rank
        unmapped_sub_regions: Sub-regions seen in rows but outside order
    """

    rows: DataFrame
    order: SubRegionOrder
    unmapped_sub_regions: list[str] = Field(default_factory=list)

    class Config:
        arbitrary_types_allowed = True


class PipelineResult(BaseModel):
    """
    Outcome of one pipeline run (in-memory only).

    Attributes:
        continent: Continent the reference table was filtered to
        total_records: Records read from the collector output
        enriched_records: Records kept by the reference join
        dropped_records: Records outside the reference country set
        group_count: Aggregate rows
        sample_size: Records in the point sample
        outside_collection_box: Enriched records with coordinates outside
            the configured collection box
        enriched: Enriched records
        aggregate: Normalized, ranked aggregate
        choropleth: Aggregate keyed by display name for the static map
        points: Point layer for the interactive map
        palette: Colour per language tag
    """

    continent: str
    total_records: int = Field(..., ge=0)
    enriched_records: int = Field(..., ge=0)
    dropped_records: int = Field(..., ge=0)
    group_count: int = Field(..., ge=0)
    sample_size: int = Field(..., ge=0)
    outside_collection_box: int = Field(0, ge=0)
    enriched: DataFrame
    aggregate: AggregateTable
    choropleth: DataFrame
    points: DataFrame
    palette: dict[str, str] = Field(default_factory=dict)

    class Config:
        arbitrary_types_allowed = True

    def summary(self) -> dict[str, object]:
        return {
            "continent": self.continent,
            "total_records": self.total_records,
            "enriched_records": self.enriched_records,
            "dropped_records": self.dropped_records,
            "group_count": self.group_count,
            "sample_size": self.sample_size,
            "outside_collection_box": self.outside_collection_box,
            "languages": len(self.palette),
        }
