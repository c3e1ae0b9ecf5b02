"""
Core data models for the map-data pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .aggregate_row import AggregateRow
from .bounding_box import BoundingBox
from .record import EnrichedRecord, Record
from .reference_entry import ReferenceEntry
from .sub_region_order import SubRegionOrder
from .tables import AggregateTable, PipelineResult

__all__ = [
    "ReferenceEntry",
    "Record",
    "EnrichedRecord",
    "AggregateRow",
    "SubRegionOrder",
    "BoundingBox",
    "AggregateTable",
    "PipelineResult",
]
