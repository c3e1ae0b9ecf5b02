"""
Spark batch stages of the map-data pipeline.
"""

from .aggregate import aggregate, normalize_and_order, normalize_country_name, order_for_display
from .enrich import filter_and_enrich, load_records
from .map_inputs import choropleth_table, language_palette, point_layer, points_within
from .pipeline import MapDataPipeline
from .reference import clean_reference, filter_by_continent, load_default_reference, load_reference
from .sample import sample

__all__ = [
    "MapDataPipeline",
    "load_reference",
    "clean_reference",
    "load_default_reference",
    "filter_by_continent",
    "load_records",
    "filter_and_enrich",
    "aggregate",
    "normalize_and_order",
    "normalize_country_name",
    "order_for_display",
    "sample",
    "choropleth_table",
    "point_layer",
    "language_palette",
    "points_within",
]
