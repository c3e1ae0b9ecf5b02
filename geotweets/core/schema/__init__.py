"""
Column contracts and projections for the input tables.
"""

from .columns import (
    ENRICHED_SCHEMA,
    RECORD_COLUMNS,
    RECORD_SCHEMA,
    REFERENCE_COLUMNS,
    REFERENCE_OPTIONAL_COLUMNS,
    REFERENCE_SCHEMA,
    missing_columns,
    select_mapped,
)

__all__ = [
    "REFERENCE_COLUMNS",
    "REFERENCE_OPTIONAL_COLUMNS",
    "REFERENCE_SCHEMA",
    "RECORD_COLUMNS",
    "RECORD_SCHEMA",
    "ENRICHED_SCHEMA",
    "missing_columns",
    "select_mapped",
]
