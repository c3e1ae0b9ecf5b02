"""
Exceptions raised by the map-data pipeline.

A record whose country code has no reference match is not an error: it is
dropped by the enrichment join.
"""

from typing import Iterable


class GeotweetsError(Exception):
    """Base class for pipeline errors."""


class SourceUnavailableError(GeotweetsError):
    """Raised when an input table cannot be loaded. Fatal for the run."""

    def __init__(self, source: str, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Source unavailable: {self.source}: {reason}")


class UnmappedCategoryError(GeotweetsError):
    """Raised when aggregate rows carry a sub-region outside the fixed order."""

    def __init__(self, values: Iterable[str], domain: Iterable[str]):
        self.values = sorted({str(v) for v in values})
        self.domain = list(domain)
        super().__init__(
            f"Sub-region(s) {self.values} not in the configured order {self.domain}"
        )


class InvalidSampleSizeError(GeotweetsError, ValueError):
    """Raised when a negative sample size is requested."""

    def __init__(self, n):
        self.n = n
        super().__init__(f"Sample size must be a non-negative integer, got {n!r}")
