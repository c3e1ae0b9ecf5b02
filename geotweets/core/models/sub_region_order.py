"""
SubRegionOrder model: the explicit rank order of sub-region categories.
"""

from pydantic import BaseModel, Field, field_validator


class SubRegionOrder(BaseModel):
    """
    Ordered, duplicate-free sub-region domain.

    Passed alongside aggregate tables so sort order never depends on
    module-level state.

    Attributes:
        regions: Sub-region names, highest priority first
    """

    regions: tuple[str, ...] = Field(..., min_length=1)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "regions": [
                    "Western Africa",
                    "Northern Africa",
                    "Middle Africa",
                    "Eastern Africa",
                    "Southern Africa",
                ]
            }
        }

    @field_validator("regions")
    @classmethod
    def check_unique(cls, v):
        if len(set(v)) != len(v):
            raise ValueError(f"Sub-region order contains duplicates: {list(v)}")
        if any(not name.strip() for name in v):
            raise ValueError("Sub-region names must be non-empty")
        return v

    def __contains__(self, name: object) -> bool:
        return name in self.regions

    def contains(self, name: str) -> bool:
        return name in self.regions

    def rank(self, name: str) -> int | None:
        """Zero-based rank of a sub-region, or None when it is outside the domain."""
        try:
            return self.regions.index(name)
        except ValueError:
            return None

    def unmapped(self, names) -> list[str]:
        """Return the distinct names not in the domain, sorted."""
        return sorted({n for n in names if n not in self.regions}, key=str)
