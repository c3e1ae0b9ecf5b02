"""
BoundingBox model: a rectangular longitude/latitude extent.
"""

from pydantic import BaseModel, Field, model_validator


class BoundingBox(BaseModel):
    """
    Rectangular geographic extent, given as (min_lon, min_lat, max_lon, max_lat).

    Describes the collector's capture extent and zoom windows over the
    point layer.
    """

    min_lon: float = Field(..., ge=-180.0, le=180.0)
    min_lat: float = Field(..., ge=-90.0, le=90.0)
    max_lon: float = Field(..., ge=-180.0, le=180.0)
    max_lat: float = Field(..., ge=-90.0, le=90.0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_corners(self):
        if self.min_lon > self.max_lon:
            raise ValueError(f"min_lon ({self.min_lon}) must not exceed max_lon ({self.max_lon})")
        if self.min_lat > self.max_lat:
            raise ValueError(f"min_lat ({self.min_lat}) must not exceed max_lat ({self.max_lat})")
        return self

    @classmethod
    def from_list(cls, values: list[float]) -> "BoundingBox":
        """Build from the [min_lon, min_lat, max_lon, max_lat] list form."""
        if len(values) != 4:
            raise ValueError(f"Bounding box needs 4 values, got {len(values)}")
        min_lon, min_lat, max_lon, max_lat = values
        return cls(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)

    def to_list(self) -> list[float]:
        return [self.min_lon, self.min_lat, self.max_lon, self.max_lat]

    def contains(self, latitude: float | None, longitude: float | None) -> bool:
        if latitude is None or longitude is None:
            return False
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )
