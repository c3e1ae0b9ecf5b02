"""
Record and EnrichedRecord models: one collected post, before and after the
reference join.
"""

from pydantic import BaseModel, Field
from pyspark.sql import Row


class Record(BaseModel):
    """
    A collected social-media post (read-only inside the pipeline).

    Coordinates come from the post's place and may be missing when the place
    granularity is coarser than a point.

    Attributes:
        country_code: ISO-2 code of the post's place, None if unresolved
        language_tag: Language tag assigned by the platform
        latitude: Place latitude
        longitude: Place longitude
        author_handle: Screen name of the author
        text: Post text
    """

    country_code: str | None = None
    language_tag: str | None = None
    latitude: float | None = Field(None, ge=-90.0, le=90.0)
    longitude: float | None = Field(None, ge=-180.0, le=180.0)
    author_handle: str | None = None
    text: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "country_code": "KE",
                "language_tag": "en",
                "latitude": -1.28,
                "longitude": 36.82,
                "author_handle": "nairobi_dev",
                "text": "Traffic on Mombasa Road again",
            }
        }

    @property
    def has_point(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_row(self) -> Row:
        return Row(**self.model_dump())

    @classmethod
    def from_row(cls, row: Row) -> "Record":
        return cls(**{k: v for k, v in row.asDict().items() if k in cls.model_fields})


class EnrichedRecord(Record):
    """
    A Record joined with its reference country.

    Every enriched record has a country code present in the filtered
    reference set, so name and sub-region are never null.
    """

    country_code: str = Field(..., pattern=r"^[A-Z]{2}$")
    country_name: str = Field(..., min_length=1)
    sub_region: str = Field(..., min_length=1)

    @property
    def popup(self) -> str:
        return f"{self.author_handle}: {self.text}"
