"""
ReferenceEntry model: one row of the static country reference table.
"""

from pydantic import BaseModel, Field
from pyspark.sql import Row


class ReferenceEntry(BaseModel):
    """
    One country in the reference table (immutable once loaded).

    Attributes:
        country_code: ISO 3166-1 alpha-2 code, unique key
        country_name: English display name
        continent: Continent name, matched exactly when filtering
        sub_region: Sub-region name (categorical)
        country_name_regex: Name pattern used for geometry lookup only
    """

    country_code: str = Field(..., pattern=r"^[A-Z]{2}$")
    country_name: str = Field(..., min_length=1)
    continent: str = Field(..., min_length=1)
    sub_region: str = Field(..., min_length=1)
    country_name_regex: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "country_code": "KE",
                "country_name": "Kenya",
                "continent": "Africa",
                "sub_region": "Eastern Africa",
                "country_name_regex": "kenya",
            }
        }

    def to_row(self) -> Row:
        return Row(**self.model_dump())

    @classmethod
    def from_row(cls, row: Row) -> "ReferenceEntry":
        return cls(**{k: v for k, v in row.asDict().items() if k in cls.model_fields})
