"""
AggregateRow model: record count for one observed country group.
"""

from pydantic import BaseModel, Field
from pyspark.sql import Row


class AggregateRow(BaseModel):
    """
    Number of enriched records for one (country_code, country_name, sub_region).

    Only groups present in the data have a row; countries with no records
    are absent rather than listed with a zero count.
    """

    country_code: str = Field(..., pattern=r"^[A-Z]{2}$")
    country_name: str = Field(..., min_length=1)
    sub_region: str = Field(..., min_length=1)
    count: int = Field(..., ge=0)

    class Config:
        frozen = True

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.country_code, self.country_name, self.sub_region)

    def to_row(self) -> Row:
        return Row(**self.model_dump())

    @classmethod
    def from_row(cls, row: Row) -> "AggregateRow":
        return cls(**{k: v for k, v in row.asDict().items() if k in cls.model_fields})
