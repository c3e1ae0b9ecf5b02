"""
Pipeline configuration management.

Loads the pipeline settings from a YAML file and validates them into a
PipelineConfig.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from geotweets.core.models import BoundingBox, SubRegionOrder


DEFAULT_CONTINENT = "Africa"

DEFAULT_SUB_REGION_ORDER = (
    "Western Africa",
    "Northern Africa",
    "Middle Africa",
    "Eastern Africa",
    "Southern Africa",
)

DEFAULT_COUNTRY_NAME_REWRITES = {
    "Democratic Republic of the Congo": "DRC",
    "United Republic of Tanzania": "Tanzania",
    "Saint Helena, Ascension and Tristan da Cunha": "St. Helena",
    "Gambia (Islamic Republic of the)": "Gambia",
}

DEFAULT_SAMPLE_SIZE = 1000
DEFAULT_SEED = 20171029

# [min_lon, min_lat, max_lon, max_lat]
AFRICA_BBOX = [-25.4, -47.1, 63.8, 37.5]
SOUTH_AFRICA_BBOX = [16.33, -35.77, 36.54, -22.12]


class PipelineConfig(BaseModel):
    """
    Settings for one map-data pipeline run.

    Attributes:
        continent: Continent the reference table is filtered to
        sub_region_order: Sub-region rank order, highest priority first
        country_name_rewrites: Display-name rewrites applied to aggregates
        sample_size: Records drawn for the point layer
        seed: Seed for the point sample
        strict_sub_regions: Raise instead of warn on unknown sub-regions
        collection_bbox: Extent the collector captured
        zoom_bboxes: Named zoom windows over the point layer
        records_format: File format of the collected records
        reference_format: File format of the reference table
    """

    continent: str = Field(DEFAULT_CONTINENT, min_length=1)
    sub_region_order: SubRegionOrder = Field(
        default_factory=lambda: SubRegionOrder(regions=DEFAULT_SUB_REGION_ORDER)
    )
    country_name_rewrites: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_COUNTRY_NAME_REWRITES)
    )
    sample_size: int = Field(DEFAULT_SAMPLE_SIZE, ge=0)
    seed: int = DEFAULT_SEED
    strict_sub_regions: bool = False
    collection_bbox: BoundingBox = Field(
        default_factory=lambda: BoundingBox.from_list(AFRICA_BBOX)
    )
    zoom_bboxes: dict[str, BoundingBox] = Field(
        default_factory=lambda: {"south_africa": BoundingBox.from_list(SOUTH_AFRICA_BBOX)}
    )
    records_format: Literal["csv", "json", "parquet"] = "parquet"
    reference_format: Literal["csv", "json", "parquet"] = "csv"

    @field_validator("sub_region_order", mode="before")
    @classmethod
    def parse_order(cls, v):
        if isinstance(v, (list, tuple)):
            return SubRegionOrder(regions=tuple(v))
        return v

    @field_validator("collection_bbox", mode="before")
    @classmethod
    def parse_bbox(cls, v):
        if isinstance(v, (list, tuple)):
            return BoundingBox.from_list(list(v))
        return v

    @field_validator("zoom_bboxes", mode="before")
    @classmethod
    def parse_zoom_bboxes(cls, v):
        if isinstance(v, dict):
            return {
                name: BoundingBox.from_list(list(box)) if isinstance(box, (list, tuple)) else box
                for name, box in v.items()
            }
        return v

    @field_validator("country_name_rewrites")
    @classmethod
    def check_rewrites_idempotent(cls, v):
        """A display name must not itself be rewritten again."""
        chained = sorted(target for target in v.values() if target in v and v[target] != target)
        if chained:
            raise ValueError(f"Rewrite targets are themselves rewritten: {chained}")
        return v


class PipelineConfigLoader:
    """
    Loads the pipeline configuration from a YAML file.

    Expected YAML format:
    ```yaml
    pipeline:
      continent: Africa
      sub_region_order:
        - Western Africa
        - Northern Africa
        - Middle Africa
        - Eastern Africa
        - Southern Africa
      country_name_rewrites:
        Democratic Republic of the Congo: DRC
      sample_size: 1000
      seed: 20171029
      collection_bbox: [-25.4, -47.1, 63.8, 37.5]
      zoom_bboxes:
        south_africa: [16.33, -35.77, 36.54, -22.12]
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Pipeline configuration file not found: {config_path}")

    def load_raw(self) -> dict[str, Any]:
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not config or "pipeline" not in config:
            raise ValueError("Configuration file must contain 'pipeline' section")

        section = config["pipeline"]
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError("'pipeline' section must be a mapping")
        return section

    def load(self, **overrides) -> PipelineConfig:
        """
        Load and validate the configuration.

        Args:
            **overrides: Values that replace the file's settings (None is ignored)

        Returns:
            Validated PipelineConfig

        Raises:
            ValueError: If the file has no 'pipeline' section
            pydantic.ValidationError: If a setting is invalid
        """
        raw = self.load_raw()
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return PipelineConfig.model_validate(raw)
