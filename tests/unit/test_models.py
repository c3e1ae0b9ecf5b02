"""
Unit tests for Pydantic data models.

Tests all core models for validation and constraint enforcement.
"""

import pytest
from pydantic import ValidationError

from geotweets.core.models import (
    AggregateRow,
    BoundingBox,
    EnrichedRecord,
    Record,
    ReferenceEntry,
    SubRegionOrder,
)


class TestReferenceEntry:
    """Tests for ReferenceEntry model"""

    def test_valid_reference_entry(self):
        entry = ReferenceEntry(
            country_code="KE",
            country_name="Kenya",
            continent="Africa",
            sub_region="Eastern Africa",
        )
        assert entry.country_code == "KE"
        assert entry.country_name_regex is None

    def test_lowercase_code_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ReferenceEntry(
                country_code="ke",
                country_name="Kenya",
                continent="Africa",
                sub_region="Eastern Africa",
            )
        assert "country_code" in str(exc_info.value)

    def test_entry_is_immutable(self):
        entry = ReferenceEntry(
            country_code="EG",
            country_name="Egypt",
            continent="Africa",
            sub_region="Northern Africa",
        )
        with pytest.raises(ValidationError):
            entry.country_name = "Misr"

    def test_row_round_trip(self):
        entry = ReferenceEntry(
            country_code="EG",
            country_name="Egypt",
            continent="Africa",
            sub_region="Northern Africa",
            country_name_regex="egypt",
        )
        assert ReferenceEntry.from_row(entry.to_row()) == entry


class TestRecord:
    """Tests for Record and EnrichedRecord models"""

    def test_record_allows_missing_place(self):
        record = Record(country_code=None, language_tag="und", author_handle="x", text="y")
        assert record.country_code is None
        assert record.has_point is False

    def test_record_with_point(self):
        record = Record(country_code="KE", latitude=-1.28, longitude=36.82)
        assert record.has_point is True

    def test_latitude_out_of_range(self):
        with pytest.raises(ValidationError) as exc_info:
            Record(country_code="KE", latitude=123.0, longitude=36.82)
        assert "latitude" in str(exc_info.value)

    def test_enriched_record_requires_reference_attributes(self):
        with pytest.raises(ValidationError) as exc_info:
            EnrichedRecord(country_code="KE", language_tag="en")
        assert "country_name" in str(exc_info.value)
        assert "sub_region" in str(exc_info.value)

    def test_enriched_record_popup(self):
        record = EnrichedRecord(
            country_code="KE",
            author_handle="nairobi_dev",
            text="Jambo",
            country_name="Kenya",
            sub_region="Eastern Africa",
        )
        assert record.popup == "nairobi_dev: Jambo"


class TestAggregateRow:
    """Tests for AggregateRow model"""

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            AggregateRow(
                country_code="KE",
                country_name="Kenya",
                sub_region="Eastern Africa",
                count=-1,
            )
        assert "count" in str(exc_info.value)

    def test_key(self):
        row = AggregateRow(country_code="KE", country_name="Kenya", sub_region="Eastern Africa", count=2)
        assert row.key == ("KE", "Kenya", "Eastern Africa")


class TestSubRegionOrder:
    """Tests for SubRegionOrder model"""

    def test_rank(self):
        order = SubRegionOrder(regions=("Western Africa", "Northern Africa"))
        assert order.rank("Western Africa") == 0
        assert order.rank("Northern Africa") == 1
        assert order.rank("Atlantis") is None
        assert "Western Africa" in order

    def test_duplicates_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            SubRegionOrder(regions=("Western Africa", "Western Africa"))
        assert "duplicates" in str(exc_info.value)

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError):
            SubRegionOrder(regions=())

    def test_unmapped(self):
        order = SubRegionOrder(regions=("Western Africa",))
        assert order.unmapped(["Western Africa", "Atlantis", "Atlantis", "Lemuria"]) == ["Atlantis", "Lemuria"]


class TestBoundingBox:
    """Tests for BoundingBox model"""

    def test_from_list(self):
        bbox = BoundingBox.from_list([-25.4, -47.1, 63.8, 37.5])
        assert bbox.min_lon == -25.4
        assert bbox.max_lat == 37.5
        assert bbox.to_list() == [-25.4, -47.1, 63.8, 37.5]

    def test_inverted_corners_rejected(self):
        with pytest.raises(ValidationError):
            BoundingBox.from_list([63.8, -47.1, -25.4, 37.5])

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            BoundingBox.from_list([1.0, 2.0, 3.0])

    def test_contains(self):
        south_africa = BoundingBox.from_list([16.33, -35.77, 36.54, -22.12])
        assert south_africa.contains(-33.92, 18.42)
        assert not south_africa.contains(-1.28, 36.82)
        assert not south_africa.contains(None, 18.42)
