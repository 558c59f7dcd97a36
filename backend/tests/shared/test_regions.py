"""
Tests for the region hierarchy and the value formatters.
"""

import pytest

from records_engine.shared.constants import DNF, DNS, EventFormat, RecordType
from records_engine.shared.formatters import format_centiseconds, format_result_value
from records_engine.shared.regions import (
    get_continent_for_record_type,
    get_continental_record_type,
    get_shared_regions,
    get_super_region,
)


class TestSuperRegion:
    """Tests for get_super_region and continental record types."""

    @pytest.mark.parametrize("region_code,expected", [
        ("GB", "EUROPE"),
        ("US", "NORTH_AMERICA"),
        ("BR", "SOUTH_AMERICA"),
        ("JP", "ASIA"),
        ("ZA", "AFRICA"),
        ("NZ", "OCEANIA"),
        ("ZZ", None),
        (None, None),
    ])
    def test_super_region(self, region_code, expected):
        assert get_super_region(region_code) == expected

    def test_continental_record_types(self):
        assert get_continental_record_type("EUROPE") is RecordType.ER
        assert get_continental_record_type("ASIA") is RecordType.ASR
        assert get_continental_record_type("OCEANIA") is RecordType.OCR

    def test_unknown_super_region(self):
        with pytest.raises(ValueError):
            get_continental_record_type("ATLANTIS")

    def test_continent_for_record_type(self):
        assert get_continent_for_record_type(RecordType.NAR).code == "NORTH_AMERICA"
        assert get_continent_for_record_type("AfR").code == "AFRICA"
        assert get_continent_for_record_type(RecordType.WR) is None
        assert get_continent_for_record_type(RecordType.NR) is None


class TestSharedRegions:
    """Tests for get_shared_regions."""

    def test_single_person(self):
        assert get_shared_regions(["DE"]) == ("DE", "EUROPE")

    def test_same_country(self):
        assert get_shared_regions(["GB", "GB", "GB"]) == ("GB", "EUROPE")

    def test_same_continent(self):
        assert get_shared_regions(["GB", "DE", "FR"]) == (None, "EUROPE")

    def test_different_continents(self):
        assert get_shared_regions(["GB", "US"]) == (None, None)

    def test_no_participants(self):
        assert get_shared_regions([]) == (None, None)


class TestFormatters:
    """Tests for the attempt value formatters."""

    @pytest.mark.parametrize("centiseconds,expected", [
        (1234, "12.34"),
        (5, "0.05"),
        (6000, "1:00.00"),
        (60000, "10:00.00"),
        (360000, "1:00:00"),
        (DNF, "DNF"),
        (DNS, "DNS"),
    ])
    def test_format_centiseconds(self, centiseconds, expected):
        assert format_centiseconds(centiseconds) == expected

    @pytest.mark.parametrize("value,event_format,is_average,expected", [
        (1234, EventFormat.TIME, False, "12.34"),
        (1234, EventFormat.TIME, True, "12.34"),
        (25, EventFormat.NUMBER, False, "25"),
        (2533, EventFormat.NUMBER, True, "25.33"),
        (DNF, EventFormat.TIME, True, "DNF"),
        (0, EventFormat.NUMBER, True, "-"),
    ])
    def test_format_result_value(self, value, event_format, is_average, expected):
        assert format_result_value(value, event_format, is_average) == expected
