"""Tests for catalogue parsing."""

import pytest

from resistor_search.core.catalogue import (
    InvalidValueError, parse_value, parse_catalogue, validate_catalogue,
    e_series_catalogue, format_value, E_SERIES
)


class TestParseValue:
    """Test number parsing."""

    def test_parse_valid(self):
        assert parse_value("4700") == 4700.0
        assert parse_value(" 2.2 ") == 2.2
        assert parse_value("1e3") == 1000.0
        assert parse_value(47) == 47.0

    @pytest.mark.parametrize("text", ["", "abc", "4k7", None, "0", "-10", "inf", "nan"])
    def test_parse_invalid(self, text):
        with pytest.raises(InvalidValueError):
            parse_value(text)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_value("ten")

    def test_error_names_the_value(self):
        with pytest.raises(InvalidValueError, match="target"):
            parse_value("x", name="target")


class TestParseCatalogue:
    """Test catalogue entry parsing."""

    def test_labels_kept_verbatim(self):
        entries = parse_catalogue(["100", "4.70", "1e3"])
        assert entries == [("100", 100.0), ("4.70", 4.7), ("1e3", 1000.0)]

    def test_duplicates_collapse_to_first(self):
        entries = parse_catalogue(["100", "220", "100"])
        assert entries == [("100", 100.0), ("220", 220.0)]

    def test_equal_values_with_different_labels_are_kept(self):
        entries = parse_catalogue(["100", "100.0"])
        assert len(entries) == 2

    def test_empty(self):
        assert parse_catalogue([]) == []

    def test_invalid_entry(self):
        with pytest.raises(InvalidValueError):
            parse_catalogue(["100", "banana"])

    def test_validate_catalogue(self):
        assert validate_catalogue([("a", 1), ("a", 1), ("b", 2.5)]) == [("a", 1.0), ("b", 2.5)]

    def test_validate_catalogue_rejects_negative(self):
        with pytest.raises(InvalidValueError):
            validate_catalogue([("a", -1.0)])


class TestESeries:
    """Test preferred number series generation."""

    def test_format_value(self):
        assert format_value(4700.0) == "4700"
        assert format_value(2.2) == "2.2"
        assert format_value(1e6) == "1000000"

    def test_single_decade(self):
        entries = e_series_catalogue('E3', [2])
        assert entries == [("100", 100.0), ("220", 220.0), ("470", 470.0)]

    def test_sizes(self):
        assert len(e_series_catalogue('E12', [0, 1, 2])) == 36
        assert len(e_series_catalogue('e24', [3])) == len(E_SERIES['E24'])

    def test_values_are_rounded(self):
        entries = e_series_catalogue('E12', [2])
        labels = [label for label, _ in entries]
        assert "120" in labels
        assert "820" in labels
        assert all(float(label) == value for label, value in entries)

    def test_ascending(self):
        values = [value for _, value in e_series_catalogue('E6', [1, 0])]
        assert values == sorted(values)

    def test_unknown_series(self):
        with pytest.raises(InvalidValueError):
            e_series_catalogue('E7', [0])
