"""Tests for decimal and date formatting helpers."""

import pytest
from datetime import date
from decimal import Decimal

from invoicebridge.core.exceptions import InvalidDateFormatError, InvalidDecimalError
from invoicebridge.utils.formatting import (
    format_cii_date,
    format_decimal,
    format_iso_date,
    parse_cii_date,
    parse_decimal,
    parse_iso_date,
    to_decimal,
)


class TestDecimals:
    """Test cases for decimal parsing and rendering."""

    def test_parse_keeps_textual_precision(self):
        """Test that parsing preserves the exact textual value."""
        value = parse_decimal("2500.00")

        assert value == Decimal("2500.00")
        assert str(value) == "2500.00"

    def test_parse_strips_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert parse_decimal("  19.5\n") == Decimal("19.5")

    def test_parse_passes_absence_through(self):
        """Test that None stays None."""
        assert parse_decimal(None) is None

    @pytest.mark.parametrize("text", ["", "abc", "1,5", "NaN", "Infinity"])
    def test_parse_rejects_invalid_text(self, text):
        """Test that unparsable or non-finite text is rejected."""
        with pytest.raises(InvalidDecimalError):
            parse_decimal(text)

    @pytest.mark.parametrize("text", ["1_000.00", "1E+3", "2.5e2", "0x10", "+-5", "1.2.3"])
    def test_parse_rejects_non_lexical_decimals(self, text):
        """Test that Python-only spellings are not accepted as amounts."""
        with pytest.raises(InvalidDecimalError):
            parse_decimal(text)

    def test_parse_accepts_signed_and_bare_fraction(self):
        """Test the remaining lexical forms of a decimal."""
        assert parse_decimal("+5") == Decimal("5")
        assert parse_decimal("-0.50") == Decimal("-0.50")
        assert parse_decimal(".5") == Decimal("0.5")
        assert parse_decimal("5.") == Decimal("5")

    def test_to_decimal_rejects_float(self):
        """Test that binary floats are refused."""
        with pytest.raises(InvalidDecimalError):
            to_decimal(0.1)

    def test_to_decimal_accepts_int(self):
        """Test that integers convert exactly."""
        assert to_decimal(5) == Decimal("5")

    def test_format_strips_trailing_zeros(self):
        """Test trailing-zero normalization without a minimum."""
        assert format_decimal(Decimal("500.00")) == "500"
        assert format_decimal(Decimal("19.50")) == "19.5"
        assert format_decimal(Decimal("0.00")) == "0"

    def test_format_pads_to_minimum(self):
        """Test padding back to the minimum number of places."""
        assert format_decimal(Decimal("500.00"), 2) == "500.00"
        assert format_decimal(Decimal("7973"), 2) == "7973.00"
        assert format_decimal(Decimal("19.5"), 2) == "19.50"

    def test_format_never_rounds(self):
        """Test that extra precision is kept beyond the minimum."""
        assert format_decimal(Decimal("0.125"), 2) == "0.125"

    def test_format_avoids_exponent_notation(self):
        """Test that exponent-form decimals render positionally."""
        assert format_decimal(Decimal("1E+3"), 2) == "1000.00"
        assert format_decimal(Decimal("-12.300")) == "-12.3"


class TestDates:
    """Test cases for UBL and CII date handling."""

    def test_iso_date_round_trip(self):
        """Test ISO date parsing and rendering."""
        assert parse_iso_date("2024-03-15") == date(2024, 3, 15)
        assert format_iso_date(date(2024, 3, 15)) == "2024-03-15"

    def test_iso_date_rejects_cii_encoding(self):
        """Test that a compact date is not accepted as ISO."""
        with pytest.raises(InvalidDateFormatError):
            parse_iso_date("20240315")

    @pytest.mark.parametrize("text", ["2024-W11-5", "2024-075", "2024-3-15", "2024-03-15T10:00:00"])
    def test_iso_date_rejects_other_iso_forms(self, text):
        """Test that only the calendar date form is accepted."""
        with pytest.raises(InvalidDateFormatError):
            parse_iso_date(text)

    def test_iso_date_rejects_impossible_day(self):
        """Test that a well-shaped but invalid date is rejected."""
        with pytest.raises(InvalidDateFormatError):
            parse_iso_date("2024-02-30")

    def test_cii_date_with_format_102(self):
        """Test CCYYMMDD parsing with format code 102."""
        assert parse_cii_date("20240315", "102") == date(2024, 3, 15)
        assert format_cii_date(date(2024, 3, 15)) == "20240315"

    @pytest.mark.parametrize("format_code", [None, "203", "610"])
    def test_cii_date_requires_format_102(self, format_code):
        """Test that other or missing format codes are rejected."""
        with pytest.raises(InvalidDateFormatError):
            parse_cii_date("20240315", format_code)

    @pytest.mark.parametrize("text", ["2024-03-15", "2024031", "20241345"])
    def test_cii_date_rejects_bad_text(self, text):
        """Test that malformed CCYYMMDD text is rejected."""
        with pytest.raises(InvalidDateFormatError):
            parse_cii_date(text, "102")
