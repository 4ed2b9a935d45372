"""Decimal and date canonicalization shared by all readers and writers."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import re

from ..core.exceptions import InvalidDateFormatError, InvalidDecimalError

# UN/CEFACT date format code for CCYYMMDD
CII_DATE_FORMAT_CODE = "102"

# xs:decimal lexical space after whitespace collapse; no exponents or digit separators
_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")

# xs:date without timezone
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Convert a decimal, integer or decimal string into an exact Decimal.

    Floats are rejected: a binary float cannot carry the textual precision
    of an invoice amount.

    Raises:
        InvalidDecimalError: If the value is a float or not a finite decimal.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidDecimalError(f"Refusing inexact value {value!r}; pass a Decimal or a string")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not _DECIMAL_RE.fullmatch(stripped):
            raise InvalidDecimalError(f"Not a decimal number: {value!r}")
        try:
            result = Decimal(stripped)
        except InvalidOperation:
            raise InvalidDecimalError(f"Not a decimal number: {value!r}") from None
    else:
        raise InvalidDecimalError(f"Unsupported decimal input type: {type(value).__name__}")

    if not result.is_finite():
        raise InvalidDecimalError(f"Not a finite decimal number: {value!r}")
    return result


def parse_decimal(text: str | None) -> Decimal | None:
    """Parse element text into a Decimal, passing absence through."""
    if text is None:
        return None
    return to_decimal(text)


def format_decimal(value: Decimal, min_places: int = 0) -> str:
    """
    Render a decimal for the wire.

    The value is written with full precision, trailing fractional zeros are
    stripped, and the fraction is padded back to ``min_places`` digits.

    >>> format_decimal(Decimal("500.00"))
    '500'
    >>> format_decimal(Decimal("500.00"), 2)
    '500.00'
    >>> format_decimal(Decimal("0.125"), 2)
    '0.125'
    """
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    places = len(text.partition(".")[2])
    if places < min_places:
        if places == 0:
            text += "."
        text += "0" * (min_places - places)
    return text


def parse_iso_date(text: str | None) -> date | None:
    """Parse a UBL calendar date (``YYYY-MM-DD``)."""
    if text is None:
        return None
    stripped = text.strip()
    if not _ISO_DATE_RE.fullmatch(stripped):
        raise InvalidDateFormatError(f"Expected a YYYY-MM-DD date, got {text!r}")
    try:
        return datetime.strptime(stripped, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateFormatError(f"Not a calendar date: {text!r}") from None


def format_iso_date(value: date) -> str:
    return value.isoformat()


def parse_cii_date(text: str | None, format_code: str | None) -> date | None:
    """
    Parse a CII ``udt:DateTimeString``.

    Only format code 102 (``YYYYMMDD``) is accepted; guessing any other
    encoding could silently corrupt a payment date.
    """
    if text is None:
        return None
    if format_code != CII_DATE_FORMAT_CODE:
        raise InvalidDateFormatError(
            f"Unsupported date format code {format_code!r} for {text!r}; "
            f"expected {CII_DATE_FORMAT_CODE!r}"
        )
    stripped = text.strip()
    if len(stripped) != 8 or not stripped.isdigit():
        raise InvalidDateFormatError(f"Expected an 8-digit YYYYMMDD date, got {text!r}")
    try:
        return datetime.strptime(stripped, "%Y%m%d").date()
    except ValueError:
        raise InvalidDateFormatError(f"Not a calendar date: {text!r}") from None


def format_cii_date(value: date) -> str:
    return value.strftime("%Y%m%d")
