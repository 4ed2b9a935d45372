"""Utility modules."""

from .formatting import format_decimal, to_decimal

__all__ = ["format_decimal", "to_decimal"]
