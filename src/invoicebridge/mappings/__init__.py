"""Per-format mapping tables from canonical fields to XML locations."""

from . import cii, ubl
from .base import Locator

__all__ = ["Locator", "cii", "ubl"]
