"""XML readers producing the canonical billing document."""

from .base import BaseReader, parse_xml
from .cii_reader import CIIReader
from .ubl_reader import UBLReader

__all__ = ["BaseReader", "CIIReader", "UBLReader", "parse_xml"]
