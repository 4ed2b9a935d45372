"""XML writers serializing the canonical billing document."""

from .base import BaseWriter
from .cii_writer import CIIWriter
from .ubl_writer import UBLWriter

__all__ = ["BaseWriter", "CIIWriter", "UBLWriter"]
