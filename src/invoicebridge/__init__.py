"""Translate e-invoices between UBL 2.1, UN/CEFACT CII and a canonical model."""

__version__ = "0.1.0"
