"""Core module - models and exceptions."""

from .exceptions import (
    InvalidDateFormatError,
    InvalidDecimalError,
    InvoiceXMLError,
    MalformedDocumentError,
    MalformedInputError,
    UnknownFormatError,
    UnsupportedVariantError,
)
from .models import (
    AllowanceCharge,
    BillingDocument,
    Contact,
    DocumentType,
    Item,
    ItemClassification,
    LineItem,
    MonetaryTotals,
    PaymentInstructions,
    PostalAddress,
    Price,
    TaxBreakdown,
    TaxSubtotal,
    TradeParty,
)

__all__ = [
    "AllowanceCharge",
    "BillingDocument",
    "Contact",
    "DocumentType",
    "InvalidDateFormatError",
    "InvalidDecimalError",
    "InvoiceXMLError",
    "Item",
    "ItemClassification",
    "LineItem",
    "MalformedDocumentError",
    "MalformedInputError",
    "MonetaryTotals",
    "PaymentInstructions",
    "PostalAddress",
    "Price",
    "TaxBreakdown",
    "TaxSubtotal",
    "TradeParty",
    "UnknownFormatError",
    "UnsupportedVariantError",
]
