"""Exceptions raised while reading and writing invoice XML."""


class InvoiceXMLError(ValueError):
    """Base class for all invoice translation errors."""


class MalformedDocumentError(InvoiceXMLError):
    """The input is not well-formed XML."""


# Both names are in use by callers.
MalformedInputError = MalformedDocumentError


class UnsupportedVariantError(InvoiceXMLError):
    """The root element or type code does not match a known document variant."""


class InvalidDateFormatError(InvoiceXMLError):
    """A date field uses an unexpected encoding."""


class InvalidDecimalError(InvoiceXMLError):
    """A numeric field cannot be parsed as an exact decimal."""


class UnknownFormatError(InvoiceXMLError):
    """The wire format of a payload could not be detected."""
