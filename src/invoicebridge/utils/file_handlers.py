"""Wire format detection and upload handling utilities."""

from enum import Enum

from fastapi import UploadFile
from lxml import etree

from ..core.exceptions import UnknownFormatError
from ..mappings import cii, ubl
from ..readers.base import parse_xml


class WireFormat(str, Enum):
    """Supported XML invoice syntaxes."""

    UBL = "ubl"
    CII = "cii"


# (namespace, local name) of the root element to wire format
ROOT_TO_FORMAT: dict[tuple[str, str], WireFormat] = {
    (ubl.INVOICE_NS, ubl.INVOICE_ROOT): WireFormat.UBL,
    (ubl.CREDIT_NOTE_NS, ubl.CREDIT_NOTE_ROOT): WireFormat.UBL,
    (cii.RSM_NS, cii.ROOT): WireFormat.CII,
}


def detect_wire_format(content: bytes | str) -> WireFormat:
    """
    Detect the wire format from the root element of an XML payload.

    The whole payload is parsed first, so a syntax error anywhere in the
    document is reported as malformed rather than as an unknown format.

    Raises:
        MalformedDocumentError: If the payload is not well-formed XML
        UnknownFormatError: If the root is neither UBL nor CII
    """
    root = parse_xml(content)

    qname = etree.QName(root)
    wire_format = ROOT_TO_FORMAT.get((qname.namespace, qname.localname))
    if wire_format is None:
        raise UnknownFormatError(f"Unrecognized invoice root element {root.tag!r}")
    return wire_format


class FileSizeError(ValueError):
    """Upload exceeds the configured size limit."""


class FileHandler:
    """Handle uploaded invoice documents."""

    def __init__(self, max_size_bytes: int = 10 * 1024 * 1024):
        self.max_size_bytes = max_size_bytes

    async def read_upload(self, upload: UploadFile) -> tuple[bytes, WireFormat]:
        """
        Read uploaded file and detect its wire format.

        Args:
            upload: FastAPI UploadFile

        Returns:
            Tuple of (file_content, wire_format)

        Raises:
            FileSizeError: If file exceeds max size
            MalformedDocumentError: If the content is not XML
            UnknownFormatError: If the XML is neither UBL nor CII
        """
        content = await upload.read()

        if len(content) > self.max_size_bytes:
            raise FileSizeError(
                f"File size {len(content)} bytes exceeds maximum "
                f"{self.max_size_bytes} bytes"
            )

        return content, detect_wire_format(content)
