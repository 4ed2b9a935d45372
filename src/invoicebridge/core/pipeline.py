"""Conversion pipeline: detect, read, write."""

from dataclasses import dataclass
import logging
import time

from ..readers import BaseReader, CIIReader, UBLReader
from ..utils.file_handlers import WireFormat, detect_wire_format
from ..writers import BaseWriter, CIIWriter, UBLWriter
from .models import BillingDocument

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one document."""

    source_format: WireFormat
    target_format: WireFormat
    document: BillingDocument
    xml: str
    processing_time_ms: int


class ConversionPipeline:
    """
    Orchestrates: Detection -> Reading -> Writing

    Readers and writers hold no per-document state, so one pipeline can
    serve any number of conversions.
    """

    def __init__(
        self,
        readers: dict[WireFormat, BaseReader] | None = None,
        writers: dict[WireFormat, BaseWriter] | None = None,
    ):
        """
        Initialize pipeline with readers and writers.

        If not provided, creates default instances for UBL and CII.
        """
        self.readers = readers or {
            WireFormat.UBL: UBLReader(),
            WireFormat.CII: CIIReader(),
        }
        self.writers = writers or {
            WireFormat.UBL: UBLWriter(),
            WireFormat.CII: CIIWriter(),
        }

    def detect(self, content: bytes | str) -> WireFormat:
        wire_format = detect_wire_format(content)
        logger.debug(f"Detected wire format {wire_format.value}")
        return wire_format

    def read(self, content: bytes | str, source_format: WireFormat | None = None) -> BillingDocument:
        """
        Read a UBL or CII payload into the canonical model.

        Args:
            content: XML payload
            source_format: Wire format of the payload; detected when omitted

        Returns:
            The parsed BillingDocument
        """
        if source_format is None:
            source_format = self.detect(content)

        reader = self.readers[source_format]
        document = reader.read(content)
        logger.info(
            f"Read {reader.format_name} document {document.number!r} "
            f"({document.type_code.value}, {len(document.line_items)} lines)"
        )
        return document

    def write(self, document: BillingDocument, target_format: WireFormat) -> str:
        writer = self.writers[target_format]
        xml = writer.write(document)
        logger.info(f"Wrote document {document.number!r} as {writer.format_name}")
        return xml

    def convert(self, content: bytes | str, target_format: WireFormat) -> ConversionResult:
        """
        Convert a UBL or CII payload into ``target_format``.

        Converting into the source format re-serializes the document, which
        normalizes decimals and element order.
        """
        start_time = time.time()

        source_format = self.detect(content)
        document = self.read(content, source_format)
        xml = self.write(document, target_format)

        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Converted {source_format.value} -> {target_format.value} in {processing_time_ms} ms"
        )
        return ConversionResult(
            source_format=source_format,
            target_format=target_format,
            document=document,
            xml=xml,
            processing_time_ms=processing_time_ms,
        )
