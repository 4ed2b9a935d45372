"""Document parsing and conversion endpoints."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from ...config import get_settings
from ...core.pipeline import ConversionPipeline
from ...utils.file_handlers import FileHandler, WireFormat

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["documents"])


class ParseResponse(BaseModel):
    """Response for document parsing."""

    source_format: WireFormat
    document: dict  # Full canonical document


def get_pipeline() -> ConversionPipeline:
    return ConversionPipeline()


def get_file_handler() -> FileHandler:
    return FileHandler(get_settings().max_file_size_bytes)


@router.post("/parse", response_model=ParseResponse)
async def parse_document(
    file: Annotated[UploadFile, File(description="UBL or CII invoice XML")],
    pipeline: Annotated[ConversionPipeline, Depends(get_pipeline)],
    file_handler: Annotated[FileHandler, Depends(get_file_handler)],
) -> ParseResponse:
    """
    Upload and parse an invoice.

    Accepts UBL 2.1 Invoice/CreditNote and CII CrossIndustryInvoice XML.
    Returns the canonical document as JSON.
    """
    content, source_format = await file_handler.read_upload(file)
    logger.info(f"Parsing {file.filename} ({source_format.value})")

    document = pipeline.read(content, source_format)
    return ParseResponse(
        source_format=source_format,
        document=document.model_dump(mode="json"),
    )


@router.post("/convert")
async def convert_document(
    file: Annotated[UploadFile, File(description="UBL or CII invoice XML")],
    pipeline: Annotated[ConversionPipeline, Depends(get_pipeline)],
    file_handler: Annotated[FileHandler, Depends(get_file_handler)],
    target: Annotated[WireFormat, Query(description="Target wire format")] = WireFormat.UBL,
) -> Response:
    """
    Upload an invoice and convert it to the target wire format.

    Returns the converted XML as a download.
    """
    content, source_format = await file_handler.read_upload(file)
    logger.info(f"Converting {file.filename} ({source_format.value} -> {target.value})")

    document = pipeline.read(content, source_format)
    xml = pipeline.write(document, target)
    writer = pipeline.writers[target]

    stem = Path(file.filename).stem if file.filename else (document.number or "invoice")
    filename = f"{stem}.{target.value}.{writer.file_extension}"
    return Response(
        content=xml.encode("utf-8"),
        media_type=writer.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Source-Format": source_format.value,
        },
    )
