"""Error handling middleware."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ...core.exceptions import InvoiceXMLError
from ...utils.file_handlers import FileSizeError

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI) -> None:
    """Setup exception handlers for the FastAPI app."""

    @app.exception_handler(InvoiceXMLError)
    async def invoice_error_handler(request: Request, exc: InvoiceXMLError) -> JSONResponse:
        logger.warning(f"Rejected {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=422,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.exception_handler(FileSizeError)
    async def file_size_handler(request: Request, exc: FileSizeError) -> JSONResponse:
        return JSONResponse(
            status_code=413,
            content={"error": "File too large", "detail": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "detail": str(exc)},
        )
