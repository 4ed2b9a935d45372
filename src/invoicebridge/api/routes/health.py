"""Health check endpoint."""

from fastapi import APIRouter

from ...readers import CIIReader, UBLReader
from ...writers import CIIWriter, UBLWriter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns service status and version.
    """
    from invoicebridge import __version__

    return {
        "status": "healthy",
        "version": __version__,
        "service": "invoicebridge",
    }


@router.get("/ready")
async def readiness_check() -> dict:
    """
    Readiness check endpoint.

    Reports the wire formats the service can read and write.
    """
    checks = {
        "api": True,
        "readers": [UBLReader().format_name, CIIReader().format_name],
        "writers": [UBLWriter().format_name, CIIWriter().format_name],
    }

    return {
        "ready": True,
        "checks": checks,
    }
