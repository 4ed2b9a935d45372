"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from invoicebridge import __version__
from invoicebridge.api.routes.documents import get_file_handler, get_pipeline
from invoicebridge.core.pipeline import ConversionPipeline
from invoicebridge.main import create_app
from invoicebridge.utils.file_handlers import FileHandler, WireFormat
from invoicebridge.writers import CIIWriter


class TextXMLWriter(CIIWriter):
    """CII writer advertising a different media type and extension."""

    @property
    def file_extension(self) -> str:
        return "cii"

    @property
    def mime_type(self) -> str:
        return "text/xml"


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


class TestHealth:
    """Test cases for health endpoints."""

    def test_health(self, client):
        """Test health check payload."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__, "service": "invoicebridge"}

    def test_ready(self, client):
        """Test readiness check lists both formats."""
        response = client.get("/api/v1/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["ready"] is True
        assert "UBL 2.1" in body["checks"]["readers"]
        assert "UN/CEFACT CII D16B" in body["checks"]["writers"]


class TestParseEndpoint:
    """Test cases for POST /documents/parse."""

    def test_parse_ubl(self, client, ubl_invoice_xml):
        """Test parsing a UBL invoice into canonical JSON."""
        response = client.post(
            "/api/v1/documents/parse",
            files={"file": ("invoice.xml", ubl_invoice_xml, "application/xml")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["source_format"] == "ubl"
        assert body["document"]["number"] == "RE-2024-0043"
        assert body["document"]["type_code"] == "380"
        assert body["document"]["monetary_totals"]["payable_amount"] == "7854.00"
        assert body["document"]["issue_date"] == "2024-03-15"

    def test_parse_cii(self, client, cii_invoice_xml):
        """Test parsing a CII invoice."""
        response = client.post(
            "/api/v1/documents/parse",
            files={"file": ("invoice.xml", cii_invoice_xml, "application/xml")},
        )

        assert response.status_code == 200
        assert response.json()["source_format"] == "cii"

    def test_parse_malformed(self, client):
        """Test that malformed XML yields 422."""
        response = client.post(
            "/api/v1/documents/parse",
            files={"file": ("broken.xml", b"<Invoice><oops></Invoice>", "application/xml")},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "MalformedDocumentError"

    def test_parse_unknown_format(self, client):
        """Test that foreign XML yields 422."""
        response = client.post(
            "/api/v1/documents/parse",
            files={"file": ("order.xml", b"<Order xmlns='urn:example'/>", "application/xml")},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "UnknownFormatError"

    def test_parse_oversized(self, client, ubl_invoice_xml):
        """Test that oversized uploads yield 413."""
        client.app.dependency_overrides[get_file_handler] = lambda: FileHandler(max_size_bytes=100)

        response = client.post(
            "/api/v1/documents/parse",
            files={"file": ("invoice.xml", ubl_invoice_xml, "application/xml")},
        )

        assert response.status_code == 413


class TestConvertEndpoint:
    """Test cases for POST /documents/convert."""

    def test_convert_ubl_to_cii(self, client, ubl_invoice_xml):
        """Test UBL to CII conversion."""
        response = client.post(
            "/api/v1/documents/convert",
            params={"target": "cii"},
            files={"file": ("invoice.xml", ubl_invoice_xml, "application/xml")},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert response.headers["x-source-format"] == "ubl"
        assert 'filename="invoice.cii.xml"' in response.headers["content-disposition"]
        assert "rsm:CrossIndustryInvoice" in response.text

    def test_convert_credit_note_to_ubl(self, client, ubl_credit_note_xml):
        """Test that re-serializing a credit note keeps the CreditNote root."""
        response = client.post(
            "/api/v1/documents/convert",
            params={"target": "ubl"},
            files={"file": ("gs.xml", ubl_credit_note_xml, "application/xml")},
        )

        assert response.status_code == 200
        assert "<CreditNote" in response.text

    def test_convert_invalid_target(self, client, ubl_invoice_xml):
        """Test that an unsupported target is rejected by validation."""
        response = client.post(
            "/api/v1/documents/convert",
            params={"target": "pdf"},
            files={"file": ("invoice.xml", ubl_invoice_xml, "application/xml")},
        )

        assert response.status_code == 422

    def test_convert_unsupported_variant(self, client, cii_invoice_xml):
        """Test that an unknown CII type code yields 422."""
        xml = cii_invoice_xml.replace(b"<ram:TypeCode>380</ram:TypeCode>", b"<ram:TypeCode>999</ram:TypeCode>")
        response = client.post(
            "/api/v1/documents/convert",
            params={"target": "ubl"},
            files={"file": ("invoice.xml", xml, "application/xml")},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "UnsupportedVariantError"

    def test_convert_uses_writer_media_type(self, client, ubl_invoice_xml):
        """Test that content type and file extension come from the target writer."""
        client.app.dependency_overrides[get_pipeline] = lambda: ConversionPipeline(
            writers={WireFormat.CII: TextXMLWriter()}
        )

        response = client.post(
            "/api/v1/documents/convert",
            params={"target": "cii"},
            files={"file": ("invoice.xml", ubl_invoice_xml, "application/xml")},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/xml")
        assert 'filename="invoice.cii.cii"' in response.headers["content-disposition"]
