"""Tests for the CII reader."""

import pytest
from datetime import date
from decimal import Decimal

from invoicebridge.core.exceptions import (
    InvalidDateFormatError,
    MalformedDocumentError,
    UnsupportedVariantError,
)
from invoicebridge.core.models import DocumentType
from invoicebridge.readers import CIIReader


class TestCIIReader:
    """Test cases for reading the sample CII invoice."""

    def setup_method(self):
        """Setup test fixtures."""
        self.reader = CIIReader()

    def test_header(self, cii_invoice_xml):
        """Test header fields and 102 dates."""
        doc = self.reader.read(cii_invoice_xml)

        assert doc.number == "RE-2024-0043"
        assert doc.type_code == DocumentType.INVOICE
        assert doc.issue_date == date(2024, 3, 15)
        assert doc.due_date == date(2024, 4, 14)
        assert doc.delivery_date == date(2024, 3, 10)
        assert doc.currency_code == "EUR"
        assert doc.buyer_reference == "04011000-12345-03"
        assert doc.profile_id == "urn:fdc:peppol.eu:2017:poacc:billing:01:1.0"
        assert doc.customization_id == "urn:cen.eu:en16931:2017"

    def test_seller(self, cii_invoice_xml):
        """Test seller party fields."""
        seller = self.reader.read(cii_invoice_xml).seller

        assert seller.name == "Zugpferd GmbH"
        assert seller.identifier == "ZGP-001"
        assert seller.trading_name == "Zugpferd"
        assert seller.legal_registration_id == "HRB 12345"
        assert seller.legal_form == "GmbH, Amtsgericht Berlin"
        assert seller.vat_identifier == "DE123456789"
        assert seller.electronic_address_scheme == "EM"
        assert seller.contact.telephone == "+49 30 1234567"
        assert seller.postal_address.street_name == "Musterstrasse 1"

    def test_line_tax_from_line_settlement(self, cii_invoice_xml):
        """Test that item VAT is read from the line settlement."""
        line = self.reader.read(cii_invoice_xml).line_items[0]

        assert line.item.name == "Software-Lizenz"
        assert line.item.tax_category == "S"
        assert line.item.tax_percent == Decimal("19")
        assert line.invoiced_quantity == Decimal("5")
        assert line.unit_code == "C62"
        assert line.line_extension_amount == Decimal("2500.00")
        assert line.item.classification_codes[0].list_id == "STI"

    def test_subtotal_currency_from_tax_total(self, cii_invoice_xml):
        """Test that subtotals take the TaxTotalAmount currency."""
        breakdown = self.reader.read(cii_invoice_xml).tax_breakdown

        assert breakdown.tax_amount == Decimal("1254.00")
        assert breakdown.currency_code == "EUR"
        assert breakdown.subtotals[0].currency_code == "EUR"
        assert breakdown.subtotals[0].percent == Decimal("19")

    def test_subtotal_currency_falls_back_to_invoice_currency(self, cii_invoice_xml):
        """Test the fallback when TaxTotalAmount carries no currencyID."""
        xml = cii_invoice_xml.replace(b'<ram:TaxTotalAmount currencyID="EUR">', b"<ram:TaxTotalAmount>")

        breakdown = self.reader.read(xml).tax_breakdown
        assert breakdown.currency_code == "EUR"
        assert breakdown.subtotals[0].currency_code == "EUR"

    def test_totals(self, cii_invoice_xml):
        """Test monetary summation mapping."""
        totals = self.reader.read(cii_invoice_xml).monetary_totals

        assert totals.line_extension_amount == Decimal("6700.00")
        assert totals.tax_exclusive_amount == Decimal("6600.00")
        assert totals.tax_inclusive_amount == Decimal("7854.00")
        assert totals.payable_amount == Decimal("7854.00")
        assert totals.allowance_total_amount == Decimal("100.00")
        assert totals.charge_total_amount is None

    def test_payment(self, cii_invoice_xml):
        """Test payment instructions assembled from the settlement."""
        payment = self.reader.read(cii_invoice_xml).payment_instructions

        assert payment.payment_means_code == "58"
        assert payment.payment_id == "RE-2024-0043"
        assert payment.account_id == "DE89370400440532013000"
        assert payment.note == "Zahlbar innerhalb von 30 Tagen ohne Abzug"
        assert payment.card_network_id is None

    def test_allowance_has_no_currency(self, cii_invoice_xml):
        """Test that CII allowances carry no currency of their own."""
        allowance = self.reader.read(cii_invoice_xml).allowance_charges[0]

        assert allowance.is_allowance
        assert allowance.amount == Decimal("100.00")
        assert allowance.currency_code is None


class TestCIIReaderErrors:
    """Test cases for CII reader failures."""

    def setup_method(self):
        """Setup test fixtures."""
        self.reader = CIIReader()

    def test_malformed(self):
        """Test that malformed XML is rejected."""
        with pytest.raises(MalformedDocumentError):
            self.reader.read(b"<rsm:CrossIndustryInvoice")

    def test_ubl_input_rejected(self, ubl_invoice_xml):
        """Test that a UBL document is not read as CII."""
        with pytest.raises(UnsupportedVariantError):
            self.reader.read(ubl_invoice_xml)

    def test_missing_type_code(self, cii_invoice_xml):
        """Test that CII requires a type code."""
        xml = cii_invoice_xml.replace(b"<ram:TypeCode>380</ram:TypeCode>", b"")

        with pytest.raises(UnsupportedVariantError):
            self.reader.read(xml)

    def test_unknown_type_code(self, cii_invoice_xml):
        """Test that an unknown type code is rejected."""
        xml = cii_invoice_xml.replace(b"<ram:TypeCode>380</ram:TypeCode>", b"<ram:TypeCode>751</ram:TypeCode>")

        with pytest.raises(UnsupportedVariantError):
            self.reader.read(xml)

    def test_credit_note_type_code(self, cii_invoice_xml):
        """Test that the variant comes from the type code alone."""
        xml = cii_invoice_xml.replace(b"<ram:TypeCode>380</ram:TypeCode>", b"<ram:TypeCode>381</ram:TypeCode>")

        assert self.reader.read(xml).is_credit_note

    def test_date_without_format_code(self, cii_invoice_xml):
        """Test that a date without format 102 is rejected."""
        xml = cii_invoice_xml.replace(
            b'<udt:DateTimeString format="102">20240315</udt:DateTimeString>',
            b"<udt:DateTimeString>20240315</udt:DateTimeString>",
        )

        with pytest.raises(InvalidDateFormatError):
            self.reader.read(xml)

    def test_date_with_other_format_code(self, cii_invoice_xml):
        """Test that format code 610 is rejected."""
        xml = cii_invoice_xml.replace(
            b'<udt:DateTimeString format="102">20240414</udt:DateTimeString>',
            b'<udt:DateTimeString format="610">202404</udt:DateTimeString>',
        )

        with pytest.raises(InvalidDateFormatError):
            self.reader.read(xml)
