"""Pytest configuration and fixtures."""

import pytest
from decimal import Decimal
from datetime import date
from pathlib import Path

from invoicebridge.core.models import (
    BillingDocument,
    Contact,
    DocumentType,
    Item,
    LineItem,
    MonetaryTotals,
    PaymentInstructions,
    PostalAddress,
    Price,
    TaxBreakdown,
    TaxSubtotal,
    TradeParty,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _line(line_id: str, quantity: str, unit: str, amount: str, price: str, name: str) -> LineItem:
    return LineItem(
        id=line_id,
        invoiced_quantity=quantity,
        unit_code=unit,
        line_extension_amount=amount,
        item=Item(name=name, tax_category="S", tax_percent="19"),
        price=Price(amount=price),
    )


@pytest.fixture
def sample_invoice() -> BillingDocument:
    """Create the RE-2024-0042 sample invoice for testing."""
    seller = TradeParty(
        name="Zugpferd GmbH",
        vat_identifier="DE123456789",
        legal_registration_id="HRB 12345",
        electronic_address="rechnung@zugpferd.de",
        electronic_address_scheme="EM",
        postal_address=PostalAddress(
            street_name="Musterstrasse 1",
            city_name="Berlin",
            postal_zone="10115",
            country_code="DE",
        ),
        contact=Contact(
            name="Max Mustermann",
            telephone="+49 30 1234567",
            email="max@zugpferd.de",
        ),
    )

    buyer = TradeParty(
        name="Muster AG",
        postal_address=PostalAddress(
            street_name="Beispielweg 5",
            city_name="Muenchen",
            postal_zone="80331",
            country_code="DE",
        ),
    )

    line_items = [
        _line("1", "5", "C62", "2500.00", "500.00", "Software-Lizenz"),
        _line("2", "16", "HUR", "2400.00", "150.00", "Beratung"),
        _line("3", "1", "C62", "1800.00", "1800.00", "Installation"),
    ]

    return BillingDocument(
        number="RE-2024-0042",
        issue_date=date(2024, 3, 15),
        due_date=date(2024, 4, 14),
        type_code=DocumentType.INVOICE,
        currency_code="EUR",
        buyer_reference="04011000-12345-03",
        customization_id="urn:cen.eu:en16931:2017",
        seller=seller,
        buyer=buyer,
        line_items=line_items,
        tax_breakdown=TaxBreakdown(
            tax_amount=Decimal("1273.00"),
            currency_code="EUR",
            subtotals=[
                TaxSubtotal(
                    taxable_amount=Decimal("6700.00"),
                    tax_amount=Decimal("1273.00"),
                    category_code="S",
                    percent=Decimal("19"),
                    currency_code="EUR",
                )
            ],
        ),
        monetary_totals=MonetaryTotals(
            line_extension_amount=Decimal("6700.00"),
            tax_exclusive_amount=Decimal("6700.00"),
            tax_inclusive_amount=Decimal("7973.00"),
            payable_amount=Decimal("7973.00"),
        ),
        payment_instructions=PaymentInstructions(
            payment_means_code="58",
            payment_id="RE-2024-0042",
            account_id="DE89370400440532013000",
            note="Zahlbar innerhalb von 30 Tagen ohne Abzug",
        ),
    )


@pytest.fixture
def sample_credit_note(sample_invoice: BillingDocument) -> BillingDocument:
    """The sample invoice re-issued as a credit note."""
    return sample_invoice.model_copy(
        update={"number": "GS-2024-0007", "type_code": DocumentType.CREDIT_NOTE},
        deep=True,
    )


@pytest.fixture
def ubl_invoice_xml() -> bytes:
    return (FIXTURES_DIR / "ubl_invoice.xml").read_bytes()


@pytest.fixture
def ubl_credit_note_xml() -> bytes:
    return (FIXTURES_DIR / "ubl_credit_note.xml").read_bytes()


@pytest.fixture
def cii_invoice_xml() -> bytes:
    return (FIXTURES_DIR / "cii_invoice.xml").read_bytes()
