"""Tests for the canonical document model."""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from invoicebridge.core.models import (
    AllowanceCharge,
    BillingDocument,
    DocumentType,
    LineItem,
    PostalAddress,
    Price,
    TradeParty,
)


class TestBillingDocument:
    """Test cases for BillingDocument."""

    def test_defaults(self):
        """Test default type code, currency and empty collections."""
        doc = BillingDocument(number="RE-1", issue_date=None)

        assert doc.type_code == DocumentType.INVOICE
        assert doc.currency_code == "EUR"
        assert doc.line_items == []
        assert doc.allowance_charges == []
        assert doc.seller is None
        assert doc.payment_instructions is None

    def test_required_keywords(self):
        """Test that number and issue_date must be supplied."""
        with pytest.raises(ValidationError):
            BillingDocument(number="RE-1")

    def test_type_code_from_string(self):
        """Test that type codes are validated against the enumeration."""
        doc = BillingDocument(number="GS-1", issue_date=None, type_code="381")

        assert doc.type_code == DocumentType.CREDIT_NOTE
        assert doc.is_credit_note

    def test_unknown_type_code(self):
        """Test that codes outside the enumeration are rejected."""
        with pytest.raises(ValidationError):
            BillingDocument(number="X", issue_date=None, type_code="999")

    def test_variants_are_not_credit_notes(self):
        """Test that only 381 counts as a credit note."""
        for code in ("380", "384", "386", "389", "326"):
            doc = BillingDocument(number="X", issue_date=None, type_code=code)
            assert not doc.is_credit_note

    def test_sample_invoice(self, sample_invoice):
        """Test the shared sample fixture."""
        assert sample_invoice.number == "RE-2024-0042"
        assert len(sample_invoice.line_items) == 3
        assert sample_invoice.monetary_totals.payable_amount == Decimal("7973.00")


class TestDecimalFields:
    """Test cases for exact decimal fields."""

    def test_string_input_keeps_precision(self):
        """Test that decimal strings keep their textual precision."""
        price = Price(amount="500.00")

        assert price.amount == Decimal("500.00")
        assert str(price.amount) == "500.00"

    def test_float_input_rejected(self):
        """Test that floats are refused."""
        with pytest.raises(ValidationError):
            Price(amount=500.0)

    def test_int_input_accepted(self):
        """Test that integers are accepted."""
        line = LineItem(id="1", invoiced_quantity=5, unit_code="C62", line_extension_amount="2500.00")

        assert line.invoiced_quantity == Decimal("5")

    def test_none_allowed_for_required_decimal(self):
        """Test that a required decimal accepts an explicit None."""
        assert Price(amount=None).amount is None


class TestParties:
    """Test cases for trade parties."""

    def test_party_requires_name_keyword(self):
        """Test that name must be passed."""
        with pytest.raises(ValidationError):
            TradeParty()

    def test_address_requires_country_keyword(self):
        """Test that country_code must be passed."""
        with pytest.raises(ValidationError):
            PostalAddress(city_name="Berlin")


class TestAllowanceCharge:
    """Test cases for AllowanceCharge."""

    def test_allowance(self):
        """Test allowance predicates."""
        allowance = AllowanceCharge(charge_indicator=False, amount="10.00")

        assert allowance.is_allowance
        assert not allowance.is_charge

    def test_charge(self):
        """Test charge predicates."""
        charge = AllowanceCharge(charge_indicator=True, amount="5")

        assert charge.is_charge
        assert not charge.is_allowance


class TestAssignment:
    """Test cases for mutating entities after construction."""

    def test_type_code_assigned_as_string(self, sample_invoice):
        """Test that an assigned code is coerced to the enumeration."""
        sample_invoice.type_code = "381"

        assert sample_invoice.type_code is DocumentType.CREDIT_NOTE
        assert sample_invoice.is_credit_note

    def test_unknown_type_code_assignment(self, sample_invoice):
        """Test that an assigned code outside the enumeration is refused."""
        with pytest.raises(ValidationError):
            sample_invoice.type_code = "999"

    def test_float_assignment_rejected(self, sample_invoice):
        """Test that floats are refused on assignment too."""
        with pytest.raises(ValidationError):
            sample_invoice.monetary_totals.payable_amount = 7973.0

        assert sample_invoice.monetary_totals.payable_amount == Decimal("7973.00")

    def test_string_amount_assignment(self, sample_invoice):
        """Test that an assigned decimal string becomes an exact Decimal."""
        sample_invoice.line_items[0].price.amount = "499.90"

        assert sample_invoice.line_items[0].price.amount == Decimal("499.90")
