"""Pydantic models for the canonical billing document.

Every reader produces a :class:`BillingDocument` and every writer consumes
one. Field descriptions carry the EN 16931 business term each field holds.

Required fields must be passed at construction but accept ``None``: a reader
stores ``None`` when a structurally valid document omits the element, and
writers omit ``None`` values again on the way out.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ..utils.formatting import to_decimal


def _exact(value):
    if value is None:
        return None
    return to_decimal(value)


# Accepts Decimal, int or a decimal string; floats are rejected.
ExactDecimal = Annotated[Decimal, BeforeValidator(_exact)]


class CanonicalModel(BaseModel):
    """Base for canonical entities; assignments go through the same validators as construction."""

    model_config = ConfigDict(validate_assignment=True)


class DocumentType(str, Enum):
    """Document variant, keyed by its UNTDID 1001 type code (BT-3)."""

    INVOICE = "380"
    CREDIT_NOTE = "381"
    CORRECTED_INVOICE = "384"
    PREPAYMENT_INVOICE = "386"
    SELF_BILLED_INVOICE = "389"
    PARTIAL_INVOICE = "326"


class PostalAddress(CanonicalModel):
    """Postal address (BG-5 / BG-8)."""

    country_code: str | None = Field(..., description="BT-40/BT-55 Country code (ISO 3166-1 alpha-2)")
    street_name: str | None = Field(default=None, description="BT-35/BT-50")
    city_name: str | None = Field(default=None, description="BT-37/BT-52")
    postal_zone: str | None = Field(default=None, description="BT-38/BT-53")


class Contact(CanonicalModel):
    """Contact information (BG-6 / BG-9)."""

    name: str | None = Field(default=None, description="BT-41/BT-56")
    telephone: str | None = Field(default=None, description="BT-42/BT-57")
    email: str | None = Field(default=None, description="BT-43/BT-58")


class TradeParty(CanonicalModel):
    """Seller (BG-4) or buyer (BG-7)."""

    name: str | None = Field(..., description="BT-27/BT-44 Legal name")
    trading_name: str | None = Field(default=None, description="BT-28/BT-45")
    identifier: str | None = Field(default=None, description="BT-29/BT-46")
    legal_registration_id: str | None = Field(default=None, description="BT-30/BT-47")
    legal_form: str | None = Field(default=None, description="BT-33 Company legal form")
    vat_identifier: str | None = Field(default=None, description="BT-31/BT-48")
    electronic_address: str | None = Field(default=None, description="BT-34/BT-49")
    electronic_address_scheme: str | None = Field(
        default=None,
        description="BT-34-1/BT-49-1, only meaningful together with electronic_address",
    )
    postal_address: PostalAddress | None = None
    contact: Contact | None = None


class ItemClassification(CanonicalModel):
    """Item classification identifier (BT-158)."""

    code: str | None = Field(...)
    list_id: str | None = Field(default=None, description="BT-158-1 Scheme identifier")
    list_version_id: str | None = Field(default=None, description="BT-158-2 Scheme version")


class Item(CanonicalModel):
    """Item information (BG-31)."""

    name: str | None = Field(..., description="BT-153 Item name")
    description: str | None = Field(default=None, description="BT-154")
    sellers_identifier: str | None = Field(default=None, description="BT-155")
    tax_category: str | None = Field(default=None, description="BT-151 VAT category code")
    tax_percent: ExactDecimal | None = Field(default=None, description="BT-152 VAT rate")
    classification_codes: list[ItemClassification] = Field(default_factory=list)


class Price(CanonicalModel):
    """Price details (BG-29)."""

    amount: ExactDecimal | None = Field(..., description="BT-146 Item net price")
    base_quantity: ExactDecimal | None = Field(default=None, description="BT-149")
    base_quantity_unit_code: str | None = Field(default=None, description="BT-150")


class LineItem(CanonicalModel):
    """Invoice line (BG-25)."""

    id: str | None = Field(..., description="BT-126 Line identifier")
    invoiced_quantity: ExactDecimal | None = Field(..., description="BT-129")
    unit_code: str | None = Field(..., description="BT-130 UN/ECE Rec 20 unit code")
    line_extension_amount: ExactDecimal | None = Field(..., description="BT-131 Line net amount")
    note: str | None = Field(default=None, description="BT-127")
    item: Item | None = None
    price: Price | None = None


class TaxSubtotal(CanonicalModel):
    """One VAT category breakdown (BG-23 entry)."""

    taxable_amount: ExactDecimal | None = Field(..., description="BT-116")
    tax_amount: ExactDecimal | None = Field(..., description="BT-117")
    category_code: str | None = Field(..., description="BT-118")
    currency_code: str | None = Field(...)
    percent: ExactDecimal | None = Field(default=None, description="BT-119")
    exemption_reason: str | None = Field(default=None, description="BT-120")
    exemption_reason_code: str | None = Field(default=None, description="BT-121")


class TaxBreakdown(CanonicalModel):
    """VAT breakdown (BG-23) with the document total VAT (BT-110)."""

    tax_amount: ExactDecimal | None = Field(..., description="BT-110 Invoice total VAT amount")
    currency_code: str | None = Field(...)
    subtotals: list[TaxSubtotal] = Field(default_factory=list)


class MonetaryTotals(CanonicalModel):
    """Document totals (BG-22). Values are passed through, never computed."""

    line_extension_amount: ExactDecimal | None = Field(..., description="BT-106")
    tax_exclusive_amount: ExactDecimal | None = Field(..., description="BT-109")
    tax_inclusive_amount: ExactDecimal | None = Field(..., description="BT-112")
    payable_amount: ExactDecimal | None = Field(..., description="BT-115")
    prepaid_amount: ExactDecimal | None = Field(default=None, description="BT-113")
    payable_rounding_amount: ExactDecimal | None = Field(default=None, description="BT-114")
    allowance_total_amount: ExactDecimal | None = Field(default=None, description="BT-107")
    charge_total_amount: ExactDecimal | None = Field(default=None, description="BT-108")


class PaymentInstructions(CanonicalModel):
    """
    Payment instructions (BG-16).

    Includes the payment card group (BG-18) and the direct debit group
    (BG-19). ``card_network_id`` exists only in UBL; it stays ``None`` when a
    document came from CII.
    """

    payment_means_code: str | None = Field(..., description="BT-81 UNTDID 4461 code")
    payment_id: str | None = Field(default=None, description="BT-83 Remittance information")
    account_id: str | None = Field(default=None, description="BT-84 Payment account (IBAN)")
    note: str | None = Field(default=None, description="BT-20 Payment terms")
    card_account_id: str | None = Field(default=None, description="BT-87")
    card_holder_name: str | None = Field(default=None, description="BT-88")
    card_network_id: str | None = Field(default=None)
    mandate_reference: str | None = Field(default=None, description="BT-89")
    debited_account_id: str | None = Field(default=None, description="BT-91")
    creditor_reference_id: str | None = Field(default=None, description="BT-90")


class AllowanceCharge(CanonicalModel):
    """Document level allowance (BG-20) or charge (BG-21)."""

    charge_indicator: bool = Field(..., description="True for a charge, False for an allowance")
    amount: ExactDecimal | None = Field(..., description="BT-92/BT-99")
    reason: str | None = Field(default=None, description="BT-97/BT-104")
    reason_code: str | None = Field(default=None, description="BT-98/BT-105")
    base_amount: ExactDecimal | None = Field(default=None, description="BT-93/BT-100")
    multiplier_factor: ExactDecimal | None = Field(default=None, description="BT-94/BT-101")
    tax_category_code: str | None = Field(default=None, description="BT-95/BT-102")
    tax_percent: ExactDecimal | None = Field(default=None, description="BT-96/BT-103")
    currency_code: str | None = None

    @property
    def is_charge(self) -> bool:
        return self.charge_indicator

    @property
    def is_allowance(self) -> bool:
        return not self.charge_indicator


class BillingDocument(CanonicalModel):
    """
    The canonical billing document (BG-0).

    One entity covers every variant; ``type_code`` tells an invoice from a
    credit note, a corrected invoice and so on. The document owns all nested
    entities.
    """

    number: str | None = Field(..., description="BT-1 Invoice number")
    issue_date: date | None = Field(..., description="BT-2 Issue date")
    type_code: DocumentType = Field(default=DocumentType.INVOICE, description="BT-3")
    currency_code: str | None = Field(default="EUR", description="BT-5")
    due_date: date | None = Field(default=None, description="BT-9")
    buyer_reference: str | None = Field(default=None, description="BT-10")
    customization_id: str | None = Field(default=None, description="BT-24 Specification identifier")
    profile_id: str | None = Field(default=None, description="BT-23 Business process type")
    note: str | None = Field(default=None, description="BT-22")
    seller: TradeParty | None = None
    buyer: TradeParty | None = None
    delivery_date: date | None = Field(default=None, description="BT-72 Actual delivery date")
    line_items: list[LineItem] = Field(default_factory=list)
    allowance_charges: list[AllowanceCharge] = Field(default_factory=list)
    tax_breakdown: TaxBreakdown | None = None
    monetary_totals: MonetaryTotals | None = None
    payment_instructions: PaymentInstructions | None = None

    @property
    def is_credit_note(self) -> bool:
        return self.type_code == DocumentType.CREDIT_NOTE
