"""UBL 2.1 Invoice / CreditNote reader."""

from lxml import etree

from ..core.exceptions import UnsupportedVariantError
from ..core.models import (
    AllowanceCharge,
    BillingDocument,
    Contact,
    DocumentType,
    Item,
    ItemClassification,
    LineItem,
    MonetaryTotals,
    PaymentInstructions,
    PostalAddress,
    Price,
    TaxBreakdown,
    TaxSubtotal,
    TradeParty,
)
from ..mappings import ubl
from ..utils.formatting import parse_iso_date
from .base import BaseReader, parse_xml

# Root element → namespace it must live in and the variant it implies
ROOTS = {
    ubl.INVOICE_ROOT: (ubl.INVOICE_NS, DocumentType.INVOICE),
    ubl.CREDIT_NOTE_ROOT: (ubl.CREDIT_NOTE_NS, DocumentType.CREDIT_NOTE),
}


class UBLReader(BaseReader):
    """Read UBL 2.1 Invoice and Credit Note XML into a BillingDocument."""

    namespaces = ubl.NS

    @property
    def format_name(self) -> str:
        return "UBL 2.1"

    def read(self, xml: str | bytes) -> BillingDocument:
        """
        Parse a UBL 2.1 Invoice or Credit Note.

        The root element decides which element names the rest of the
        document uses (``InvoiceLine`` vs ``CreditNoteLine`` and so on).

        Raises:
            MalformedDocumentError: If the XML is not well-formed
            UnsupportedVariantError: For an unknown root or type code
            InvalidDateFormatError: For a date that is not ISO-8601
            InvalidDecimalError: For an unparsable numeric field
        """
        root = parse_xml(xml)
        root_name = self._root_name(root)
        return self._build_document(root, ubl.VARIANT_ELEMENTS[root_name], ROOTS[root_name][1])

    def _root_name(self, root: etree._Element) -> str:
        qname = etree.QName(root)
        expected = ROOTS.get(qname.localname)
        if expected is None or expected[0] != qname.namespace:
            raise UnsupportedVariantError(
                f"Not a UBL Invoice or CreditNote: root element {root.tag!r}"
            )
        return qname.localname

    def _type_code(self, root: etree._Element, variant: dict, root_type: DocumentType) -> DocumentType:
        code = self._text(root, variant["type_code"])
        if code is None:
            return root_type
        try:
            type_code = DocumentType(code.strip())
        except ValueError:
            raise UnsupportedVariantError(f"Unknown document type code {code!r}") from None

        # A CreditNote root carries exactly the credit note variant
        if (root_type == DocumentType.CREDIT_NOTE) != (type_code == DocumentType.CREDIT_NOTE):
            raise UnsupportedVariantError(
                f"Type code {type_code.value} does not match root element for {root_type.name}"
            )
        return type_code

    def _build_document(self, root: etree._Element, variant: dict, root_type: DocumentType) -> BillingDocument:
        header = ubl.HEADER
        seller_node = self._node(root, ubl.SELLER)

        due_date = parse_iso_date(self._text(root, header["due_date"]))
        if due_date is None and root_type == DocumentType.CREDIT_NOTE:
            means_node = self._node(root, ubl.PAYMENT_MEANS)
            due_date = parse_iso_date(self._text(means_node, ubl.PAYMENT["payment_due_date"]))

        return BillingDocument(
            number=self._text(root, header["number"]),
            issue_date=parse_iso_date(self._text(root, header["issue_date"])),
            due_date=due_date,
            type_code=self._type_code(root, variant, root_type),
            currency_code=self._text(root, header["currency_code"]),
            buyer_reference=self._text(root, header["buyer_reference"]),
            customization_id=self._text(root, header["customization_id"]),
            profile_id=self._text(root, header["profile_id"]),
            note=self._text(root, header["note"]),
            seller=self._build_party(seller_node),
            buyer=self._build_party(self._node(root, ubl.BUYER)),
            delivery_date=parse_iso_date(self._text(root, header["delivery_date"])),
            line_items=[self._build_line_item(node, variant) for node in self._nodes(root, variant["line"])],
            allowance_charges=[
                self._build_allowance_charge(node) for node in self._nodes(root, ubl.ALLOWANCE_CHARGE)
            ],
            tax_breakdown=self._build_tax_breakdown(self._node(root, ubl.TAX_TOTAL)),
            monetary_totals=self._build_monetary_totals(self._node(root, ubl.MONETARY_TOTAL)),
            payment_instructions=self._build_payment_instructions(root, seller_node),
        )

    def _build_party(self, node: etree._Element | None) -> TradeParty | None:
        if node is None:
            return None

        fields = ubl.PARTY
        address_node = self._node(node, ubl.POSTAL_ADDRESS)
        contact_node = self._node(node, ubl.CONTACT)

        return TradeParty(
            name=self._text(node, fields["name"]),
            trading_name=self._text(node, fields["trading_name"]),
            identifier=self._text(node, fields["identifier"]),
            legal_registration_id=self._text(node, fields["legal_registration_id"]),
            legal_form=self._text(node, fields["legal_form"]),
            vat_identifier=self._text(node, fields["vat_identifier"]),
            electronic_address=self._text(node, fields["electronic_address"]),
            electronic_address_scheme=self._text(node, fields["electronic_address_scheme"]),
            postal_address=self._build_postal_address(address_node),
            contact=self._build_contact(contact_node),
        )

    def _build_postal_address(self, node: etree._Element | None) -> PostalAddress | None:
        if node is None:
            return None
        return PostalAddress(**{field: self._text(node, loc) for field, loc in ubl.ADDRESS.items()})

    def _build_contact(self, node: etree._Element | None) -> Contact | None:
        if node is None:
            return None
        return Contact(**{field: self._text(node, loc) for field, loc in ubl.CONTACT_FIELDS.items()})

    def _build_payment_instructions(
        self, root: etree._Element, seller_node: etree._Element | None
    ) -> PaymentInstructions | None:
        means_node = self._node(root, ubl.PAYMENT_MEANS)
        if means_node is None:
            return None

        fields = ubl.PAYMENT
        return PaymentInstructions(
            payment_means_code=self._text(means_node, fields["payment_means_code"]),
            payment_id=self._text(means_node, fields["payment_id"]),
            account_id=self._text(means_node, fields["account_id"]),
            card_account_id=self._text(means_node, fields["card_account_id"]),
            card_network_id=self._text(means_node, fields["card_network_id"]),
            card_holder_name=self._text(means_node, fields["card_holder_name"]),
            mandate_reference=self._text(means_node, fields["mandate_reference"]),
            debited_account_id=self._text(means_node, fields["debited_account_id"]),
            creditor_reference_id=self._text(seller_node, ubl.CREDITOR_REFERENCE),
            note=self._text(root, ubl.PAYMENT_TERMS_NOTE),
        )

    def _build_tax_breakdown(self, node: etree._Element | None) -> TaxBreakdown | None:
        if node is None:
            return None

        return TaxBreakdown(
            tax_amount=self._decimal(node, ubl.TAX_TOTAL_FIELDS["tax_amount"]),
            currency_code=self._text(node, ubl.TAX_TOTAL_FIELDS["currency_code"]),
            subtotals=[self._build_tax_subtotal(sub) for sub in self._nodes(node, ubl.TAX_SUBTOTAL)],
        )

    def _build_tax_subtotal(self, node: etree._Element) -> TaxSubtotal:
        fields = ubl.TAX
        return TaxSubtotal(
            taxable_amount=self._decimal(node, fields["taxable_amount"]),
            tax_amount=self._decimal(node, fields["tax_amount"]),
            category_code=self._text(node, fields["category_code"]),
            percent=self._decimal(node, fields["percent"]),
            currency_code=self._text(node, fields["currency_code"]),
            exemption_reason=self._text(node, fields["exemption_reason"]),
            exemption_reason_code=self._text(node, fields["exemption_reason_code"]),
        )

    def _build_monetary_totals(self, node: etree._Element | None) -> MonetaryTotals | None:
        if node is None:
            return None
        return MonetaryTotals(**{field: self._decimal(node, loc) for field, loc in ubl.TOTALS.items()})

    def _build_allowance_charge(self, node: etree._Element) -> AllowanceCharge:
        fields = ubl.ALLOWANCE_CHARGE_FIELDS
        indicator = self._text(node, fields["charge_indicator"])
        return AllowanceCharge(
            charge_indicator=(indicator or "").strip() == "true",
            reason=self._text(node, fields["reason"]),
            reason_code=self._text(node, fields["reason_code"]),
            amount=self._decimal(node, fields["amount"]),
            base_amount=self._decimal(node, fields["base_amount"]),
            multiplier_factor=self._decimal(node, fields["multiplier_factor"]),
            tax_category_code=self._text(node, fields["tax_category_code"]),
            tax_percent=self._decimal(node, fields["tax_percent"]),
            currency_code=self._text(node, fields["currency_code"]),
        )

    def _build_line_item(self, node: etree._Element, variant: dict) -> LineItem:
        return LineItem(
            id=self._text(node, ubl.LINE["id"]),
            invoiced_quantity=self._decimal(node, variant["quantity"]),
            unit_code=self._text(node, variant["unit_code"]),
            line_extension_amount=self._decimal(node, ubl.LINE["line_extension_amount"]),
            note=self._text(node, ubl.LINE["note"]),
            item=self._build_item(self._node(node, ubl.ITEM)),
            price=self._build_price(self._node(node, ubl.PRICE)),
        )

    def _build_item(self, node: etree._Element | None) -> Item | None:
        if node is None:
            return None

        fields = ubl.ITEM_FIELDS
        return Item(
            name=self._text(node, fields["name"]),
            description=self._text(node, fields["description"]),
            sellers_identifier=self._text(node, fields["sellers_identifier"]),
            tax_category=self._text(node, fields["tax_category"]),
            tax_percent=self._decimal(node, fields["tax_percent"]),
            classification_codes=[
                ItemClassification(
                    code=code_node.text or "",
                    list_id=self._text(code_node, ubl.CLASSIFICATION_FIELDS["list_id"]),
                    list_version_id=self._text(code_node, ubl.CLASSIFICATION_FIELDS["list_version_id"]),
                )
                for code_node in self._nodes(node, ubl.CLASSIFICATION)
            ],
        )

    def _build_price(self, node: etree._Element | None) -> Price | None:
        if node is None:
            return None
        fields = ubl.PRICE_FIELDS
        return Price(
            amount=self._decimal(node, fields["amount"]),
            base_quantity=self._decimal(node, fields["base_quantity"]),
            base_quantity_unit_code=self._text(node, fields["base_quantity_unit_code"]),
        )
