"""UN/CEFACT CII CrossIndustryInvoice reader."""

from datetime import date

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
from ..mappings import cii
from ..mappings.base import Locator
from ..utils.formatting import parse_cii_date
from .base import BaseReader, parse_xml


class CIIReader(BaseReader):
    """
    Read CII CrossIndustryInvoice XML into a BillingDocument.

    CII uses one root element for every variant; the document type is taken
    from ``ExchangedDocument/TypeCode`` alone.
    """

    namespaces = cii.NS

    @property
    def format_name(self) -> str:
        return "UN/CEFACT CII D16B"

    def read(self, xml: str | bytes) -> BillingDocument:
        """
        Parse a CII CrossIndustryInvoice.

        Raises:
            MalformedDocumentError: If the XML is not well-formed
            UnsupportedVariantError: For a foreign root or a missing/unknown type code
            InvalidDateFormatError: For a date without format code 102
            InvalidDecimalError: For an unparsable numeric field
        """
        root = parse_xml(xml)
        qname = etree.QName(root)
        if qname.localname != cii.ROOT or qname.namespace != cii.RSM_NS:
            raise UnsupportedVariantError(f"Not a CII CrossIndustryInvoice: root element {root.tag!r}")
        return self._build_document(root)

    def _type_code(self, root: etree._Element) -> DocumentType:
        code = self._text(root, cii.HEADER["type_code"])
        if code is None:
            raise UnsupportedVariantError("CII document carries no TypeCode")
        try:
            return DocumentType(code.strip())
        except ValueError:
            raise UnsupportedVariantError(f"Unknown document type code {code!r}") from None

    def _date(self, context: etree._Element | None, locator: Locator) -> date | None:
        node = self._node(context, locator)
        if node is None:
            return None
        return parse_cii_date(node.text or "", node.get(cii.DATE_FORMAT_ATTRIBUTE))

    def _build_document(self, root: etree._Element) -> BillingDocument:
        header = cii.HEADER
        agreement = self._node(root, cii.AGREEMENT)
        delivery = self._node(root, cii.DELIVERY)
        settlement = self._node(root, cii.SETTLEMENT)
        currency_code = self._text(settlement, cii.SETTLEMENT_FIELDS["currency_code"])

        return BillingDocument(
            number=self._text(root, header["number"]),
            issue_date=self._date(root, header["issue_date"]),
            due_date=self._date(settlement, cii.PAYMENT_TERMS["due_date"]),
            type_code=self._type_code(root),
            currency_code=currency_code,
            buyer_reference=self._text(agreement, cii.AGREEMENT_FIELDS["buyer_reference"]),
            customization_id=self._text(root, header["customization_id"]),
            profile_id=self._text(root, header["profile_id"]),
            note=self._text(root, header["note"]),
            seller=self._build_party(self._node(agreement, cii.SELLER)),
            buyer=self._build_party(self._node(agreement, cii.BUYER)),
            delivery_date=self._date(delivery, cii.DELIVERY_FIELDS["delivery_date"]),
            line_items=[self._build_line_item(node) for node in self._nodes(root, cii.INVOICE_LINE)],
            allowance_charges=self._build_allowance_charges(settlement),
            tax_breakdown=self._build_tax_breakdown(settlement, currency_code),
            monetary_totals=self._build_monetary_totals(self._node(settlement, cii.MONETARY_TOTAL)),
            payment_instructions=self._build_payment_instructions(settlement),
        )

    def _build_party(self, node: etree._Element | None) -> TradeParty | None:
        if node is None:
            return None

        return TradeParty(
            **{field: self._text(node, loc) for field, loc in cii.PARTY.items()},
            postal_address=self._build_postal_address(self._node(node, cii.POSTAL_ADDRESS)),
            contact=self._build_contact(self._node(node, cii.CONTACT)),
        )

    def _build_postal_address(self, node: etree._Element | None) -> PostalAddress | None:
        if node is None:
            return None
        return PostalAddress(**{field: self._text(node, loc) for field, loc in cii.ADDRESS.items()})

    def _build_contact(self, node: etree._Element | None) -> Contact | None:
        if node is None:
            return None
        return Contact(**{field: self._text(node, loc) for field, loc in cii.CONTACT_FIELDS.items()})

    def _build_payment_instructions(self, settlement: etree._Element | None) -> PaymentInstructions | None:
        means_node = self._node(settlement, cii.PAYMENT_MEANS)
        if means_node is None:
            return None

        fields = cii.PAYMENT
        # No card network element exists in CII; card_network_id stays absent
        return PaymentInstructions(
            payment_means_code=self._text(means_node, fields["payment_means_code"]),
            payment_id=self._text(settlement, cii.SETTLEMENT_FIELDS["payment_id"]),
            account_id=self._text(means_node, fields["account_id"]),
            card_account_id=self._text(means_node, fields["card_account_id"]),
            card_holder_name=self._text(means_node, fields["card_holder_name"]),
            debited_account_id=self._text(means_node, fields["debited_account_id"]),
            creditor_reference_id=self._text(settlement, cii.SETTLEMENT_FIELDS["creditor_reference_id"]),
            mandate_reference=self._text(settlement, cii.PAYMENT_TERMS["mandate_reference"]),
            note=self._text(settlement, cii.PAYMENT_TERMS["note"]),
        )

    def _build_tax_breakdown(
        self, settlement: etree._Element | None, document_currency: str | None
    ) -> TaxBreakdown | None:
        if settlement is None:
            return None

        totals = self._node(settlement, cii.MONETARY_TOTAL)
        tax_total = self._decimal(totals, cii.TOTALS["tax_total_amount"])
        subtotal_nodes = self._nodes(settlement, cii.TAX_SUBTOTAL)
        if tax_total is None and not subtotal_nodes:
            return None

        # Subtotal amounts carry no currency of their own in CII
        currency = self._text(totals, cii.TOTALS["tax_currency_code"]) or document_currency
        fields = cii.TAX
        return TaxBreakdown(
            tax_amount=tax_total,
            currency_code=currency,
            subtotals=[
                TaxSubtotal(
                    taxable_amount=self._decimal(node, fields["taxable_amount"]),
                    tax_amount=self._decimal(node, fields["tax_amount"]),
                    category_code=self._text(node, fields["category_code"]),
                    percent=self._decimal(node, fields["percent"]),
                    currency_code=currency,
                    exemption_reason=self._text(node, fields["exemption_reason"]),
                    exemption_reason_code=self._text(node, fields["exemption_reason_code"]),
                )
                for node in subtotal_nodes
            ],
        )

    def _build_monetary_totals(self, node: etree._Element | None) -> MonetaryTotals | None:
        if node is None:
            return None

        fields = cii.TOTALS
        return MonetaryTotals(
            line_extension_amount=self._decimal(node, fields["line_extension_amount"]),
            tax_exclusive_amount=self._decimal(node, fields["tax_exclusive_amount"]),
            tax_inclusive_amount=self._decimal(node, fields["tax_inclusive_amount"]),
            payable_amount=self._decimal(node, fields["payable_amount"]),
            prepaid_amount=self._decimal(node, fields["prepaid_amount"]),
            payable_rounding_amount=self._decimal(node, fields["payable_rounding_amount"]),
            allowance_total_amount=self._decimal(node, fields["allowance_total_amount"]),
            charge_total_amount=self._decimal(node, fields["charge_total_amount"]),
        )

    def _build_allowance_charges(self, settlement: etree._Element | None) -> list[AllowanceCharge]:
        if settlement is None:
            return []

        fields = cii.ALLOWANCE_CHARGE_FIELDS
        charges = []
        for node in self._nodes(settlement, cii.ALLOWANCE_CHARGE):
            indicator = self._text(node, fields["charge_indicator"])
            charges.append(
                AllowanceCharge(
                    charge_indicator=(indicator or "").strip() == "true",
                    reason=self._text(node, fields["reason"]),
                    reason_code=self._text(node, fields["reason_code"]),
                    amount=self._decimal(node, fields["amount"]),
                    base_amount=self._decimal(node, fields["base_amount"]),
                    multiplier_factor=self._decimal(node, fields["multiplier_factor"]),
                    tax_category_code=self._text(node, fields["tax_category_code"]),
                    tax_percent=self._decimal(node, fields["tax_percent"]),
                )
            )
        return charges

    def _build_line_item(self, node: etree._Element) -> LineItem:
        fields = cii.LINE
        return LineItem(
            id=self._text(node, fields["id"]),
            invoiced_quantity=self._decimal(node, fields["invoiced_quantity"]),
            unit_code=self._text(node, fields["unit_code"]),
            line_extension_amount=self._decimal(node, fields["line_extension_amount"]),
            note=self._text(node, fields["note"]),
            item=self._build_item(self._node(node, cii.ITEM), self._node(node, cii.ITEM_TAX)),
            price=self._build_price(self._node(node, cii.PRICE)),
        )

    def _build_item(self, node: etree._Element | None, tax_node: etree._Element | None) -> Item | None:
        if node is None:
            return None

        fields = cii.ITEM_FIELDS
        return Item(
            name=self._text(node, fields["name"]),
            description=self._text(node, fields["description"]),
            sellers_identifier=self._text(node, fields["sellers_identifier"]),
            tax_category=self._text(tax_node, cii.ITEM_TAX_FIELDS["tax_category"]),
            tax_percent=self._decimal(tax_node, cii.ITEM_TAX_FIELDS["tax_percent"]),
            classification_codes=[
                ItemClassification(
                    code=code_node.text or "",
                    list_id=self._text(code_node, cii.CLASSIFICATION_FIELDS["list_id"]),
                    list_version_id=self._text(code_node, cii.CLASSIFICATION_FIELDS["list_version_id"]),
                )
                for code_node in self._nodes(node, cii.CLASSIFICATION)
            ],
        )

    def _build_price(self, node: etree._Element | None) -> Price | None:
        if node is None:
            return None

        fields = cii.PRICE_FIELDS
        return Price(
            amount=self._decimal(node, fields["amount"]),
            base_quantity=self._decimal(node, fields["base_quantity"]),
            base_quantity_unit_code=self._text(node, fields["base_quantity_unit_code"]),
        )
