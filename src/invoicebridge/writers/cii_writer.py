"""UN/CEFACT CII CrossIndustryInvoice writer."""

from datetime import date

from lxml import etree

from ..core.models import (
    AllowanceCharge,
    BillingDocument,
    Contact,
    Item,
    LineItem,
    PaymentInstructions,
    PostalAddress,
    TaxSubtotal,
    TradeParty,
)
from ..mappings import cii
from ..mappings.base import Locator
from ..utils.formatting import CII_DATE_FORMAT_CODE, format_cii_date
from .base import BaseWriter


class CIIWriter(BaseWriter):
    """Writer for CII D16B CrossIndustryInvoice documents."""

    namespaces = cii.NS

    @property
    def format_name(self) -> str:
        return "UN/CEFACT CII D16B"

    def write(self, document: BillingDocument) -> str:
        root = etree.Element(f"{{{cii.RSM_NS}}}{cii.ROOT}", nsmap=cii.NS)

        self._build_document_context(root, document)
        self._build_exchanged_document(root, document)

        self._append(root, cii.TRANSACTION)
        for line in document.line_items:
            self._build_line(root, line)
        self._build_agreement(self._append(root, cii.AGREEMENT), document)
        self._build_delivery(self._append(root, cii.DELIVERY), document)
        self._build_settlement(self._append(root, cii.SETTLEMENT), document)

        return self._serialize(root)

    def _put_date(self, parent: etree._Element, locator: Locator, value: date | None) -> None:
        if value is None:
            return
        self._put(
            parent,
            locator,
            format_cii_date(value),
            **{cii.DATE_FORMAT_ATTRIBUTE: CII_DATE_FORMAT_CODE},
        )

    def _build_document_context(self, root: etree._Element, doc: BillingDocument) -> None:
        self._append(root, cii.CONTEXT)
        self._put(root, cii.HEADER["profile_id"], doc.profile_id)
        self._put(root, cii.HEADER["customization_id"], doc.customization_id)

    def _build_exchanged_document(self, root: etree._Element, doc: BillingDocument) -> None:
        self._append(root, cii.DOCUMENT)
        self._put(root, cii.HEADER["number"], doc.number)
        self._put(root, cii.HEADER["type_code"], doc.type_code.value)
        self._put_date(root, cii.HEADER["issue_date"], doc.issue_date)
        self._put(root, cii.HEADER["note"], doc.note)

    def _build_agreement(self, node: etree._Element, doc: BillingDocument) -> None:
        self._put(node, cii.AGREEMENT_FIELDS["buyer_reference"], doc.buyer_reference)
        if doc.seller is not None:
            self._build_party(self._append(node, cii.SELLER), doc.seller)
        if doc.buyer is not None:
            self._build_party(self._append(node, cii.BUYER), doc.buyer)

    def _build_party(self, node: etree._Element, party: TradeParty) -> None:
        fields = cii.PARTY
        self._put(node, fields["identifier"], party.identifier)
        self._put(node, fields["name"], party.name)
        self._put(node, fields["legal_form"], party.legal_form)
        self._put(node, fields["legal_registration_id"], party.legal_registration_id)
        self._put(node, fields["trading_name"], party.trading_name)

        if party.contact is not None:
            self._build_contact(self._append(node, cii.CONTACT), party.contact)
        if party.postal_address is not None:
            self._build_postal_address(self._append(node, cii.POSTAL_ADDRESS), party.postal_address)

        self._put(
            node,
            fields["electronic_address"],
            party.electronic_address,
            schemeID=party.electronic_address_scheme,
        )
        self._put(node, fields["vat_identifier"], party.vat_identifier, schemeID=cii.VAT_SCHEME)

    def _build_postal_address(self, node: etree._Element, address: PostalAddress) -> None:
        for field, locator in cii.ADDRESS.items():
            self._put(node, locator, getattr(address, field))

    def _build_contact(self, node: etree._Element, contact: Contact) -> None:
        for field, locator in cii.CONTACT_FIELDS.items():
            self._put(node, locator, getattr(contact, field))

    def _build_delivery(self, node: etree._Element, doc: BillingDocument) -> None:
        self._put_date(node, cii.DELIVERY_FIELDS["delivery_date"], doc.delivery_date)

    def _build_settlement(self, node: etree._Element, doc: BillingDocument) -> None:
        payment = doc.payment_instructions
        fields = cii.SETTLEMENT_FIELDS
        if payment is not None:
            self._put(node, fields["creditor_reference_id"], payment.creditor_reference_id)
            self._put(node, fields["payment_id"], payment.payment_id)
        self._put(node, fields["currency_code"], doc.currency_code)

        if payment is not None:
            self._build_payment_means(self._append(node, cii.PAYMENT_MEANS), payment)

        if doc.tax_breakdown is not None:
            for subtotal in doc.tax_breakdown.subtotals:
                self._build_tax_subtotal(self._append(node, cii.TAX_SUBTOTAL), subtotal)

        for allowance_charge in doc.allowance_charges:
            self._build_allowance_charge(self._append(node, cii.ALLOWANCE_CHARGE), allowance_charge)

        terms = cii.PAYMENT_TERMS
        if payment is not None:
            self._put(node, terms["note"], payment.note)
        self._put_date(node, terms["due_date"], doc.due_date)
        if payment is not None:
            self._put(node, terms["mandate_reference"], payment.mandate_reference)

        if doc.monetary_totals is not None:
            self._build_monetary_totals(self._append(node, cii.MONETARY_TOTAL), doc)

    def _build_payment_means(self, node: etree._Element, payment: PaymentInstructions) -> None:
        fields = cii.PAYMENT
        self._put(node, fields["payment_means_code"], payment.payment_means_code)
        if payment.card_account_id is not None:
            self._put(node, fields["card_account_id"], payment.card_account_id)
            self._put(node, fields["card_holder_name"], payment.card_holder_name)
        self._put(node, fields["debited_account_id"], payment.debited_account_id)
        self._put(node, fields["account_id"], payment.account_id)

    def _build_tax_subtotal(self, node: etree._Element, subtotal: TaxSubtotal) -> None:
        fields = cii.TAX
        self._put(node, fields["tax_amount"], self._amount(subtotal.tax_amount))
        self._put(node, fields["type_code"], cii.TAX_TYPE_VAT)
        self._put(node, fields["exemption_reason"], subtotal.exemption_reason)
        self._put(node, fields["taxable_amount"], self._amount(subtotal.taxable_amount))
        self._put(node, fields["category_code"], subtotal.category_code)
        self._put(node, fields["exemption_reason_code"], subtotal.exemption_reason_code)
        self._put(node, fields["percent"], self._number(subtotal.percent))

    def _build_allowance_charge(self, node: etree._Element, allowance_charge: AllowanceCharge) -> None:
        fields = cii.ALLOWANCE_CHARGE_FIELDS
        self._put(node, fields["charge_indicator"], "true" if allowance_charge.charge_indicator else "false")
        self._put(node, fields["multiplier_factor"], self._number(allowance_charge.multiplier_factor))
        self._put(node, fields["base_amount"], self._amount(allowance_charge.base_amount))
        self._put(node, fields["amount"], self._amount(allowance_charge.amount))
        self._put(node, fields["reason_code"], allowance_charge.reason_code)
        self._put(node, fields["reason"], allowance_charge.reason)
        if allowance_charge.tax_category_code is not None:
            self._put(node, fields["tax_type_code"], cii.TAX_TYPE_VAT)
            self._put(node, fields["tax_category_code"], allowance_charge.tax_category_code)
            self._put(node, fields["tax_percent"], self._number(allowance_charge.tax_percent))

    def _build_monetary_totals(self, node: etree._Element, doc: BillingDocument) -> None:
        totals = doc.monetary_totals
        breakdown = doc.tax_breakdown
        for field, locator in cii.TOTALS.items():
            if field == "tax_currency_code":
                continue
            if field == "tax_total_amount":
                if breakdown is not None:
                    self._put(
                        node, locator, self._amount(breakdown.tax_amount),
                        currencyID=breakdown.currency_code,
                    )
                continue
            self._put(node, locator, self._amount(getattr(totals, field)))

    def _build_line(self, root: etree._Element, line: LineItem) -> None:
        node = self._append(root, cii.INVOICE_LINE)

        self._append(node, cii.LINE_DOCUMENT)
        self._put(node, cii.LINE["id"], line.id)
        self._put(node, cii.LINE["note"], line.note)

        if line.item is not None:
            self._build_item(self._append(node, cii.ITEM), line.item)

        self._append(node, cii.LINE_AGREEMENT)
        if line.price is not None:
            price = self._append(node, cii.PRICE)
            self._put(price, cii.PRICE_FIELDS["amount"], self._amount(line.price.amount))
            self._put(
                price,
                cii.PRICE_FIELDS["base_quantity"],
                self._number(line.price.base_quantity),
                unitCode=line.price.base_quantity_unit_code,
            )

        self._append(node, cii.LINE_DELIVERY)
        self._put(
            node,
            cii.LINE["invoiced_quantity"],
            self._number(line.invoiced_quantity),
            unitCode=line.unit_code,
        )

        self._append(node, cii.LINE_SETTLEMENT)
        if line.item is not None and line.item.tax_category is not None:
            tax = self._append(node, cii.ITEM_TAX)
            self._put(tax, cii.ITEM_TAX_FIELDS["type_code"], cii.TAX_TYPE_VAT)
            self._put(tax, cii.ITEM_TAX_FIELDS["tax_category"], line.item.tax_category)
            self._put(tax, cii.ITEM_TAX_FIELDS["tax_percent"], self._number(line.item.tax_percent))
        self._ensure(node, cii.LINE_SUMMATION)
        self._put(node, cii.LINE["line_extension_amount"], self._amount(line.line_extension_amount))

    def _build_item(self, node: etree._Element, item: Item) -> None:
        fields = cii.ITEM_FIELDS
        self._put(node, fields["sellers_identifier"], item.sellers_identifier)
        self._put(node, fields["name"], item.name)
        self._put(node, fields["description"], item.description)
        for classification in item.classification_codes:
            self._put(
                node,
                cii.CLASSIFICATION,
                classification.code,
                reuse=False,
                listID=classification.list_id,
                listVersionID=classification.list_version_id,
            )
