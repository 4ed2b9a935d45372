"""UBL 2.1 Invoice / CreditNote writer."""

from lxml import etree

from ..core.models import (
    AllowanceCharge,
    BillingDocument,
    Contact,
    LineItem,
    PaymentInstructions,
    PostalAddress,
    TaxBreakdown,
    TradeParty,
)
from ..mappings import ubl
from ..utils.formatting import format_iso_date
from .base import BaseWriter


class UBLWriter(BaseWriter):
    """
    Writer for UBL 2.1 Invoice and Credit Note documents.

    Type code 381 produces a ``CreditNote`` root in the CreditNote-2
    namespace; every other type code produces an ``Invoice``.

    A CreditNote has no header ``DueDate``; its due date is written as
    ``PaymentMeans/PaymentDueDate`` and is not written at all when the
    document has no payment instructions.
    """

    namespaces = ubl.NS

    @property
    def format_name(self) -> str:
        return "UBL 2.1"

    def write(self, document: BillingDocument) -> str:
        if document.is_credit_note:
            root_name, root_ns = ubl.CREDIT_NOTE_ROOT, ubl.CREDIT_NOTE_NS
        else:
            root_name, root_ns = ubl.INVOICE_ROOT, ubl.INVOICE_NS
        variant = ubl.VARIANT_ELEMENTS[root_name]

        root = etree.Element(
            f"{{{root_ns}}}{root_name}",
            nsmap={None: root_ns, "cac": ubl.CAC_NS, "cbc": ubl.CBC_NS},
        )
        self._build_header(root, document, variant)

        if document.seller is not None:
            party = self._append(root, ubl.SELLER)
            self._build_party(party, document.seller, document.payment_instructions)
        if document.buyer is not None:
            self._build_party(self._append(root, ubl.BUYER), document.buyer)

        if document.delivery_date is not None:
            self._put(root, ubl.HEADER["delivery_date"], format_iso_date(document.delivery_date))

        if document.payment_instructions is not None:
            self._build_payment(root, document)

        for allowance_charge in document.allowance_charges:
            self._build_allowance_charge(root, allowance_charge, document.currency_code)

        if document.tax_breakdown is not None:
            self._build_tax_total(root, document.tax_breakdown)

        if document.monetary_totals is not None:
            totals = self._append(root, ubl.MONETARY_TOTAL)
            for field, locator in ubl.TOTALS.items():
                value = getattr(document.monetary_totals, field)
                self._put(totals, locator, self._amount(value), currencyID=document.currency_code)

        for line in document.line_items:
            self._build_line(root, line, variant, document.currency_code)

        return self._serialize(root)

    def _build_header(self, root: etree._Element, doc: BillingDocument, variant: dict) -> None:
        header = ubl.HEADER
        self._put(root, header["customization_id"], doc.customization_id)
        self._put(root, header["profile_id"], doc.profile_id)
        self._put(root, header["number"], doc.number)
        if doc.issue_date is not None:
            self._put(root, header["issue_date"], format_iso_date(doc.issue_date))
        # CreditNote has no header DueDate; see _build_payment
        if doc.due_date is not None and not doc.is_credit_note:
            self._put(root, header["due_date"], format_iso_date(doc.due_date))
        self._put(root, variant["type_code"], doc.type_code.value)
        self._put(root, header["note"], doc.note)
        self._put(root, header["currency_code"], doc.currency_code)
        self._put(root, header["buyer_reference"], doc.buyer_reference)

    def _build_party(
        self,
        node: etree._Element,
        party: TradeParty,
        payment: PaymentInstructions | None = None,
    ) -> None:
        fields = ubl.PARTY
        self._put(
            node,
            fields["electronic_address"],
            party.electronic_address,
            schemeID=party.electronic_address_scheme,
        )
        self._put(node, fields["identifier"], party.identifier)
        if payment is not None:
            # SEPA creditor reference gets its own PartyIdentification
            self._put(
                node,
                ubl.CREDITOR_REFERENCE,
                payment.creditor_reference_id,
                reuse=False,
                schemeID=ubl.SEPA_SCHEME,
            )
        self._put(node, fields["trading_name"], party.trading_name)

        if party.postal_address is not None:
            self._build_postal_address(self._append(node, ubl.POSTAL_ADDRESS), party.postal_address)

        if party.vat_identifier is not None:
            self._put(node, fields["vat_identifier"], party.vat_identifier)
            self._put(node, fields["vat_tax_scheme"], ubl.TAX_SCHEME_VAT)

        self._ensure(node, ubl.PARTY_LEGAL_ENTITY)
        self._put(node, fields["name"], party.name)
        self._put(node, fields["legal_registration_id"], party.legal_registration_id)
        self._put(node, fields["legal_form"], party.legal_form)

        if party.contact is not None:
            self._build_contact(self._append(node, ubl.CONTACT), party.contact)

    def _build_postal_address(self, node: etree._Element, address: PostalAddress) -> None:
        for field, locator in ubl.ADDRESS.items():
            self._put(node, locator, getattr(address, field))

    def _build_contact(self, node: etree._Element, contact: Contact) -> None:
        for field, locator in ubl.CONTACT_FIELDS.items():
            self._put(node, locator, getattr(contact, field))

    def _build_payment(self, root: etree._Element, doc: BillingDocument) -> None:
        payment = doc.payment_instructions
        fields = ubl.PAYMENT
        means = self._append(root, ubl.PAYMENT_MEANS)

        self._put(means, fields["payment_means_code"], payment.payment_means_code)
        if doc.is_credit_note and doc.due_date is not None:
            self._put(means, fields["payment_due_date"], format_iso_date(doc.due_date))
        self._put(means, fields["payment_id"], payment.payment_id)

        if payment.card_account_id is not None:
            self._put(means, fields["card_account_id"], payment.card_account_id)
            self._put(means, fields["card_network_id"], payment.card_network_id)
            self._put(means, fields["card_holder_name"], payment.card_holder_name)

        self._put(means, fields["account_id"], payment.account_id)

        if payment.mandate_reference is not None or payment.debited_account_id is not None:
            self._put(means, fields["mandate_reference"], payment.mandate_reference)
            self._put(means, fields["debited_account_id"], payment.debited_account_id)

        self._put(root, ubl.PAYMENT_TERMS_NOTE, payment.note)

    def _build_allowance_charge(
        self, root: etree._Element, allowance_charge: AllowanceCharge, document_currency: str | None
    ) -> None:
        fields = ubl.ALLOWANCE_CHARGE_FIELDS
        currency = allowance_charge.currency_code or document_currency
        node = self._append(root, ubl.ALLOWANCE_CHARGE)

        self._put(node, fields["charge_indicator"], "true" if allowance_charge.charge_indicator else "false")
        self._put(node, fields["reason_code"], allowance_charge.reason_code)
        self._put(node, fields["reason"], allowance_charge.reason)
        self._put(node, fields["multiplier_factor"], self._number(allowance_charge.multiplier_factor))
        self._put(node, fields["amount"], self._amount(allowance_charge.amount), currencyID=currency)
        self._put(node, fields["base_amount"], self._amount(allowance_charge.base_amount), currencyID=currency)
        if allowance_charge.tax_category_code is not None:
            self._put(node, fields["tax_category_code"], allowance_charge.tax_category_code)
            self._put(node, fields["tax_percent"], self._number(allowance_charge.tax_percent))
            self._put(node, fields["tax_scheme"], ubl.TAX_SCHEME_VAT)

    def _build_tax_total(self, root: etree._Element, breakdown: TaxBreakdown) -> None:
        node = self._append(root, ubl.TAX_TOTAL)
        self._put(
            node,
            ubl.TAX_TOTAL_FIELDS["tax_amount"],
            self._amount(breakdown.tax_amount),
            currencyID=breakdown.currency_code,
        )

        fields = ubl.TAX
        for subtotal in breakdown.subtotals:
            sub = self._append(node, ubl.TAX_SUBTOTAL)
            self._put(
                sub, fields["taxable_amount"], self._amount(subtotal.taxable_amount),
                currencyID=subtotal.currency_code,
            )
            self._put(
                sub, fields["tax_amount"], self._amount(subtotal.tax_amount),
                currencyID=subtotal.currency_code,
            )
            self._put(sub, fields["category_code"], subtotal.category_code)
            self._put(sub, fields["percent"], self._number(subtotal.percent))
            self._put(sub, fields["exemption_reason_code"], subtotal.exemption_reason_code)
            self._put(sub, fields["exemption_reason"], subtotal.exemption_reason)
            self._put(sub, fields["tax_scheme"], ubl.TAX_SCHEME_VAT)

    def _build_line(
        self, root: etree._Element, line: LineItem, variant: dict, currency: str | None
    ) -> None:
        node = self._append(root, variant["line"])
        self._put(node, ubl.LINE["id"], line.id)
        self._put(node, ubl.LINE["note"], line.note)
        self._put(node, variant["quantity"], self._number(line.invoiced_quantity), unitCode=line.unit_code)
        self._put(
            node, ubl.LINE["line_extension_amount"], self._amount(line.line_extension_amount),
            currencyID=currency,
        )

        item = line.item
        if item is not None:
            item_node = self._append(node, ubl.ITEM)
            fields = ubl.ITEM_FIELDS
            self._put(item_node, fields["description"], item.description)
            self._put(item_node, fields["name"], item.name)
            self._put(item_node, fields["sellers_identifier"], item.sellers_identifier)
            for classification in item.classification_codes:
                self._put(
                    item_node,
                    ubl.CLASSIFICATION,
                    classification.code,
                    reuse=False,
                    listID=classification.list_id,
                    listVersionID=classification.list_version_id,
                )
            if item.tax_category is not None:
                self._put(item_node, fields["tax_category"], item.tax_category)
                self._put(item_node, fields["tax_percent"], self._number(item.tax_percent))
                self._put(item_node, fields["tax_scheme"], ubl.TAX_SCHEME_VAT)

        price = line.price
        if price is not None:
            price_node = self._append(node, ubl.PRICE)
            self._put(price_node, ubl.PRICE_FIELDS["amount"], self._amount(price.amount), currencyID=currency)
            self._put(
                price_node,
                ubl.PRICE_FIELDS["base_quantity"],
                self._number(price.base_quantity),
                unitCode=price.base_quantity_unit_code,
            )
