"""UBL 2.1 Invoice / CreditNote mapping table.

Locators are relative to the context node of their entity: the document
root for ``HEADER``, a ``cac:Party`` for ``PARTY`` and so on.
"""

from .base import Locator

INVOICE_NS = "urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
CREDIT_NOTE_NS = "urn:oasis:names:specification:ubl:schema:xsd:CreditNote-2"
CAC_NS = "urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
CBC_NS = "urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2"

NS = {
    "ubl": INVOICE_NS,
    "cn": CREDIT_NOTE_NS,
    "cac": CAC_NS,
    "cbc": CBC_NS,
}

INVOICE_ROOT = "Invoice"
CREDIT_NOTE_ROOT = "CreditNote"

TAX_SCHEME_VAT = "VAT"
SEPA_SCHEME = "SEPA"

# Header (BG-0)
HEADER = {
    "customization_id": Locator("cbc:CustomizationID"),
    "profile_id": Locator("cbc:ProfileID"),
    "number": Locator("cbc:ID"),
    "issue_date": Locator("cbc:IssueDate"),
    "due_date": Locator("cbc:DueDate"),
    "note": Locator("cbc:Note"),
    "currency_code": Locator("cbc:DocumentCurrencyCode"),
    "buyer_reference": Locator("cbc:BuyerReference"),
    "delivery_date": Locator("cac:Delivery/cbc:ActualDeliveryDate"),
}

# Element names that differ between the Invoice and CreditNote grammars
VARIANT_ELEMENTS = {
    INVOICE_ROOT: {
        "type_code": Locator("cbc:InvoiceTypeCode"),
        "line": Locator("cac:InvoiceLine"),
        "quantity": Locator("cbc:InvoicedQuantity"),
        "unit_code": Locator("cbc:InvoicedQuantity", attribute="unitCode"),
    },
    CREDIT_NOTE_ROOT: {
        "type_code": Locator("cbc:CreditNoteTypeCode"),
        "line": Locator("cac:CreditNoteLine"),
        "quantity": Locator("cbc:CreditedQuantity"),
        "unit_code": Locator("cbc:CreditedQuantity", attribute="unitCode"),
    },
}

# Seller (BG-4) and buyer (BG-7)
SELLER = Locator("cac:AccountingSupplierParty/cac:Party")
BUYER = Locator("cac:AccountingCustomerParty/cac:Party")

PARTY = {
    "electronic_address": Locator("cbc:EndpointID"),
    "electronic_address_scheme": Locator("cbc:EndpointID", attribute="schemeID"),
    "identifier": Locator(f"cac:PartyIdentification/cbc:ID[not(@schemeID='{SEPA_SCHEME}')]"),
    "trading_name": Locator("cac:PartyName/cbc:Name"),
    "vat_identifier": Locator(
        f"cac:PartyTaxScheme[cac:TaxScheme/cbc:ID='{TAX_SCHEME_VAT}']/cbc:CompanyID"
    ),
    "vat_tax_scheme": Locator("cac:PartyTaxScheme/cac:TaxScheme/cbc:ID"),
    "name": Locator("cac:PartyLegalEntity/cbc:RegistrationName"),
    "legal_registration_id": Locator("cac:PartyLegalEntity/cbc:CompanyID"),
    "legal_form": Locator("cac:PartyLegalEntity/cbc:CompanyLegalForm"),
}

# Mandatory in the grammar even when every field inside is absent
PARTY_LEGAL_ENTITY = Locator("cac:PartyLegalEntity")

# BT-90 lives on the seller party in UBL, not on the payment means
CREDITOR_REFERENCE = Locator(f"cac:PartyIdentification/cbc:ID[@schemeID='{SEPA_SCHEME}']")

# PostalAddress (BG-5 / BG-8)
POSTAL_ADDRESS = Locator("cac:PostalAddress")
ADDRESS = {
    "street_name": Locator("cbc:StreetName"),
    "city_name": Locator("cbc:CityName"),
    "postal_zone": Locator("cbc:PostalZone"),
    "country_code": Locator("cac:Country/cbc:IdentificationCode"),
}

# Contact (BG-6 / BG-9)
CONTACT = Locator("cac:Contact")
CONTACT_FIELDS = {
    "name": Locator("cbc:Name"),
    "telephone": Locator("cbc:Telephone"),
    "email": Locator("cbc:ElectronicMail"),
}

# PaymentMeans (BG-16, BG-18, BG-19)
PAYMENT_MEANS = Locator("cac:PaymentMeans")
PAYMENT = {
    "payment_means_code": Locator("cbc:PaymentMeansCode"),
    "payment_due_date": Locator("cbc:PaymentDueDate"),
    "payment_id": Locator("cbc:PaymentID"),
    "card_account_id": Locator("cac:CardAccount/cbc:PrimaryAccountNumberID"),
    "card_network_id": Locator("cac:CardAccount/cbc:NetworkID"),
    "card_holder_name": Locator("cac:CardAccount/cbc:HolderName"),
    "account_id": Locator("cac:PayeeFinancialAccount/cbc:ID"),
    "mandate_reference": Locator("cac:PaymentMandate/cbc:ID"),
    "debited_account_id": Locator("cac:PaymentMandate/cac:PayerFinancialAccount/cbc:ID"),
}
PAYMENT_TERMS_NOTE = Locator("cac:PaymentTerms/cbc:Note")

# AllowanceCharge (BG-20 / BG-21)
ALLOWANCE_CHARGE = Locator("cac:AllowanceCharge")
ALLOWANCE_CHARGE_FIELDS = {
    "charge_indicator": Locator("cbc:ChargeIndicator"),
    "reason_code": Locator("cbc:AllowanceChargeReasonCode"),
    "reason": Locator("cbc:AllowanceChargeReason"),
    "multiplier_factor": Locator("cbc:MultiplierFactorNumeric"),
    "amount": Locator("cbc:Amount"),
    "currency_code": Locator("cbc:Amount", attribute="currencyID"),
    "base_amount": Locator("cbc:BaseAmount"),
    "tax_category_code": Locator("cac:TaxCategory/cbc:ID"),
    "tax_percent": Locator("cac:TaxCategory/cbc:Percent"),
    "tax_scheme": Locator("cac:TaxCategory/cac:TaxScheme/cbc:ID"),
}

# TaxTotal (BG-23)
TAX_TOTAL = Locator("cac:TaxTotal")
TAX_TOTAL_FIELDS = {
    "tax_amount": Locator("cbc:TaxAmount"),
    "currency_code": Locator("cbc:TaxAmount", attribute="currencyID"),
}
TAX_SUBTOTAL = Locator("cac:TaxSubtotal")
TAX = {
    "taxable_amount": Locator("cbc:TaxableAmount"),
    "currency_code": Locator("cbc:TaxableAmount", attribute="currencyID"),
    "tax_amount": Locator("cbc:TaxAmount"),
    "category_code": Locator("cac:TaxCategory/cbc:ID"),
    "percent": Locator("cac:TaxCategory/cbc:Percent"),
    "exemption_reason_code": Locator("cac:TaxCategory/cbc:TaxExemptionReasonCode"),
    "exemption_reason": Locator("cac:TaxCategory/cbc:TaxExemptionReason"),
    "tax_scheme": Locator("cac:TaxCategory/cac:TaxScheme/cbc:ID"),
}

# LegalMonetaryTotal (BG-22)
MONETARY_TOTAL = Locator("cac:LegalMonetaryTotal")
TOTALS = {
    "line_extension_amount": Locator("cbc:LineExtensionAmount"),
    "tax_exclusive_amount": Locator("cbc:TaxExclusiveAmount"),
    "tax_inclusive_amount": Locator("cbc:TaxInclusiveAmount"),
    "allowance_total_amount": Locator("cbc:AllowanceTotalAmount"),
    "charge_total_amount": Locator("cbc:ChargeTotalAmount"),
    "prepaid_amount": Locator("cbc:PrepaidAmount"),
    "payable_rounding_amount": Locator("cbc:PayableRoundingAmount"),
    "payable_amount": Locator("cbc:PayableAmount"),
}

# InvoiceLine / CreditNoteLine (BG-25); quantity names come from VARIANT_ELEMENTS
LINE = {
    "id": Locator("cbc:ID"),
    "note": Locator("cbc:Note"),
    "line_extension_amount": Locator("cbc:LineExtensionAmount"),
}

# Item (BG-31)
ITEM = Locator("cac:Item")
ITEM_FIELDS = {
    "description": Locator("cbc:Description"),
    "name": Locator("cbc:Name"),
    "sellers_identifier": Locator("cac:SellersItemIdentification/cbc:ID"),
    "tax_category": Locator("cac:ClassifiedTaxCategory/cbc:ID"),
    "tax_percent": Locator("cac:ClassifiedTaxCategory/cbc:Percent"),
    "tax_scheme": Locator("cac:ClassifiedTaxCategory/cac:TaxScheme/cbc:ID"),
}

# Item classification (BT-158), repeated
CLASSIFICATION = Locator("cac:CommodityClassification/cbc:ItemClassificationCode")
CLASSIFICATION_FIELDS = {
    "list_id": Locator(".", attribute="listID"),
    "list_version_id": Locator(".", attribute="listVersionID"),
}

# Price (BG-29)
PRICE = Locator("cac:Price")
PRICE_FIELDS = {
    "amount": Locator("cbc:PriceAmount"),
    "base_quantity": Locator("cbc:BaseQuantity"),
    "base_quantity_unit_code": Locator("cbc:BaseQuantity", attribute="unitCode"),
}
