"""UN/CEFACT CII CrossIndustryInvoice mapping table."""

from .base import Locator

RSM_NS = "urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100"
RAM_NS = "urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100"
UDT_NS = "urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100"
QDT_NS = "urn:un:unece:uncefact:data:standard:QualifiedDataType:100"

NS = {
    "rsm": RSM_NS,
    "ram": RAM_NS,
    "qdt": QDT_NS,
    "udt": UDT_NS,
}

ROOT = "CrossIndustryInvoice"

TAX_TYPE_VAT = "VAT"
VAT_SCHEME = "VA"
DATE_FORMAT_ATTRIBUTE = "format"

# Top-level sections, relative to the root
CONTEXT = Locator("rsm:ExchangedDocumentContext")
DOCUMENT = Locator("rsm:ExchangedDocument")
TRANSACTION = Locator("rsm:SupplyChainTradeTransaction")
AGREEMENT = Locator("rsm:SupplyChainTradeTransaction/ram:ApplicableHeaderTradeAgreement")
DELIVERY = Locator("rsm:SupplyChainTradeTransaction/ram:ApplicableHeaderTradeDelivery")
SETTLEMENT = Locator("rsm:SupplyChainTradeTransaction/ram:ApplicableHeaderTradeSettlement")

# Header (BG-0), relative to the root
HEADER = {
    "profile_id": Locator(
        "rsm:ExchangedDocumentContext/ram:BusinessProcessSpecifiedDocumentContextParameter/ram:ID"
    ),
    "customization_id": Locator(
        "rsm:ExchangedDocumentContext/ram:GuidelineSpecifiedDocumentContextParameter/ram:ID"
    ),
    "number": Locator("rsm:ExchangedDocument/ram:ID"),
    "type_code": Locator("rsm:ExchangedDocument/ram:TypeCode"),
    "issue_date": Locator("rsm:ExchangedDocument/ram:IssueDateTime/udt:DateTimeString"),
    "note": Locator("rsm:ExchangedDocument/ram:IncludedNote/ram:Content"),
}

# Relative to the header trade agreement
AGREEMENT_FIELDS = {
    "buyer_reference": Locator("ram:BuyerReference"),
}
SELLER = Locator("ram:SellerTradeParty")
BUYER = Locator("ram:BuyerTradeParty")

# Relative to the header trade delivery (BG-13)
DELIVERY_FIELDS = {
    "delivery_date": Locator("ram:ActualDeliverySupplyChainEvent/ram:OccurrenceDateTime/udt:DateTimeString"),
}

# Relative to the header trade settlement
SETTLEMENT_FIELDS = {
    "creditor_reference_id": Locator("ram:CreditorReferenceID"),
    "payment_id": Locator("ram:PaymentReference"),
    "currency_code": Locator("ram:InvoiceCurrencyCode"),
}
PAYMENT_TERMS = {
    "note": Locator("ram:SpecifiedTradePaymentTerms/ram:Description"),
    "due_date": Locator("ram:SpecifiedTradePaymentTerms/ram:DueDateDateTime/udt:DateTimeString"),
    "mandate_reference": Locator("ram:SpecifiedTradePaymentTerms/ram:DirectDebitMandateID"),
}

# TradeParty (BG-4 / BG-7)
PARTY = {
    "identifier": Locator("ram:ID"),
    "name": Locator("ram:Name"),
    "legal_form": Locator("ram:Description"),
    "legal_registration_id": Locator("ram:SpecifiedLegalOrganization/ram:ID"),
    "trading_name": Locator("ram:SpecifiedLegalOrganization/ram:TradingBusinessName"),
    "electronic_address": Locator("ram:URIUniversalCommunication/ram:URIID"),
    "electronic_address_scheme": Locator("ram:URIUniversalCommunication/ram:URIID", attribute="schemeID"),
    "vat_identifier": Locator(f"ram:SpecifiedTaxRegistration/ram:ID[@schemeID='{VAT_SCHEME}']"),
}

# PostalAddress (BG-5 / BG-8)
POSTAL_ADDRESS = Locator("ram:PostalTradeAddress")
ADDRESS = {
    "postal_zone": Locator("ram:PostcodeCode"),
    "street_name": Locator("ram:LineOne"),
    "city_name": Locator("ram:CityName"),
    "country_code": Locator("ram:CountryID"),
}

# Contact (BG-6 / BG-9)
CONTACT = Locator("ram:DefinedTradeContact")
CONTACT_FIELDS = {
    "name": Locator("ram:PersonName"),
    "telephone": Locator("ram:TelephoneUniversalCommunication/ram:CompleteNumber"),
    "email": Locator("ram:EmailURIUniversalCommunication/ram:URIID"),
}

# PaymentMeans (BG-16, BG-18, BG-19), relative to the settlement
PAYMENT_MEANS = Locator("ram:SpecifiedTradeSettlementPaymentMeans")
PAYMENT = {
    "payment_means_code": Locator("ram:TypeCode"),
    "card_account_id": Locator("ram:ApplicableTradeSettlementFinancialCard/ram:ID"),
    "card_holder_name": Locator("ram:ApplicableTradeSettlementFinancialCard/ram:CardholderName"),
    "debited_account_id": Locator("ram:PayerPartyDebtorFinancialAccount/ram:IBANID"),
    "account_id": Locator("ram:PayeePartyCreditorFinancialAccount/ram:IBANID"),
}

# Header VAT breakdown (BG-23), repeated below the settlement
TAX_SUBTOTAL = Locator("ram:ApplicableTradeTax")
TAX = {
    "tax_amount": Locator("ram:CalculatedAmount"),
    "type_code": Locator("ram:TypeCode"),
    "exemption_reason": Locator("ram:ExemptionReason"),
    "taxable_amount": Locator("ram:BasisAmount"),
    "category_code": Locator("ram:CategoryCode"),
    "exemption_reason_code": Locator("ram:ExemptionReasonCode"),
    "percent": Locator("ram:RateApplicablePercent"),
}

# AllowanceCharge (BG-20 / BG-21), repeated below the settlement
ALLOWANCE_CHARGE = Locator("ram:SpecifiedTradeAllowanceCharge")
ALLOWANCE_CHARGE_FIELDS = {
    "charge_indicator": Locator("ram:ChargeIndicator/udt:Indicator"),
    "multiplier_factor": Locator("ram:CalculationPercent"),
    "base_amount": Locator("ram:BasisAmount"),
    "amount": Locator("ram:ActualAmount"),
    "reason_code": Locator("ram:ReasonCode"),
    "reason": Locator("ram:Reason"),
    "tax_type_code": Locator("ram:CategoryTradeTax/ram:TypeCode"),
    "tax_category_code": Locator("ram:CategoryTradeTax/ram:CategoryCode"),
    "tax_percent": Locator("ram:CategoryTradeTax/ram:RateApplicablePercent"),
}

# Monetary summation (BG-22), relative to the settlement
MONETARY_TOTAL = Locator("ram:SpecifiedTradeSettlementHeaderMonetarySummation")
TOTALS = {
    "line_extension_amount": Locator("ram:LineTotalAmount"),
    "charge_total_amount": Locator("ram:ChargeTotalAmount"),
    "allowance_total_amount": Locator("ram:AllowanceTotalAmount"),
    "tax_exclusive_amount": Locator("ram:TaxBasisTotalAmount"),
    "tax_total_amount": Locator("ram:TaxTotalAmount"),
    "tax_currency_code": Locator("ram:TaxTotalAmount", attribute="currencyID"),
    "payable_rounding_amount": Locator("ram:RoundingAmount"),
    "tax_inclusive_amount": Locator("ram:GrandTotalAmount"),
    "prepaid_amount": Locator("ram:TotalPrepaidAmount"),
    "payable_amount": Locator("ram:DuePayableAmount"),
}

# Invoice line (BG-25), relative to the root
INVOICE_LINE = Locator("rsm:SupplyChainTradeTransaction/ram:IncludedSupplyChainTradeLineItem")
LINE = {
    "id": Locator("ram:AssociatedDocumentLineDocument/ram:LineID"),
    "note": Locator("ram:AssociatedDocumentLineDocument/ram:IncludedNote/ram:Content"),
    "invoiced_quantity": Locator("ram:SpecifiedLineTradeDelivery/ram:BilledQuantity"),
    "unit_code": Locator("ram:SpecifiedLineTradeDelivery/ram:BilledQuantity", attribute="unitCode"),
    "line_extension_amount": Locator(
        "ram:SpecifiedLineTradeSettlement/ram:SpecifiedTradeSettlementLineMonetarySummation/ram:LineTotalAmount"
    ),
}
LINE_DOCUMENT = Locator("ram:AssociatedDocumentLineDocument")
LINE_AGREEMENT = Locator("ram:SpecifiedLineTradeAgreement")
LINE_DELIVERY = Locator("ram:SpecifiedLineTradeDelivery")
LINE_SETTLEMENT = Locator("ram:SpecifiedLineTradeSettlement")
LINE_SUMMATION = Locator(
    "ram:SpecifiedLineTradeSettlement/ram:SpecifiedTradeSettlementLineMonetarySummation"
)

# Item (BG-31)
ITEM = Locator("ram:SpecifiedTradeProduct")
ITEM_FIELDS = {
    "sellers_identifier": Locator("ram:SellerAssignedID"),
    "name": Locator("ram:Name"),
    "description": Locator("ram:Description"),
}

# Item classification (BT-158), repeated below the product
CLASSIFICATION = Locator("ram:DesignatedProductClassification/ram:ClassCode")
CLASSIFICATION_FIELDS = {
    "list_id": Locator(".", attribute="listID"),
    "list_version_id": Locator(".", attribute="listVersionID"),
}

# Item VAT lives on the line settlement, not on the product
ITEM_TAX = Locator("ram:SpecifiedLineTradeSettlement/ram:ApplicableTradeTax")
ITEM_TAX_FIELDS = {
    "type_code": Locator("ram:TypeCode"),
    "tax_category": Locator("ram:CategoryCode"),
    "tax_percent": Locator("ram:RateApplicablePercent"),
}

# Price (BG-29), relative to the line
PRICE = Locator("ram:SpecifiedLineTradeAgreement/ram:NetPriceProductTradePrice")
PRICE_FIELDS = {
    "amount": Locator("ram:ChargeAmount"),
    "base_quantity": Locator("ram:BasisQuantity"),
    "base_quantity_unit_code": Locator("ram:BasisQuantity", attribute="unitCode"),
}
