"""Value types shared by invoices and work documents.

Enum values are the codes the e-Fatura schema uses on the wire.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from .errors import ValidationError
from .tracing import component_logger
from .validation import (
    check_country_region,
    check_currency_code,
    check_document_number,
    check_non_negative,
    check_not_empty,
    guard,
)


class TaxEntity(str, Enum):
    """Special tax entity values; any other value is an establishment name."""

    GLOBAL = "Global"
    HEAD_OFFICE = "Sede"


def tax_entity_name(tax_entity: TaxEntity | str) -> str:
    return tax_entity.value if isinstance(tax_entity, TaxEntity) else tax_entity


class InvoiceStatus(str, Enum):
    NORMAL = "N"
    SELF_BILLING = "S"
    CANCELLED = "A"
    SUMMARY = "R"
    INVOICED = "F"


class WorkStatus(str, Enum):
    NORMAL = "N"
    CANCELLED = "A"
    INVOICED = "F"


class InvoiceType(str, Enum):
    INVOICE = "FT"
    SIMPLIFIED_INVOICE = "FS"
    INVOICE_RECEIPT = "FR"
    DEBIT_NOTE = "ND"
    CREDIT_NOTE = "NC"


class WorkType(str, Enum):
    TABLE_CONSULTATION = "CM"
    CREDIT_NOTE_SLIP = "CC"
    CONSIGNMENT_INVOICE = "FC"
    WORKSHEET = "FO"
    PURCHASE_ORDER = "NE"
    OTHER = "OU"
    BUDGET = "OR"
    PRO_FORMA = "PF"
    PREMIUM = "RP"
    REVERSAL = "RE"
    COINSURANCE_ALLOCATION = "CS"
    LEAD_COINSURER_ALLOCATION = "LD"
    ACCEPTED_REINSURANCE = "RA"


class DebitCreditIndicator(str, Enum):
    DEBIT = "D"
    CREDIT = "C"


class TaxType(str, Enum):
    VAT = "IVA"
    STAMP_DUTY = "IS"
    NOT_SUBJECT = "NS"


class WithholdingTaxType(str, Enum):
    PERSONAL_INCOME = "IRS"
    CORPORATE_INCOME = "IRC"
    STAMP_DUTY = "IS"


@dataclass(frozen=True)
class RecordChannel:
    """Program and version that recorded the document."""

    system: str
    version: str

    def __post_init__(self) -> None:
        log = component_logger(self)
        guard(log, check_not_empty, self.system, "System", "RecordChannel")
        guard(log, check_not_empty, self.version, "Version", "RecordChannel")


@dataclass(frozen=True)
class Tax:
    """Tax applied to one document line.

    Either the rate (tax_percentage) or a fixed amount (total_tax_amount)
    is given, never both.
    """

    tax_type: TaxType
    tax_country_region: str
    tax_code: str
    tax_percentage: Decimal | None = None
    total_tax_amount: Decimal | None = None

    def __post_init__(self) -> None:
        log = component_logger(self)
        guard(log, check_country_region, self.tax_country_region, "Tax")
        guard(log, check_not_empty, self.tax_code, "TaxCode", "Tax")
        guard(log, _check_rate_or_amount, self.tax_percentage, self.total_tax_amount)
        if self.tax_percentage is not None:
            guard(log, check_non_negative, self.tax_percentage, "TaxPercentage", "Tax")


def _check_rate_or_amount(
    tax_percentage: Decimal | None, total_tax_amount: Decimal | None
) -> None:
    if tax_percentage is not None and total_tax_amount is not None:
        raise ValidationError(
            "Tax TaxPercentage and TotalTaxAmount are mutually exclusive",
            field="TaxPercentage",
        )


@dataclass(frozen=True)
class OrderReference:
    originating_on: str
    order_date: date | None = None

    def __post_init__(self) -> None:
        guard(
            component_logger(self),
            check_not_empty,
            self.originating_on,
            "OriginatingON",
            "OrderReference",
        )


@dataclass(frozen=True)
class Reference:
    """Reference to a corrected document (credit and debit notes)."""

    reference: str
    reason: str | None = None

    def __post_init__(self) -> None:
        guard(
            component_logger(self), check_not_empty, self.reference, "Reference", "Reference"
        )


@dataclass(frozen=True)
class Line:
    """Document totals for a single tax rate."""

    debit_credit_indicator: DebitCreditIndicator
    total_tax_base: Decimal
    amount: Decimal
    tax: Tax
    tax_exemption_code: str | None = None
    order_references: list[OrderReference] | None = None
    tax_point_date: date | None = None
    references: list[Reference] | None = None


@dataclass(frozen=True)
class Currency:
    """Foreign currency amounts, only for documents not issued in euro."""

    currency_code: str
    currency_amount: Decimal
    exchange_rate: Decimal

    def __post_init__(self) -> None:
        log = component_logger(self)
        guard(log, check_currency_code, self.currency_code, "Currency")
        guard(log, _check_exchange_rate, self.exchange_rate)


def _check_exchange_rate(exchange_rate: Decimal) -> None:
    if (
        exchange_rate is None
        or (isinstance(exchange_rate, Decimal) and exchange_rate.is_nan())
        or exchange_rate <= 0
    ):
        raise ValidationError(
            f"Currency ExchangeRate must be positive, got {exchange_rate}",
            field="ExchangeRate",
        )


@dataclass(frozen=True)
class DocumentTotals:
    tax_payable: Decimal
    net_total: Decimal
    gross_total: Decimal
    currency: Currency | None = None


@dataclass(frozen=True)
class WithholdingTax:
    withholding_tax_amount: Decimal
    withholding_tax_type: WithholdingTaxType | None = None

    def __post_init__(self) -> None:
        guard(
            component_logger(self),
            check_non_negative,
            self.withholding_tax_amount,
            "WithholdingTaxAmount",
            "WithholdingTax",
        )


@dataclass(frozen=True)
class InvoiceHeader:
    invoice_no: str
    atcud: str
    invoice_date: date
    invoice_type: InvoiceType
    self_billing_indicator: bool
    customer_tax_id: str
    customer_tax_id_country: str

    def __post_init__(self) -> None:
        log = component_logger(self)
        guard(log, check_document_number, self.invoice_no, "InvoiceNo", "InvoiceHeader")
        guard(log, check_not_empty, self.atcud, "ATCUD", "InvoiceHeader")
        guard(log, check_not_empty, self.customer_tax_id, "CustomerTaxID", "InvoiceHeader")
        guard(
            log,
            check_not_empty,
            self.customer_tax_id_country,
            "CustomerTaxIDCountry",
            "InvoiceHeader",
        )


@dataclass(frozen=True)
class InvoiceDocumentStatus:
    invoice_status: InvoiceStatus
    invoice_status_date: datetime


@dataclass(frozen=True)
class WorkHeader:
    document_number: str
    atcud: str
    work_date: date
    work_type: WorkType
    customer_tax_id: str
    customer_tax_id_country: str

    def __post_init__(self) -> None:
        log = component_logger(self)
        guard(
            log, check_document_number, self.document_number, "DocumentNumber", "WorkHeader"
        )
        guard(log, check_not_empty, self.atcud, "ATCUD", "WorkHeader")
        guard(log, check_not_empty, self.customer_tax_id, "CustomerTaxID", "WorkHeader")
        guard(
            log,
            check_not_empty,
            self.customer_tax_id_country,
            "CustomerTaxIDCountry",
            "WorkHeader",
        )


@dataclass(frozen=True)
class WorkDocumentStatus:
    work_status: WorkStatus
    work_status_date: datetime
