"""Commercial documents to customers (invoices)."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from .dates import format_datetime
from .models import (
    DocumentTotals,
    InvoiceDocumentStatus,
    InvoiceHeader,
    Line,
    RecordChannel,
    TaxEntity,
    WithholdingTax,
    tax_entity_name,
)
from .tracing import component_logger
from .validation import (
    check_eac_code,
    check_flag,
    check_submitter,
    check_text,
    check_withholding_tax,
    guard,
)


def validate_invoice_data(
    eac_code: str | None,
    withholding_tax: Sequence[WithholdingTax] | None,
    hash_characters: str | None = "0",
    cash_vat_scheme_indicator: bool = False,
    paper_less_indicator: bool = False,
) -> None:
    """Invoice-level rules, in reporting order. Stops at the first violation."""
    check_eac_code(eac_code, "Invoice")
    check_withholding_tax(withholding_tax, "Invoice")
    check_text(hash_characters, "HashCharacters", "Invoice")
    check_flag(cash_vat_scheme_indicator, "CashVATSchemeIndicator", "Invoice")
    check_flag(paper_less_indicator, "PaperLessIndicator", "Invoice")


@dataclass(frozen=True)
class InvoiceData:
    """Commercial document data (InvoiceData).

    Attributes:
        invoice_header: Number, type, date and customer of the invoice.
        document_status: The current invoice status.
        hash_characters: The 1st, 11th, 21st and 31st characters of the
            document hash, or "0" when issued by a non-certified program.
        cash_vat_scheme_indicator: True when the issuer adheres to the cash
            VAT regime.
        paper_less_indicator: True when the invoice is issued without paper.
        eac_code: CAE code of the activity the document relates to.
        system_entry_date: Record date, to the second, at signature time.
        lines: Document lines, one per tax rate.
        document_totals: The document totals.
        withholding_tax: Withholding tax entries, or None when none applies.

    The lines and withholding_tax lists are kept as given, not copied.
    Callers must not mutate them once the invoice data is built.
    """

    invoice_header: InvoiceHeader
    document_status: InvoiceDocumentStatus
    hash_characters: str
    cash_vat_scheme_indicator: bool
    paper_less_indicator: bool
    eac_code: str | None
    system_entry_date: datetime
    lines: list[Line]
    document_totals: DocumentTotals
    withholding_tax: list[WithholdingTax] | None = None
    logger: logging.Logger | None = field(
        default=None, kw_only=True, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        log = self.logger or component_logger(self)
        log.debug("InvoiceData.__post_init__")

        guard(
            log,
            validate_invoice_data,
            self.eac_code,
            self.withholding_tax,
            self.hash_characters,
            self.cash_vat_scheme_indicator,
            self.paper_less_indicator,
        )

        log.info(f"Hash characters set to {self.hash_characters}")
        log.info(
            "Cash VAT Scheme Indicator set to "
            f"{'true' if self.cash_vat_scheme_indicator else 'false'}"
        )
        log.info(
            f"Paper less Indicator set to {'true' if self.paper_less_indicator else 'false'}"
        )
        log.info(f"EACCode set to {self.eac_code if self.eac_code is not None else 'null'}")
        log.info(f"SystemEntryDate set to {format_datetime(self.system_entry_date)}")


@dataclass(frozen=True)
class Invoice:
    """Invoice to submit: the issuer's identification plus the invoice data.

    Attributes:
        tax_registration_number: Issuer TIN without any country prefix.
        tax_entity: Establishment the communication relates to, or
            TaxEntity.GLOBAL / TaxEntity.HEAD_OFFICE.
        software_certificate_number: Program certificate number assigned by
            the tax authority, 0 when not applicable.
        invoice_data: The invoice details.
        record_channel: Program that recorded the document, if any.
    """

    tax_registration_number: str
    tax_entity: TaxEntity | str
    software_certificate_number: int
    invoice_data: InvoiceData
    record_channel: RecordChannel | None = None
    logger: logging.Logger | None = field(
        default=None, kw_only=True, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        log = self.logger or component_logger(self)
        log.debug("Invoice.__post_init__")

        guard(
            log,
            check_submitter,
            self.tax_registration_number,
            self.tax_entity,
            self.software_certificate_number,
            "Invoice",
        )

        log.info(f"TaxRegistrationNumber set to: {self.tax_registration_number}")
        log.info(f"TaxEntity set to: {tax_entity_name(self.tax_entity)}")
        log.info(f"SoftwareCertificateNumber set to: {self.software_certificate_number}")
