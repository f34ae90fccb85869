"""Domain layer - e-Fatura document model."""

from .errors import DocumentSourceError, EFaturaError, ValidationError
from .invoice import Invoice, InvoiceData
from .models import (
    Currency,
    DebitCreditIndicator,
    DocumentTotals,
    InvoiceDocumentStatus,
    InvoiceHeader,
    InvoiceStatus,
    InvoiceType,
    Line,
    OrderReference,
    RecordChannel,
    Reference,
    Tax,
    TaxEntity,
    TaxType,
    WithholdingTax,
    WithholdingTaxType,
    WorkDocumentStatus,
    WorkHeader,
    WorkStatus,
    WorkType,
)
from .work_document import WorkData, WorkDocument

__all__ = [
    "Currency",
    "DebitCreditIndicator",
    "DocumentSourceError",
    "DocumentTotals",
    "EFaturaError",
    "Invoice",
    "InvoiceData",
    "InvoiceDocumentStatus",
    "InvoiceHeader",
    "InvoiceStatus",
    "InvoiceType",
    "Line",
    "OrderReference",
    "RecordChannel",
    "Reference",
    "Tax",
    "TaxEntity",
    "TaxType",
    "ValidationError",
    "WithholdingTax",
    "WithholdingTaxType",
    "WorkData",
    "WorkDocument",
    "WorkDocumentStatus",
    "WorkHeader",
    "WorkStatus",
    "WorkType",
]
