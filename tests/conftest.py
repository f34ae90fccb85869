"""Shared test fixtures."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest

from efatura.domain import (
    DebitCreditIndicator,
    DocumentTotals,
    InvoiceDocumentStatus,
    InvoiceHeader,
    InvoiceStatus,
    InvoiceType,
    Line,
    Tax,
    TaxType,
    WorkData,
    WorkDocumentStatus,
    WorkHeader,
    WorkStatus,
    WorkType,
)


@pytest.fixture
def invoice_header() -> InvoiceHeader:
    return InvoiceHeader(
        invoice_no="FT A/1",
        atcud="JFC4MHRP-1",
        invoice_date=date(2024, 1, 15),
        invoice_type=InvoiceType.INVOICE,
        self_billing_indicator=False,
        customer_tax_id="999999990",
        customer_tax_id_country="PT",
    )


@pytest.fixture
def invoice_status() -> InvoiceDocumentStatus:
    return InvoiceDocumentStatus(
        invoice_status=InvoiceStatus.NORMAL,
        invoice_status_date=datetime(2024, 1, 15, 10, 30, 0),
    )


@pytest.fixture
def lines() -> list[Line]:
    """One line per tax rate: normal and reduced VAT."""
    return [
        Line(
            debit_credit_indicator=DebitCreditIndicator.CREDIT,
            total_tax_base=Decimal("100.00"),
            amount=Decimal("23.00"),
            tax=Tax(
                tax_type=TaxType.VAT,
                tax_country_region="PT",
                tax_code="NOR",
                tax_percentage=Decimal("23"),
            ),
        ),
        Line(
            debit_credit_indicator=DebitCreditIndicator.CREDIT,
            total_tax_base=Decimal("50.00"),
            amount=Decimal("3.00"),
            tax=Tax(
                tax_type=TaxType.VAT,
                tax_country_region="PT",
                tax_code="RED",
                tax_percentage=Decimal("6"),
            ),
        ),
    ]


@pytest.fixture
def totals() -> DocumentTotals:
    return DocumentTotals(
        tax_payable=Decimal("26.00"),
        net_total=Decimal("150.00"),
        gross_total=Decimal("176.00"),
    )


@pytest.fixture
def invoice_kwargs(
    invoice_header: InvoiceHeader,
    invoice_status: InvoiceDocumentStatus,
    lines: list[Line],
    totals: DocumentTotals,
) -> dict[str, Any]:
    """Valid InvoiceData arguments; tests override single fields."""
    return {
        "invoice_header": invoice_header,
        "document_status": invoice_status,
        "hash_characters": "ABCD",
        "cash_vat_scheme_indicator": True,
        "paper_less_indicator": False,
        "eac_code": "12345",
        "system_entry_date": datetime(2024, 1, 15, 10, 30, 0),
        "lines": lines,
        "document_totals": totals,
        "withholding_tax": None,
    }


@pytest.fixture
def work_data(lines: list[Line], totals: DocumentTotals) -> WorkData:
    return WorkData(
        work_header=WorkHeader(
            document_number="OR A/7",
            atcud="JFC4MHRP-7",
            work_date=date(2024, 1, 15),
            work_type=WorkType.BUDGET,
            customer_tax_id="999999990",
            customer_tax_id_country="PT",
        ),
        document_status=WorkDocumentStatus(
            work_status=WorkStatus.NORMAL,
            work_status_date=datetime(2024, 1, 15, 10, 30, 0),
        ),
        hash_characters="0",
        eac_code=None,
        system_entry_date=datetime(2024, 1, 15, 10, 30, 0),
        lines=lines,
        document_totals=totals,
    )
