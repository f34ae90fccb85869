"""Build documents from YAML description files."""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from ...config import SubmitterConfig
from ...domain.dates import parse_date, parse_datetime
from ...domain.errors import DocumentSourceError
from ...domain.invoice import Invoice, InvoiceData
from ...domain.models import (
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
from ...domain.work_document import WorkData, WorkDocument
from ...ports.source import DocumentSourcePort

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_MISSING = object()


def _section(data: Any, where: str) -> dict:
    if not isinstance(data, dict):
        raise DocumentSourceError(f"{where}: expected a mapping")
    return data


def _get(data: dict, key: str, where: str, default: Any = _MISSING) -> Any:
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise DocumentSourceError(f"{where}: missing '{key}'")
        return default
    return value


def _text(data: dict, key: str, where: str, default: Any = _MISSING) -> Any:
    value = _get(data, key, where, default)
    # YAML reads unquoted numbers (TINs, EAC codes) as int
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _flag(data: dict, key: str, where: str) -> bool:
    value = _get(data, key, where)
    if not isinstance(value, bool):
        raise DocumentSourceError(f"{where}: '{key}' must be true or false")
    return value


def _amount(data: dict, key: str, where: str, default: Any = _MISSING) -> Any:
    value = _get(data, key, where, default)
    if value is None:
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise DocumentSourceError(f"{where}: '{key}' is not a number: {value!r}")
    # YAML reads .nan and .inf as floats
    if not amount.is_finite():
        raise DocumentSourceError(f"{where}: '{key}' must be a finite number: {value!r}")
    return amount


def _date(data: dict, key: str, where: str, default: Any = _MISSING) -> Any:
    value = _get(data, key, where, default)
    if value is None or isinstance(value, date):
        # YAML timestamps arrive already parsed
        return value.date() if isinstance(value, datetime) else value
    try:
        return parse_date(str(value))
    except ValueError:
        raise DocumentSourceError(f"{where}: '{key}' is not a YYYY-MM-DD date: {value!r}")


def _datetime(data: dict, key: str, where: str) -> datetime:
    value = _get(data, key, where)
    if isinstance(value, datetime):
        return value
    try:
        return parse_datetime(str(value))
    except ValueError:
        raise DocumentSourceError(
            f"{where}: '{key}' is not a YYYY-MM-DDTHH:MM:SS date-time: {value!r}"
        )


def _member(enum_cls: type[E], value: Any, where: str) -> E:
    """Resolve an enum member from its wire code or its name."""
    text = str(value)
    for member in enum_cls:
        if member.value == text or member.name == text.upper():
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise DocumentSourceError(
        f"{where}: unknown {enum_cls.__name__} {value!r} (expected one of {allowed})"
    )


def _list(data: dict, key: str, where: str) -> list | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise DocumentSourceError(f"{where}: '{key}' must be a list")
    return value


def parse_tax(data: Any, where: str) -> Tax:
    data = _section(data, where)
    return Tax(
        tax_type=_member(TaxType, _get(data, "tax_type", where), where),
        tax_country_region=_text(data, "tax_country_region", where),
        tax_code=_text(data, "tax_code", where),
        tax_percentage=_amount(data, "tax_percentage", where, None),
        total_tax_amount=_amount(data, "total_tax_amount", where, None),
    )


def parse_line(data: Any, where: str) -> Line:
    data = _section(data, where)
    order_references = _list(data, "order_references", where)
    references = _list(data, "references", where)
    return Line(
        debit_credit_indicator=_member(
            DebitCreditIndicator, _get(data, "debit_credit_indicator", where), where
        ),
        total_tax_base=_amount(data, "total_tax_base", where),
        amount=_amount(data, "amount", where),
        tax=parse_tax(_get(data, "tax", where), f"{where}.tax"),
        tax_exemption_code=_text(data, "tax_exemption_code", where, None),
        order_references=(
            None
            if order_references is None
            else [
                _parse_order_reference(item, f"{where}.order_references[{i}]")
                for i, item in enumerate(order_references)
            ]
        ),
        tax_point_date=_date(data, "tax_point_date", where, None),
        references=(
            None
            if references is None
            else [
                _parse_reference(item, f"{where}.references[{i}]")
                for i, item in enumerate(references)
            ]
        ),
    )


def _parse_order_reference(data: Any, where: str) -> OrderReference:
    data = _section(data, where)
    return OrderReference(
        originating_on=_text(data, "originating_on", where),
        order_date=_date(data, "order_date", where, None),
    )


def _parse_reference(data: Any, where: str) -> Reference:
    data = _section(data, where)
    return Reference(
        reference=_text(data, "reference", where),
        reason=_text(data, "reason", where, None),
    )


def parse_totals(data: Any, where: str) -> DocumentTotals:
    data = _section(data, where)
    currency = None
    if data.get("currency") is not None:
        cw = f"{where}.currency"
        cd = _section(data["currency"], cw)
        currency = Currency(
            currency_code=_text(cd, "currency_code", cw),
            currency_amount=_amount(cd, "currency_amount", cw),
            exchange_rate=_amount(cd, "exchange_rate", cw),
        )
    return DocumentTotals(
        tax_payable=_amount(data, "tax_payable", where),
        net_total=_amount(data, "net_total", where),
        gross_total=_amount(data, "gross_total", where),
        currency=currency,
    )


def _parse_lines(data: dict, where: str) -> list[Line]:
    lines = _list(data, "lines", where)
    if lines is None:
        raise DocumentSourceError(f"{where}: missing 'lines'")
    return [parse_line(item, f"{where}.lines[{i}]") for i, item in enumerate(lines)]


def parse_invoice_data(data: Any, where: str = "invoice_data") -> InvoiceData:
    data = _section(data, where)

    hw = f"{where}.invoice_header"
    header = _section(_get(data, "invoice_header", where), hw)
    sw = f"{where}.document_status"
    status = _section(_get(data, "document_status", where), sw)

    withholding = _list(data, "withholding_tax", where)
    withholding_tax = None
    if withholding is not None:
        withholding_tax = []
        for i, item in enumerate(withholding):
            ww = f"{where}.withholding_tax[{i}]"
            item = _section(item, ww)
            wtype = item.get("withholding_tax_type")
            withholding_tax.append(
                WithholdingTax(
                    withholding_tax_amount=_amount(item, "withholding_tax_amount", ww),
                    withholding_tax_type=(
                        None if wtype is None else _member(WithholdingTaxType, wtype, ww)
                    ),
                )
            )

    return InvoiceData(
        invoice_header=InvoiceHeader(
            invoice_no=_text(header, "invoice_no", hw),
            atcud=_text(header, "atcud", hw),
            invoice_date=_date(header, "invoice_date", hw),
            invoice_type=_member(InvoiceType, _get(header, "invoice_type", hw), hw),
            self_billing_indicator=_flag(header, "self_billing_indicator", hw),
            customer_tax_id=_text(header, "customer_tax_id", hw),
            customer_tax_id_country=_text(header, "customer_tax_id_country", hw),
        ),
        document_status=InvoiceDocumentStatus(
            invoice_status=_member(InvoiceStatus, _get(status, "invoice_status", sw), sw),
            invoice_status_date=_datetime(status, "invoice_status_date", sw),
        ),
        hash_characters=_text(data, "hash_characters", where),
        cash_vat_scheme_indicator=_flag(data, "cash_vat_scheme_indicator", where),
        paper_less_indicator=_flag(data, "paper_less_indicator", where),
        eac_code=_text(data, "eac_code", where, None),
        system_entry_date=_datetime(data, "system_entry_date", where),
        lines=_parse_lines(data, where),
        document_totals=parse_totals(
            _get(data, "document_totals", where), f"{where}.document_totals"
        ),
        withholding_tax=withholding_tax,
    )


def parse_work_data(data: Any, where: str = "work_data") -> WorkData:
    data = _section(data, where)

    hw = f"{where}.work_header"
    header = _section(_get(data, "work_header", where), hw)
    sw = f"{where}.document_status"
    status = _section(_get(data, "document_status", where), sw)

    return WorkData(
        work_header=WorkHeader(
            document_number=_text(header, "document_number", hw),
            atcud=_text(header, "atcud", hw),
            work_date=_date(header, "work_date", hw),
            work_type=_member(WorkType, _get(header, "work_type", hw), hw),
            customer_tax_id=_text(header, "customer_tax_id", hw),
            customer_tax_id_country=_text(header, "customer_tax_id_country", hw),
        ),
        document_status=WorkDocumentStatus(
            work_status=_member(WorkStatus, _get(status, "work_status", sw), sw),
            work_status_date=_datetime(status, "work_status_date", sw),
        ),
        hash_characters=_text(data, "hash_characters", where),
        eac_code=_text(data, "eac_code", where, None),
        system_entry_date=_datetime(data, "system_entry_date", where),
        lines=_parse_lines(data, where),
        document_totals=parse_totals(
            _get(data, "document_totals", where), f"{where}.document_totals"
        ),
    )


class YamlDocumentSource(DocumentSourcePort):
    """Document source reading YAML files.

    The top-level key selects the document family (`invoice` or
    `work_document`). Submitter fields missing from the file are taken from
    the configured submitter defaults.
    """

    def __init__(self, submitter: SubmitterConfig | None = None) -> None:
        self.submitter = submitter or SubmitterConfig()

    def load(self, path: Path) -> Invoice | WorkDocument:
        logger.info(f"Loading document: {path.name}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise DocumentSourceError(f"Cannot read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise DocumentSourceError(f"Invalid YAML in {path.name}: {e}") from e
        return self.parse(data)

    def parse(self, data: Any) -> Invoice | WorkDocument:
        data = _section(data, "document")
        if "invoice" in data:
            doc = _section(data["invoice"], "invoice")
            return Invoice(
                **self._submitter_fields(doc, "invoice"),
                invoice_data=parse_invoice_data(
                    _get(doc, "invoice_data", "invoice"), "invoice.invoice_data"
                ),
            )
        if "work_document" in data:
            doc = _section(data["work_document"], "work_document")
            return WorkDocument(
                **self._submitter_fields(doc, "work_document"),
                work_data=parse_work_data(
                    _get(doc, "work_data", "work_document"), "work_document.work_data"
                ),
            )
        raise DocumentSourceError("document: expected an 'invoice' or 'work_document' key")

    def _submitter_fields(self, doc: dict, where: str) -> dict[str, Any]:
        defaults = self.submitter
        tin = _text(doc, "tax_registration_number", where, defaults.tax_registration_number)
        if tin is None:
            raise DocumentSourceError(
                f"{where}: missing 'tax_registration_number' and no configured default"
            )

        tax_entity = _text(doc, "tax_entity", where, defaults.tax_entity)
        certificate = _get(
            doc, "software_certificate_number", where, defaults.software_certificate_number
        )
        if not isinstance(certificate, int) or isinstance(certificate, bool):
            raise DocumentSourceError(
                f"{where}: 'software_certificate_number' must be an integer"
            )

        record_channel = None
        if doc.get("record_channel") is not None:
            rw = f"{where}.record_channel"
            rc = _section(doc["record_channel"], rw)
            record_channel = RecordChannel(
                system=_text(rc, "system", rw), version=_text(rc, "version", rw)
            )
        elif defaults.record_channel_system and defaults.record_channel_version:
            record_channel = RecordChannel(
                system=defaults.record_channel_system,
                version=defaults.record_channel_version,
            )

        return {
            "tax_registration_number": tin,
            "tax_entity": _tax_entity(tax_entity),
            "software_certificate_number": certificate,
            "record_channel": record_channel,
        }


def _tax_entity(value: str) -> TaxEntity | str:
    for member in TaxEntity:
        if value == member.value:
            return member
    return value
