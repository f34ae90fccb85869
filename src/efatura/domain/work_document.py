"""Work documents: internal documents also reportable to the tax authority."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from .dates import format_datetime
from .models import (
    DocumentTotals,
    Line,
    RecordChannel,
    TaxEntity,
    WorkDocumentStatus,
    WorkHeader,
    tax_entity_name,
)
from .tracing import component_logger
from .validation import check_eac_code, check_submitter, check_text, guard


def validate_work_data(eac_code: str | None, hash_characters: str | None = "0") -> None:
    check_eac_code(eac_code, "WorkDocument")
    check_text(hash_characters, "HashCharacters", "WorkDocument")


@dataclass(frozen=True)
class WorkData:
    """Work document data, the counterpart of InvoiceData.

    Work documents carry no cash VAT, paperless or withholding tax fields.
    The lines list is kept as given and must not be mutated afterwards.
    """

    work_header: WorkHeader
    document_status: WorkDocumentStatus
    hash_characters: str
    eac_code: str | None
    system_entry_date: datetime
    lines: list[Line]
    document_totals: DocumentTotals
    logger: logging.Logger | None = field(
        default=None, kw_only=True, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        log = self.logger or component_logger(self)
        log.debug("WorkData.__post_init__")

        guard(log, validate_work_data, self.eac_code, self.hash_characters)

        log.info(f"Hash characters set to {self.hash_characters}")
        log.info(f"EACCode set to {self.eac_code if self.eac_code is not None else 'null'}")
        log.info(f"SystemEntryDate set to {format_datetime(self.system_entry_date)}")


@dataclass(frozen=True)
class WorkDocument:
    """Work document to submit.

    Attributes:
        tax_registration_number: Issuer TIN without any country prefix.
        tax_entity: Establishment the communication relates to. TaxEntity.GLOBAL
            when not applicable, TaxEntity.HEAD_OFFICE when it comes from an
            accounting program.
        software_certificate_number: Program certificate number assigned by
            the tax authority, 0 when not applicable.
        work_data: The work document details.
        record_channel: Program that recorded the document, if any.
    """

    tax_registration_number: str
    tax_entity: TaxEntity | str
    software_certificate_number: int
    work_data: WorkData
    record_channel: RecordChannel | None = None
    logger: logging.Logger | None = field(
        default=None, kw_only=True, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        log = self.logger or component_logger(self)
        log.debug("WorkDocument.__post_init__")

        guard(
            log,
            check_submitter,
            self.tax_registration_number,
            self.tax_entity,
            self.software_certificate_number,
            "WorkDocument",
        )

        log.info(f"TaxRegistrationNumber set to: {self.tax_registration_number}")
        log.info(f"TaxEntity set to: {tax_entity_name(self.tax_entity)}")
        log.info(f"SoftwareCertificateNumber set to: {self.software_certificate_number}")
