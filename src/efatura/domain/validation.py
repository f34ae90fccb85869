"""Field-level rules for e-Fatura documents.

Every rule is a pure function that returns None when the value is acceptable
and raises ValidationError otherwise. Rules never log; `guard` is the only
place where a violation meets the logging side channel.
"""

import logging
import re
from collections.abc import Callable, Sequence
from decimal import Decimal
from typing import Any

from .errors import ValidationError

EAC_CODE_PATTERN = re.compile(r"^[0-9]{5}$")
# SAF-T document number: "<type> <series>/<sequential number>"
DOCUMENT_NUMBER_PATTERN = re.compile(r"^[^ ]+ [^/ ]+/[0-9]+$")
COUNTRY_REGION_PATTERN = re.compile(r"^(PT-AC|PT-MA|[A-Z]{2})$")
CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


def check_eac_code(eac_code: str | None, owner: str) -> None:
    """EAC (CAE) code is optional but, when given, must be five digits."""
    if eac_code is None:
        return
    if not isinstance(eac_code, str) or not EAC_CODE_PATTERN.fullmatch(eac_code):
        raise ValidationError(
            f"{owner} EACCode must respect the regexp {EAC_CODE_PATTERN.pattern}",
            field="EACCode",
        )


def check_not_empty(value: str | None, field: str, owner: str) -> None:
    if value is None or not str(value).strip():
        raise ValidationError(f"{owner} {field} must not be empty", field=field)


def check_non_negative(value: int | Decimal | None, field: str, owner: str) -> None:
    # NaN cannot be ordered; Decimal raises on the comparison
    if value is None or (isinstance(value, Decimal) and value.is_nan()) or value < 0:
        raise ValidationError(
            f"{owner} {field} must be zero or positive, got {value}", field=field
        )


def check_text(value: str | None, field: str, owner: str) -> None:
    """Mandatory text field; any non-empty string is accepted."""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{owner} {field} must be a non-empty string", field=field)


def check_flag(value: bool, field: str, owner: str) -> None:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{owner} {field} must be true or false, got {value!r}", field=field
        )


def check_document_number(value: str, field: str, owner: str) -> None:
    check_not_empty(value, field, owner)
    if not DOCUMENT_NUMBER_PATTERN.fullmatch(value):
        raise ValidationError(
            f"{owner} {field} '{value}' must respect the regexp "
            f"{DOCUMENT_NUMBER_PATTERN.pattern}",
            field=field,
        )


def check_country_region(value: str, owner: str) -> None:
    if not isinstance(value, str) or not COUNTRY_REGION_PATTERN.fullmatch(value):
        raise ValidationError(
            f"{owner} TaxCountryRegion '{value}' is not a valid region code",
            field="TaxCountryRegion",
        )


def check_currency_code(value: str, owner: str) -> None:
    if not isinstance(value, str) or not CURRENCY_CODE_PATTERN.fullmatch(value):
        raise ValidationError(
            f"{owner} CurrencyCode '{value}' is not an ISO 4217 code",
            field="CurrencyCode",
        )


def check_withholding_tax(entries: Sequence[Any] | None, owner: str) -> None:
    """None means no withholding tax applies; an empty sequence is ambiguous."""
    if entries is not None and len(entries) == 0:
        raise ValidationError(
            f"{owner} WithholdingTax must be None or a non-empty sequence",
            field="WithholdingTax",
        )


def check_submitter(
    tax_registration_number: str,
    tax_entity: str,
    software_certificate_number: int,
    owner: str,
) -> None:
    check_not_empty(tax_registration_number, "TaxRegistrationNumber", owner)
    check_not_empty(tax_entity, "TaxEntity", owner)
    check_non_negative(software_certificate_number, "SoftwareCertificateNumber", owner)


def guard(logger: logging.Logger, rule: Callable[..., None], *args: Any) -> None:
    """Run a rule, logging a violation at error level before re-raising it."""
    try:
        rule(*args)
    except ValidationError as e:
        logger.error(e.message)
        raise
