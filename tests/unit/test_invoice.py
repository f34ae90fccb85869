"""Unit tests for InvoiceData and Invoice."""

import dataclasses
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest

from efatura.domain import (
    Invoice,
    InvoiceData,
    RecordChannel,
    TaxEntity,
    ValidationError,
    WithholdingTax,
    WithholdingTaxType,
)


class TestInvoiceData:
    """Tests for InvoiceData construction."""

    def test_fields_returned_as_supplied(self, invoice_kwargs: dict[str, Any]) -> None:
        data = InvoiceData(**invoice_kwargs)

        for name, value in invoice_kwargs.items():
            assert getattr(data, name) is value, name

    def test_end_to_end_valid(self, invoice_kwargs: dict[str, Any]) -> None:
        invoice_kwargs.update(
            eac_code="12345",
            cash_vat_scheme_indicator=True,
            paper_less_indicator=False,
            system_entry_date=datetime(2024, 1, 15, 10, 30, 0),
        )
        data = InvoiceData(**invoice_kwargs)

        assert data.eac_code == "12345"
        assert data.cash_vat_scheme_indicator is True
        assert data.paper_less_indicator is False

    def test_four_digit_eac_code_rejected(self, invoice_kwargs: dict[str, Any]) -> None:
        invoice_kwargs["eac_code"] = "1234"
        with pytest.raises(ValidationError) as exc:
            InvoiceData(**invoice_kwargs)
        assert exc.value.field == "EACCode"
        assert "EACCode must respect the regexp ^[0-9]{5}$" in str(exc.value)

    @pytest.mark.parametrize("code", ["", "123456", "ABCDE", "1234"])
    def test_malformed_eac_codes_rejected(
        self, invoice_kwargs: dict[str, Any], code: str
    ) -> None:
        invoice_kwargs["eac_code"] = code
        with pytest.raises(ValidationError):
            InvoiceData(**invoice_kwargs)

    def test_eac_code_none_accepted(self, invoice_kwargs: dict[str, Any]) -> None:
        invoice_kwargs["eac_code"] = None
        assert InvoiceData(**invoice_kwargs).eac_code is None

    def test_same_invalid_input_fails_the_same_way(
        self, invoice_kwargs: dict[str, Any]
    ) -> None:
        invoice_kwargs["eac_code"] = "12a45"
        messages = []
        for _ in range(2):
            with pytest.raises(ValidationError) as exc:
                InvoiceData(**invoice_kwargs)
            messages.append(str(exc.value))
        assert messages[0] == messages[1]

    @pytest.mark.parametrize("cash_vat", [True, False])
    @pytest.mark.parametrize("paperless", [True, False])
    def test_indicators_not_coerced(
        self, invoice_kwargs: dict[str, Any], cash_vat: bool, paperless: bool
    ) -> None:
        invoice_kwargs.update(
            cash_vat_scheme_indicator=cash_vat, paper_less_indicator=paperless
        )
        data = InvoiceData(**invoice_kwargs)
        assert data.cash_vat_scheme_indicator is cash_vat
        assert data.paper_less_indicator is paperless

    def test_hash_characters_zero_sentinel(self, invoice_kwargs: dict[str, Any]) -> None:
        invoice_kwargs["hash_characters"] = "0"
        assert InvoiceData(**invoice_kwargs).hash_characters == "0"

    def test_withholding_tax_defaults_to_none(self, invoice_kwargs: dict[str, Any]) -> None:
        del invoice_kwargs["withholding_tax"]
        assert InvoiceData(**invoice_kwargs).withholding_tax is None

    def test_withholding_tax_entries_kept_in_order(
        self, invoice_kwargs: dict[str, Any]
    ) -> None:
        entries = [
            WithholdingTax(Decimal("25.00"), WithholdingTaxType.PERSONAL_INCOME),
            WithholdingTax(Decimal("1.50"), WithholdingTaxType.STAMP_DUTY),
        ]
        invoice_kwargs["withholding_tax"] = entries
        assert InvoiceData(**invoice_kwargs).withholding_tax is entries

    def test_empty_withholding_tax_rejected(self, invoice_kwargs: dict[str, Any]) -> None:
        invoice_kwargs["withholding_tax"] = []
        with pytest.raises(ValidationError) as exc:
            InvoiceData(**invoice_kwargs)
        assert exc.value.field == "WithholdingTax"

    def test_eac_code_checked_before_withholding_tax(
        self, invoice_kwargs: dict[str, Any]
    ) -> None:
        invoice_kwargs.update(eac_code="1", withholding_tax=[])
        with pytest.raises(ValidationError) as exc:
            InvoiceData(**invoice_kwargs)
        assert exc.value.field == "EACCode"

    @pytest.mark.parametrize("hash_characters", [None, "", 0])
    def test_hash_characters_required(
        self, invoice_kwargs: dict[str, Any], hash_characters: Any
    ) -> None:
        invoice_kwargs["hash_characters"] = hash_characters
        with pytest.raises(ValidationError) as exc:
            InvoiceData(**invoice_kwargs)
        assert exc.value.field == "HashCharacters"

    @pytest.mark.parametrize(
        ("name", "field"),
        [
            ("cash_vat_scheme_indicator", "CashVATSchemeIndicator"),
            ("paper_less_indicator", "PaperLessIndicator"),
        ],
    )
    @pytest.mark.parametrize("value", [None, "no", 1, 0])
    def test_indicators_must_be_booleans(
        self, invoice_kwargs: dict[str, Any], name: str, field: str, value: Any
    ) -> None:
        invoice_kwargs[name] = value
        with pytest.raises(ValidationError) as exc:
            InvoiceData(**invoice_kwargs)
        assert exc.value.field == field

    def test_withholding_tax_checked_before_hash_and_indicators(
        self, invoice_kwargs: dict[str, Any]
    ) -> None:
        invoice_kwargs.update(
            withholding_tax=[], hash_characters=None, paper_less_indicator=None
        )
        with pytest.raises(ValidationError) as exc:
            InvoiceData(**invoice_kwargs)
        assert exc.value.field == "WithholdingTax"

    def test_frozen(self, invoice_kwargs: dict[str, Any]) -> None:
        data = InvoiceData(**invoice_kwargs)
        with pytest.raises(dataclasses.FrozenInstanceError):
            data.eac_code = "54321"  # type: ignore[misc]

    def test_logger_not_part_of_equality(self, invoice_kwargs: dict[str, Any]) -> None:
        first = InvoiceData(**invoice_kwargs)
        second = InvoiceData(**invoice_kwargs, logger=logging.getLogger("other"))
        assert first == second
        assert "logger" not in repr(first)


class TestInvoiceDataLogging:
    """Tests for the trace records emitted during construction."""

    def test_accepted_values_traced(
        self, invoice_kwargs: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO):
            InvoiceData(**invoice_kwargs)

        messages = [r.getMessage() for r in caplog.records]
        assert "Hash characters set to ABCD" in messages
        assert "Cash VAT Scheme Indicator set to true" in messages
        assert "Paper less Indicator set to false" in messages
        assert "EACCode set to 12345" in messages
        assert "SystemEntryDate set to 2024-01-15T10:30:00" in messages
        assert {r.name for r in caplog.records} == {"efatura.domain.invoice.InvoiceData"}

    def test_null_eac_code_traced(
        self, invoice_kwargs: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        invoice_kwargs["eac_code"] = None
        with caplog.at_level(logging.INFO):
            InvoiceData(**invoice_kwargs)
        assert "EACCode set to null" in [r.getMessage() for r in caplog.records]

    def test_error_logged_before_failure(
        self, invoice_kwargs: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        invoice_kwargs["eac_code"] = "1234"
        with caplog.at_level(logging.INFO):
            with pytest.raises(ValidationError):
                InvoiceData(**invoice_kwargs)

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "EACCode" in errors[0].getMessage()
        # Nothing is traced as accepted once a rule fails
        assert not any("set to" in r.getMessage() for r in caplog.records)

    def test_injected_logger_used(
        self, invoice_kwargs: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="injected"):
            InvoiceData(**invoice_kwargs, logger=logging.getLogger("injected"))
        assert caplog.records
        assert {r.name for r in caplog.records} == {"injected"}


class TestInvoice:
    """Tests for the Invoice submission wrapper."""

    def test_fields_returned_as_supplied(self, invoice_kwargs: dict[str, Any]) -> None:
        data = InvoiceData(**invoice_kwargs)
        channel = RecordChannel(system="Billing", version="1.0")
        invoice = Invoice("555555550", TaxEntity.GLOBAL, 1234, data, channel)

        assert invoice.tax_registration_number == "555555550"
        assert invoice.tax_entity is TaxEntity.GLOBAL
        assert invoice.software_certificate_number == 1234
        assert invoice.invoice_data is data
        assert invoice.record_channel is channel

    def test_establishment_name_accepted(self, invoice_kwargs: dict[str, Any]) -> None:
        invoice = Invoice("555555550", "Loja Porto", 0, InvoiceData(**invoice_kwargs))
        assert invoice.tax_entity == "Loja Porto"
        assert invoice.record_channel is None

    @pytest.mark.parametrize(
        ("tin", "entity", "certificate", "field"),
        [
            ("", "Global", 0, "TaxRegistrationNumber"),
            ("555555550", "", 0, "TaxEntity"),
            ("555555550", "Global", -1, "SoftwareCertificateNumber"),
        ],
    )
    def test_submitter_rules(
        self,
        invoice_kwargs: dict[str, Any],
        tin: str,
        entity: str,
        certificate: int,
        field: str,
    ) -> None:
        data = InvoiceData(**invoice_kwargs)
        with pytest.raises(ValidationError) as exc:
            Invoice(tin, entity, certificate, data)
        assert exc.value.field == field

    def test_submitter_traced(
        self, invoice_kwargs: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        data = InvoiceData(**invoice_kwargs)
        with caplog.at_level(logging.INFO):
            Invoice("555555550", TaxEntity.HEAD_OFFICE, 0, data)
        messages = [r.getMessage() for r in caplog.records]
        assert "TaxRegistrationNumber set to: 555555550" in messages
        assert "TaxEntity set to: Sede" in messages
        assert "SoftwareCertificateNumber set to: 0" in messages
