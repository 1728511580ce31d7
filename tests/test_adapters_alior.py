from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from ledger_ingest.errors import EmptyImport, InvalidAmount, InvalidDate
from ledger_ingest.ingest.adapters import alior
from tests.helpers.samples import ALIOR_CSV, ALIOR_HEADER


def test_three_row_statement_maps_counterparty_by_sign() -> None:
    result = alior.parse(ALIOR_CSV)

    assert result.dialect == "alior"
    assert result.diagnostics == []
    income, rent, shop = result.transactions

    assert income.amount == Decimal("340.00")
    assert income.counterparty == "ACME SP. Z O.O."
    assert income.description == "Wynagrodzenie luty"

    assert rent.amount == Decimal("-1180.00")
    assert rent.counterparty == "SPÓŁDZIELNIA MIESZKANIOWA"
    assert rent.transaction_date == date(2026, 2, 10)
    assert rent.booking_date == date(2026, 2, 11)

    # Only the detail line is present
    assert shop.amount == Decimal("-7.19")
    assert shop.counterparty == "ZABKA Z1234 WARSZAWA"
    assert shop.description == "ZABKA Z1234 WARSZAWA"

    for tx in result.transactions:
        assert tx.account_label == "alior"
        assert tx.currency == "PLN"
        assert tx.state == "completed"
        assert tx.bank_category is None


def test_raw_data_keeps_original_cells_under_bank_headers() -> None:
    rent = alior.parse(ALIOR_CSV).transactions[1]
    assert rent.raw_data["Kwota operacji"] == "-1 180,00"
    assert rent.raw_data["Nazwa odbiorcy"] == "SPÓŁDZIELNIA MIESZKANIOWA"
    assert rent.raw_data["Numer rachunku odbiorcy"] == "33 3333"


def test_header_on_first_line_without_metadata() -> None:
    content = ALIOR_HEADER + "\n" + "01-02-2026;;;;Opłata;-5,00;PLN;;;;\n"
    (tx,) = alior.parse(content).transactions
    # Account-currency columns are blank: operation amount/currency are used
    assert tx.amount == Decimal("-5.00")
    assert tx.currency == "PLN"
    assert tx.booking_date is None
    assert tx.counterparty == "Opłata"


def test_account_currency_amount_preferred_over_operation_amount() -> None:
    content = ALIOR_HEADER + "\n" + "01-02-2026;;;SHOP;Zakup;-10,00;EUR;-43,50;PLN;;\n"
    (tx,) = alior.parse(content).transactions
    assert tx.amount == Decimal("-43.50")
    assert tx.currency == "PLN"
    assert tx.counterparty == "SHOP"


def test_bom_and_crlf_are_tolerated() -> None:
    content = "\ufeff" + ALIOR_CSV.replace("\n", "\r\n")
    result = alior.parse(content)
    assert len(result.transactions) == 3
    assert result.transactions[0].description == "Wynagrodzenie luty"


def test_short_rows_and_blank_dates_are_skipped_with_line_numbers() -> None:
    content = (
        ALIOR_HEADER
        + "\n"
        + "01-02-2026;;;;too short\n"
        + ";;;;Brak daty;-1,00;PLN;;;;\n"
        + "02-02-2026;;;;Kawa;-12,00;PLN;;;;\n"
    )
    result = alior.parse(content)
    assert [tx.description for tx in result.transactions] == ["Kawa"]
    assert [(d.row, d.reason) for d in result.diagnostics] == [
        (2, "only 5 columns, expected at least 9"),
        (3, "missing transaction date"),
    ]


def test_blank_amount_and_empty_description_are_skipped() -> None:
    content = (
        ALIOR_HEADER
        + "\n"
        + "01-02-2026;;;;Bez kwoty;;PLN;;;;\n"
        + "02-02-2026;;;;;-3,00;PLN;;;;\n"
        + "03-02-2026;;;;Kawa;-12,00;PLN;;;;\n"
    )
    result = alior.parse(content)
    assert len(result.transactions) == 1
    assert [d.row for d in result.diagnostics] == [2, 3]


def test_malformed_date_aborts_with_row_and_column() -> None:
    content = ALIOR_HEADER + "\n" + "2026-02-01;;;;Kawa;-12,00;PLN;;;;\n"
    with pytest.raises(InvalidDate) as excinfo:
        alior.parse(content)
    err = excinfo.value
    assert err.row == 2
    assert err.column == "Data transakcji"
    assert err.value == "2026-02-01"
    assert "DD-MM-YYYY" in str(err)


def test_malformed_amount_aborts() -> None:
    content = ALIOR_HEADER + "\n" + "01-02-2026;;;;Kawa;dwanaście;PLN;;;;\n"
    with pytest.raises(InvalidAmount) as excinfo:
        alior.parse(content)
    assert excinfo.value.row == 2
    assert excinfo.value.column == "Kwota operacji"


def test_all_rows_without_date_is_empty_import() -> None:
    content = ALIOR_HEADER + "\n" + ";;;;A;-1,00;PLN;;;;\n" + ";;;;B;-2,00;PLN;;;;\n"
    with pytest.raises(EmptyImport, match="Alior"):
        alior.parse(content)


def test_metadata_line_only_is_empty_import() -> None:
    with pytest.raises(EmptyImport):
        alior.parse("Kryteria transakcji: od 01-02-2026 do 23-02-2026")
