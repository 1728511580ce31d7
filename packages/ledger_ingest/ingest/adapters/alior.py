"""Adapter for Alior Bank "Historia_Operacji" CSV exports.

Layout (semicolon-delimited, Polish decimal amounts, ``DD-MM-YYYY`` dates)::

    Kryteria transakcji: od 2026-01-01 do 2026-02-23          <- optional
    Data transakcji;Data księgowania;Nazwa nadawcy;Nazwa odbiorcy;
    Szczegóły transakcji;Kwota operacji;Waluta operacji;
    Kwota w walucie rachunku;Waluta rachunku;Numer rachunku nadawcy;
    Numer rachunku odbiorcy

Mapping rules:
- ``amount``: the account-currency amount, or the operation amount when the
  former is blank (currency follows the same preference)
- ``counterparty``: recipient for outflows, sender for inflows, else details
- ``description``: details, else the same sender/recipient name
- ``state``: always ``completed``
"""

from __future__ import annotations

from collections.abc import Sequence

from ...ctv import CanonicalTransaction
from ...errors import EmptyImport
from ...models import ParseResult
from ...normalizers import first_non_empty
from ..utils import (
    cell,
    clean,
    column_name,
    finish,
    parse_amount,
    parse_date,
    raw_snapshot,
    read_table,
)

ACCOUNT_LABEL = "alior"
METADATA_PREFIX = "Kryteria transakcji"
DEFAULT_CURRENCY = "PLN"

COL_TRANSACTION_DATE = 0
COL_BOOKING_DATE = 1
COL_SENDER_NAME = 2
COL_RECIPIENT_NAME = 3
COL_DETAILS = 4
COL_OPERATION_AMOUNT = 5
COL_OPERATION_CURRENCY = 6
COL_ACCOUNT_AMOUNT = 7
COL_ACCOUNT_CURRENCY = 8

MIN_COLUMNS = 9

_DATE_FORMAT = "%d-%m-%Y"
_DATE_EXPECTED = "DD-MM-YYYY"


def parse(content: str) -> ParseResult:
    """Parse an Alior export into canonical transactions.

    Raises ``InvalidDate``/``InvalidAmount`` on malformed non-empty cells and
    ``EmptyImport`` when no row survives.
    """

    text = content.lstrip("\ufeff").replace("\r", "")
    first_line = 1
    if text.startswith(METADATA_PREFIX):
        _metadata, newline, text = text.partition("\n")
        if not newline:
            raise EmptyImport("Alior CSV contains only the metadata line")
        first_line = 2

    table = read_table(text, delimiter=";", first_line=first_line)
    result = ParseResult(dialect=ACCOUNT_LABEL)
    for line, fields in table.records:
        tx = _to_ctv(table.header, line, fields, result)
        if tx is not None:
            result.transactions.append(tx)
    return finish(result, bank="Alior")


def _to_ctv(
    header: Sequence[str],
    line: int,
    fields: list[str],
    result: ParseResult,
) -> CanonicalTransaction | None:
    if len(fields) < MIN_COLUMNS:
        result.skip(line, f"only {len(fields)} columns, expected at least {MIN_COLUMNS}")
        return None

    date_raw = cell(fields, COL_TRANSACTION_DATE)
    if not date_raw:
        result.skip(line, "missing transaction date")
        return None
    transaction_date = parse_date(
        date_raw,
        _DATE_FORMAT,
        expected=_DATE_EXPECTED,
        row=line,
        column=column_name(header, COL_TRANSACTION_DATE, "Data transakcji"),
    )
    booking_raw = cell(fields, COL_BOOKING_DATE)
    booking_date = (
        parse_date(
            booking_raw,
            _DATE_FORMAT,
            expected=_DATE_EXPECTED,
            row=line,
            column=column_name(header, COL_BOOKING_DATE, "Data księgowania"),
        )
        if booking_raw
        else None
    )

    amount_col = COL_ACCOUNT_AMOUNT if cell(fields, COL_ACCOUNT_AMOUNT) else COL_OPERATION_AMOUNT
    amount_raw = cell(fields, amount_col)
    if not amount_raw:
        result.skip(line, "missing amount")
        return None
    amount = parse_amount(
        amount_raw,
        row=line,
        column=column_name(header, amount_col, "Kwota operacji"),
    )
    currency = (
        first_non_empty(
            [cell(fields, COL_ACCOUNT_CURRENCY), cell(fields, COL_OPERATION_CURRENCY)]
        )
        or DEFAULT_CURRENCY
    )

    sender = clean(cell(fields, COL_SENDER_NAME))
    recipient = clean(cell(fields, COL_RECIPIENT_NAME))
    details = clean(cell(fields, COL_DETAILS))
    # Outflows name the recipient, inflows the sender.
    party = recipient if amount.is_signed() else sender

    description = first_non_empty([details, party])
    if description is None:
        result.skip(line, "no details and no sender/recipient name")
        return None

    return CanonicalTransaction(
        account_label=ACCOUNT_LABEL,
        transaction_date=transaction_date,
        booking_date=booking_date,
        counterparty=first_non_empty([party, details]),
        description=description,
        amount=amount,
        currency=currency,
        raw_data=raw_snapshot(header, fields),
    )


__all__ = ["parse", "ACCOUNT_LABEL", "METADATA_PREFIX"]
