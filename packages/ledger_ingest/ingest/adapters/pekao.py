"""Adapter for Bank Pekao "Lista_operacji" CSV exports.

Layout (semicolon-delimited, header on the first line, ``DD.MM.YYYY`` dates)::

    Data księgowania;Data waluty;Nadawca / Odbiorca;Adres nadawcy / odbiorcy;
    Rachunek Źródłowy;Rachunek docelowy;Tytuł;Kwota operacji;Waluta;
    Numer referencyjny;Typ operacji;Kategoria;Mile transakcyjne

Mapping rules:
- ``transaction_date``: "Data waluty" (value date); ``booking_date``: "Data
  księgowania"
- ``counterparty``: "Nadawca / Odbiorca"
- ``description``: "Tytuł", else the counterparty
- ``bank_reference``: "Numer referencyjny" without the spreadsheet quote
  prefix Pekao puts in front of numeric identifiers (``'0001234567``); the
  account-number cells lose the same prefix in ``raw_data``
- ``bank_category`` / ``bank_type``: "Kategoria" / "Typ operacji" verbatim
- ``state``: always ``completed``
"""

from __future__ import annotations

from collections.abc import Sequence

from ...ctv import CanonicalTransaction
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

ACCOUNT_LABEL = "pekao"
DEFAULT_CURRENCY = "PLN"

COL_BOOKING_DATE = 0
COL_VALUE_DATE = 1
COL_COUNTERPARTY = 2
COL_SOURCE_ACCOUNT = 4
COL_TARGET_ACCOUNT = 5
COL_TITLE = 6
COL_AMOUNT = 7
COL_CURRENCY = 8
COL_REFERENCE = 9
COL_OPERATION_TYPE = 10
COL_CATEGORY = 11

MIN_COLUMNS = 9

# Cells Pekao prefixes with a spreadsheet text marker.
_QUOTED_COLUMNS = frozenset({COL_SOURCE_ACCOUNT, COL_TARGET_ACCOUNT, COL_REFERENCE})

_DATE_FORMAT = "%d.%m.%Y"
_DATE_EXPECTED = "DD.MM.YYYY"


def strip_leading_quote(value: str) -> str:
    """Drop one leading ``'`` (spreadsheet text marker) and trim."""

    return (value[1:] if value.startswith("'") else value).strip()


def _unquoted(fields: list[str]) -> list[str]:
    return [
        strip_leading_quote(value) if i in _QUOTED_COLUMNS else value
        for i, value in enumerate(fields)
    ]


def parse(content: str) -> ParseResult:
    """Parse a Pekao export into canonical transactions."""

    table = read_table(content, delimiter=";")
    result = ParseResult(dialect=ACCOUNT_LABEL)
    for line, fields in table.records:
        tx = _to_ctv(table.header, line, fields, result)
        if tx is not None:
            result.transactions.append(tx)
    return finish(result, bank="Pekao")


def _to_ctv(
    header: Sequence[str],
    line: int,
    fields: list[str],
    result: ParseResult,
) -> CanonicalTransaction | None:
    if len(fields) < MIN_COLUMNS:
        result.skip(line, f"only {len(fields)} columns, expected at least {MIN_COLUMNS}")
        return None

    date_raw = cell(fields, COL_VALUE_DATE)
    if not date_raw:
        result.skip(line, "missing value date")
        return None
    transaction_date = parse_date(
        date_raw,
        _DATE_FORMAT,
        expected=_DATE_EXPECTED,
        row=line,
        column=column_name(header, COL_VALUE_DATE, "Data waluty"),
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

    amount_raw = cell(fields, COL_AMOUNT)
    if not amount_raw:
        result.skip(line, "missing amount")
        return None
    amount = parse_amount(
        amount_raw,
        row=line,
        column=column_name(header, COL_AMOUNT, "Kwota operacji"),
    )

    counterparty = clean(cell(fields, COL_COUNTERPARTY))
    description = first_non_empty([clean(cell(fields, COL_TITLE)), counterparty])
    if description is None:
        result.skip(line, "no title and no counterparty")
        return None

    return CanonicalTransaction(
        account_label=ACCOUNT_LABEL,
        transaction_date=transaction_date,
        booking_date=booking_date,
        counterparty=counterparty,
        description=description,
        amount=amount,
        currency=cell(fields, COL_CURRENCY) or DEFAULT_CURRENCY,
        bank_category=clean(cell(fields, COL_CATEGORY)),
        bank_reference=clean(strip_leading_quote(cell(fields, COL_REFERENCE))),
        bank_type=clean(cell(fields, COL_OPERATION_TYPE)),
        raw_data=raw_snapshot(header, _unquoted(fields)),
    )


__all__ = ["parse", "strip_leading_quote", "ACCOUNT_LABEL"]
