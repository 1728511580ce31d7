"""Adapter for Revolut "account-statement" CSV exports (Polish locale).

Header (after encoding repair)::

    Rodzaj,Produkt,Data rozpoczęcia,Data zrealizowania,Opis,Kwota,Opłata,
    Waluta,State,Saldo

Revolut files are frequently double-encoded (UTF-8 read as Latin-1 and saved
again as UTF-8), so the whole text goes through
:func:`~ledger_ingest.normalizers.fix_mojibake` before it is split into cells.

Mapping rules:
- dates: the ``YYYY-MM-DD`` prefix of "Data rozpoczęcia" (transaction) and
  "Data zrealizowania" (booking, may be blank)
- ``description``: "Opis", else "Rodzaj"
- ``counterparty``: derived from "Opis" by :func:`extract_counterparty`
- ``bank_type``: "Rodzaj"
- ``state``: "State" mapped by :func:`map_state`
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

from ...ctv import STATE_COMPLETED, STATE_PENDING, STATE_REVERSED, CanonicalTransaction
from ...models import ParseResult
from ...normalizers import first_non_empty, fix_mojibake
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

ACCOUNT_LABEL = "revolut"
DEFAULT_CURRENCY = "PLN"

COL_TYPE = 0
COL_STARTED_DATE = 2
COL_COMPLETED_DATE = 3
COL_DESCRIPTION = 4
COL_AMOUNT = 5
COL_CURRENCY = 7
COL_STATE = 8

MIN_COLUMNS = 10

_DATE_FORMAT = "%Y-%m-%d"
_DATE_EXPECTED = "YYYY-MM-DD"

# Descriptions this long (in UTF-8 bytes) are sentences, not merchant names.
_MAX_MERCHANT_NAME = 100

_NO_COUNTERPARTY = object()


def _after(marker: str) -> Callable[[str], str | None]:
    def rule(description: str) -> str | None:
        _before, found, rest = description.partition(marker)
        return rest.strip() or None if found else None

    return rule


def _top_up(description: str) -> object | None:
    # Card top-ups ("Zasilenie o *3821") have no meaningful other party.
    return _NO_COUNTERPARTY if description.startswith("Zasilenie") else None


def _merchant_name(description: str) -> str | None:
    if ":" in description or len(description.encode("utf-8")) >= _MAX_MERCHANT_NAME:
        return None
    return description or None


# Evaluated in order; the first rule returning a value decides.
COUNTERPARTY_RULES: tuple[Callable[[str], object | None], ...] = (
    _after("do:"),  # "Przelew do: JAN KOWALSKI"
    _after("od:"),  # "Przelew od: ANNA NOWAK"
    _top_up,
    _merchant_name,  # "Steam"
)


def extract_counterparty(description: str) -> str | None:
    """Derive the other party's name from a Revolut description."""

    for rule in COUNTERPARTY_RULES:
        found = rule(description)
        if found is _NO_COUNTERPARTY:
            return None
        if isinstance(found, str):
            return found
    return None


def map_state(raw: str) -> str:
    """Map Revolut's localized state onto ``completed``/``reversed``/``pending``."""

    upper = raw.strip().upper()
    if "ZAKON" in upper or "ZAKOŃCZONO" in upper:
        return STATE_COMPLETED
    if "COFNI" in upper:
        return STATE_REVERSED
    return STATE_PENDING


def parse_date_prefix(raw: str, *, row: int, column: str) -> date:
    """Parse the date part of ``"YYYY-MM-DD HH:MM:SS"``."""

    return parse_date(raw[:10], _DATE_FORMAT, expected=_DATE_EXPECTED, row=row, column=column)


def parse(content: str) -> ParseResult:
    """Repair encoding, then parse a Revolut export into canonical transactions."""

    # The BOM is outside Latin-1 and would block the repair.
    table = read_table(fix_mojibake(content.lstrip("\ufeff")), delimiter=",")
    result = ParseResult(dialect=ACCOUNT_LABEL)
    for line, fields in table.records:
        tx = _to_ctv(table.header, line, fields, result)
        if tx is not None:
            result.transactions.append(tx)
    return finish(result, bank="Revolut")


def _to_ctv(
    header: Sequence[str],
    line: int,
    fields: list[str],
    result: ParseResult,
) -> CanonicalTransaction | None:
    if len(fields) < MIN_COLUMNS:
        result.skip(line, f"only {len(fields)} columns, expected at least {MIN_COLUMNS}")
        return None

    started_raw = cell(fields, COL_STARTED_DATE)
    if not started_raw:
        result.skip(line, "missing start date")
        return None
    transaction_date = parse_date_prefix(
        started_raw,
        row=line,
        column=column_name(header, COL_STARTED_DATE, "Data rozpoczęcia"),
    )
    completed_raw = cell(fields, COL_COMPLETED_DATE)
    booking_date = (
        parse_date_prefix(
            completed_raw,
            row=line,
            column=column_name(header, COL_COMPLETED_DATE, "Data zrealizowania"),
        )
        if completed_raw
        else None
    )

    amount_raw = cell(fields, COL_AMOUNT)
    if not amount_raw:
        result.skip(line, "missing amount")
        return None
    amount = parse_amount(amount_raw, row=line, column=column_name(header, COL_AMOUNT, "Kwota"))

    operation_type = clean(cell(fields, COL_TYPE))
    opis = clean(cell(fields, COL_DESCRIPTION))
    description = first_non_empty([opis, operation_type])
    if description is None:
        result.skip(line, "no description and no operation type")
        return None

    return CanonicalTransaction(
        account_label=ACCOUNT_LABEL,
        transaction_date=transaction_date,
        booking_date=booking_date,
        counterparty=extract_counterparty(opis) if opis else None,
        description=description,
        amount=amount,
        currency=cell(fields, COL_CURRENCY) or DEFAULT_CURRENCY,
        bank_type=operation_type,
        state=map_state(cell(fields, COL_STATE)),
        raw_data=raw_snapshot(header, fields),
    )


__all__ = [
    "parse",
    "extract_counterparty",
    "map_state",
    "parse_date_prefix",
    "ACCOUNT_LABEL",
]
