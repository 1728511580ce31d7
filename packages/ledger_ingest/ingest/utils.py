"""Tabular helpers shared by the bank adapters.

Each adapter reads a delimited export through :func:`read_table`, then pulls
cells out by fixed position with :func:`cell`, converts them with
:func:`parse_date` / :func:`parse_amount` (which attach row and column context
to failures) and closes with :func:`finish`, which enforces the "at least one
transaction" rule.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from ..errors import EmptyImport, InvalidAmount, InvalidDate
from ..logging_setup import get_logger
from ..models import ParseResult
from ..normalizers import normalize_whitespace, parse_decimal

logger = get_logger("ledger_ingest.ingest.utils")

_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class Table:
    """A parsed export: header cells plus data records tagged with line numbers."""

    header: tuple[str, ...]
    records: list[tuple[int, list[str]]]


def read_table(text: str, *, delimiter: str, first_line: int = 1) -> Table:
    """Split ``text`` into a header and data records.

    Carriage returns and a leading BOM are removed and every field is trimmed.
    Blank lines are dropped. ``first_line`` is the file line number ``text``
    starts at (2 when the caller already consumed a preamble line), so record
    line numbers always refer to the original file.
    """

    cleaned = text.lstrip(_BOM).replace("\r", "")
    reader = csv.reader(io.StringIO(cleaned), delimiter=delimiter)
    header: tuple[str, ...] | None = None
    records: list[tuple[int, list[str]]] = []
    for fields in reader:
        if not fields or all(not f.strip() for f in fields):
            continue
        trimmed = [f.strip() for f in fields]
        if header is None:
            header = tuple(trimmed)
            continue
        records.append((reader.line_num + first_line - 1, trimmed))
    return Table(header=header or (), records=records)


def cell(fields: Sequence[str], index: int) -> str:
    """Return the trimmed field at ``index`` or ``""`` when the row is shorter."""

    return fields[index] if index < len(fields) else ""


def clean(value: str) -> str | None:
    """Collapse whitespace; ``None`` for blank values."""

    text = normalize_whitespace(value)
    return text or None


def column_name(header: Sequence[str], index: int, fallback: str) -> str:
    name = cell(header, index)
    return name or fallback


def raw_snapshot(header: Sequence[str], fields: Sequence[str]) -> dict[str, str]:
    """Map the bank's own header names to this row's cell values.

    Cells beyond the header are kept under ``column_<n>`` (1-based) so nothing
    in the row is lost.
    """

    snapshot: dict[str, str] = {}
    for i, value in enumerate(fields):
        key = header[i] if i < len(header) and header[i] else f"column_{i + 1}"
        snapshot[key] = value
    return snapshot


def parse_date(raw: str, fmt: str, *, expected: str, row: int, column: str) -> date:
    """Parse a non-empty date cell or raise :class:`InvalidDate` with context."""

    try:
        return datetime.strptime(raw, fmt).date()
    except ValueError as exc:
        raise InvalidDate(raw, expected=expected, row=row, column=column) from exc


def parse_amount(raw: str, *, row: int, column: str) -> Decimal:
    """Parse a non-empty amount cell or raise :class:`InvalidAmount` with context."""

    try:
        return parse_decimal(raw)
    except InvalidAmount as exc:
        raise InvalidAmount(raw, row=row, column=column) from exc


def finish(result: ParseResult, *, bank: str) -> ParseResult:
    """Reject empty results; otherwise log a one-line summary and return ``result``."""

    if not result.transactions:
        detail = f" ({len(result.diagnostics)} rows skipped)" if result.diagnostics else ""
        raise EmptyImport(f"No valid transactions found in {bank} CSV{detail}")
    logger.info(
        "Parsed %d %s transactions (%d rows skipped)",
        len(result.transactions),
        bank,
        len(result.diagnostics),
    )
    return result


__all__ = [
    "Table",
    "read_table",
    "cell",
    "clean",
    "column_name",
    "raw_snapshot",
    "parse_date",
    "parse_amount",
    "finish",
]
