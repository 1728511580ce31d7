"""Exception taxonomy for the ingestion pipeline.

Every failure the pipeline reports is a :class:`LedgerIngestError`, so front
doors (CLI, API) can catch one type and surface ``str(exc)`` verbatim. Row
numbers in messages are 1-based file line numbers with the header (and any
preamble line) counted.
"""

from __future__ import annotations


class LedgerIngestError(Exception):
    """Base class for all ingestion failures."""


def _located(message: str, *, row: int | None, column: str | None) -> str:
    where: list[str] = []
    if row is not None:
        where.append(f"row {row}")
    if column:
        where.append(f"column {column!r}")
    return f"{', '.join(where)}: {message}" if where else message


class InvalidAmount(LedgerIngestError, ValueError):
    """A monetary field was empty or not a number after cleanup."""

    def __init__(self, value: str, *, row: int | None = None, column: str | None = None) -> None:
        self.value = value
        self.row = row
        self.column = column
        super().__init__(_located(f"invalid amount {value!r}", row=row, column=column))


class InvalidDate(LedgerIngestError, ValueError):
    """A non-empty date field did not match the dialect's date format."""

    def __init__(
        self,
        value: str,
        *,
        expected: str,
        row: int | None = None,
        column: str | None = None,
    ) -> None:
        self.value = value
        self.expected = expected
        self.row = row
        self.column = column
        super().__init__(
            _located(f"invalid date {value!r} (expected {expected})", row=row, column=column)
        )


class UnrecognizedFormat(LedgerIngestError):
    """Neither the filename nor the leading content matched a supported dialect."""


class EmptyImport(LedgerIngestError):
    """The file parsed structurally but produced no usable transactions."""


class UnknownAccount(LedgerIngestError, LookupError):
    """A parsed record references an account that does not exist in the store."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Account {label!r} not found; accounts are not created on import")


class StoreFailure(LedgerIngestError):
    """The underlying store rejected an operation (wraps the driver error)."""


__all__ = [
    "LedgerIngestError",
    "InvalidAmount",
    "InvalidDate",
    "UnrecognizedFormat",
    "EmptyImport",
    "UnknownAccount",
    "StoreFailure",
]
