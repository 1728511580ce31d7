"""Result types shared by the adapters, the importer and the front doors."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from .ctv import CanonicalTransaction


@dataclass(frozen=True, slots=True)
class RowDiagnostic:
    """Why a single input row was skipped instead of producing a transaction."""

    row: int
    reason: str

    def __str__(self) -> str:
        return f"row {self.row}: {self.reason}"


@dataclass(slots=True)
class ParseResult:
    """Output of one adapter run over a whole file.

    ``transactions`` are in file order. ``diagnostics`` lists every row that
    was recovered by skipping (short rows, blank dates, blank amounts); they
    are data, not log records, so callers decide how to surface them.
    """

    dialect: str
    transactions: list[CanonicalTransaction] = field(default_factory=list)
    diagnostics: list[RowDiagnostic] = field(default_factory=list)

    def skip(self, row: int, reason: str) -> None:
        self.diagnostics.append(RowDiagnostic(row=row, reason=reason))


class ImportOutcome(BaseModel):
    """Aggregate counts for one import call.

    ``skipped`` counts rows rejected by the store as duplicates (hash already
    present); rows dropped while parsing are reported in ``warnings``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_rows: int = Field(ge=0)
    imported: int = Field(ge=0)
    skipped: int = Field(ge=0)
    dialect: str | None = None
    warnings: tuple[str, ...] = ()


__all__ = ["RowDiagnostic", "ParseResult", "ImportOutcome"]
