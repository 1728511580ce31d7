"""Pick the bank dialect for an uploaded export and run its adapter.

Detection is a closed, ordered registry: the filename is consulted first
(bank exports keep their default names in practice), then the first three
lines of content are sniffed for header tokens. The first match wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..errors import UnrecognizedFormat
from ..logging_setup import get_logger
from ..models import ParseResult
from .adapters import alior, pekao, revolut

logger = get_logger("ledger_ingest.ingest.detect")

_SNIFF_LINES = 3


@dataclass(frozen=True, slots=True)
class Dialect:
    """One supported export format."""

    name: str
    bank: str
    filename_markers: tuple[str, ...]
    parse: Callable[[str], ParseResult]
    example_filename: str

    def matches_filename(self, filename: str) -> bool:
        lower = filename.lower()
        return any(marker in lower for marker in self.filename_markers)


ALIOR = Dialect(
    name=alior.ACCOUNT_LABEL,
    bank="Alior",
    filename_markers=("historia_operacji",),
    parse=alior.parse,
    example_filename="Historia_Operacji_*",
)
PEKAO = Dialect(
    name=pekao.ACCOUNT_LABEL,
    bank="Pekao",
    filename_markers=("lista_operacji",),
    parse=pekao.parse,
    example_filename="Lista_operacji_*",
)
REVOLUT = Dialect(
    name=revolut.ACCOUNT_LABEL,
    bank="Revolut",
    filename_markers=("account-statement", "revolut"),
    parse=revolut.parse,
    example_filename="account-statement_*",
)

# Filename checks run in this order.
DIALECTS: tuple[Dialect, ...] = (ALIOR, PEKAO, REVOLUT)

# Pekao's booking-date header as exported, without diacritics, and after the
# two common double-encodings (UTF-8 read as Latin-1 / as cp1252).
_PEKAO_HEADER_TOKENS = (
    "Data księgowania",
    "Data ksiegowania",
    "Data ksi\u00c4\u0099gowania",
    "Data ksi\u00c4\u2122gowania",
    "Kategoria",
)
# Only Alior names the sender column; its header otherwise shares
# "Data księgowania" with Pekao.
_ALIOR_HEADER_TOKENS = (alior.METADATA_PREFIX, "Nazwa nadawcy")


def _sniff(head: str) -> Dialect | None:
    if any(token in head for token in _ALIOR_HEADER_TOKENS):
        return ALIOR
    if any(token in head for token in _PEKAO_HEADER_TOKENS):
        return PEKAO
    if "Rodzaj" in head and "Produkt" in head:
        return REVOLUT
    return None


def _supported() -> str:
    return ", ".join(f"{d.bank} ({d.example_filename})" for d in DIALECTS)


def detect_format(filename: str, content: str) -> Dialect:
    """Return the dialect for ``filename``/``content`` or raise ``UnrecognizedFormat``."""

    for dialect in DIALECTS:
        if dialect.matches_filename(filename):
            logger.info("Detected %s format from filename %r", dialect.bank, filename)
            return dialect

    head = "\n".join(content.lstrip("\ufeff").split("\n")[:_SNIFF_LINES])
    dialect = _sniff(head)
    if dialect is not None:
        logger.info("Detected %s format from content of %r", dialect.bank, filename)
        return dialect

    raise UnrecognizedFormat(f"Unable to detect CSV format. Supported: {_supported()}")


def detect_and_parse(filename: str, content: str) -> ParseResult:
    """Detect the dialect and parse ``content`` with its adapter."""

    return detect_format(filename, content).parse(content)


__all__ = ["Dialect", "DIALECTS", "detect_format", "detect_and_parse"]
