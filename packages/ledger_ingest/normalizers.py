"""Locale-aware value parsing and text cleanup shared by every bank adapter.

- :func:`parse_decimal` reads Polish-formatted amounts (``"-1 180,00"``) into
  exact :class:`~decimal.Decimal` values.
- :func:`fix_mojibake` reverses UTF-8 text that was decoded as Latin-1 and
  re-encoded (``"ZAKOÅ\\x83CZONO"`` → ``"ZAKOŃCZONO"``).
- :func:`compute_hash` is the content hash used as the ledger's dedup key.
- :func:`normalize_whitespace` / :func:`first_non_empty` are the small text
  helpers the adapters build their fallback chains from.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

from .ctv import CanonicalTransaction
from .errors import InvalidAmount

# Thousands separators seen in exports: space, NBSP and narrow NBSP.
_THOUSANDS_SEPARATORS = (" ", "\u00a0", "\u202f")
_PLAIN_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_ALLOWED_CONTROL = frozenset("\t\n\r")


def parse_decimal(raw: str) -> Decimal:
    """Parse a comma-decimal amount string into an exact ``Decimal``.

    ``"-1 180,00"`` → ``Decimal("-1180.00")``; ``"50"`` → ``Decimal("50")``.
    The exported scale is preserved. Raises :class:`InvalidAmount` on empty
    input or anything that is not a plain number after cleanup.
    """

    s = raw.strip()
    for sep in _THOUSANDS_SEPARATORS:
        s = s.replace(sep, "")
    s = s.replace(",", ".")
    if not s or not _PLAIN_NUMBER.fullmatch(s):
        raise InvalidAmount(raw)
    try:
        return Decimal(s)
    except InvalidOperation as exc:  # pragma: no cover - regex already guards
        raise InvalidAmount(raw) from exc


def fix_mojibake(text: str) -> str:
    """Undo UTF-8 → Latin-1 → UTF-8 double encoding; a no-op on clean text.

    The repair is attempted only when every character fits in one byte. The
    repaired text is accepted only if it differs from the input and carries no
    control characters besides tab/newline/carriage return.
    """

    try:
        repaired = text.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return text
    if repaired == text:
        return text
    for ch in repaired:
        if ch not in _ALLOWED_CONTROL and unicodedata.category(ch) == "Cc":
            return text
    return repaired


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace to a single space and trim the ends."""

    return " ".join(text.split())


def first_non_empty(candidates: Iterable[str | None]) -> str | None:
    """Return the first candidate that is non-empty after stripping, else ``None``."""

    for value in candidates:
        if value is None:
            continue
        stripped = value.strip()
        if stripped:
            return stripped
    return None


def _normalize_description(description: str) -> str:
    return normalize_whitespace(description.lower())


def compute_hash(account: str, date_iso: str, amount: Decimal | str, description: str) -> str:
    """SHA-256 hex digest over ``account|date|amount|normalized description``.

    The description is lower-cased with whitespace collapsed. Counterparty,
    currency and bank metadata are deliberately not part of the key.
    """

    payload = "|".join((account, date_iso, str(amount), _normalize_description(description)))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def transaction_hash(tx: CanonicalTransaction) -> str:
    """Content hash for a canonical record (see :func:`compute_hash`)."""

    return compute_hash(
        tx.account_label,
        tx.transaction_date.isoformat(),
        tx.amount,
        tx.description,
    )


__all__ = [
    "parse_decimal",
    "fix_mojibake",
    "normalize_whitespace",
    "first_non_empty",
    "compute_hash",
    "transaction_hash",
]
