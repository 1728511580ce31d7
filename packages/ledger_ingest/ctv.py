"""Canonical Transaction View (CTV) record emitted by every bank adapter.

Unlike a CSV-friendly string view, the CTV here carries typed values: dates
are :class:`datetime.date` and amounts are exact :class:`decimal.Decimal`
values with the precision the bank exported (never floats, never rounded).

Field order:
    - account_label: label of the bank/account the row belongs to
    - transaction_date: economically effective date
    - booking_date: settlement/posting date, when the bank reports one
    - counterparty: other party, derived per dialect
    - description: never empty
    - amount: signed; negative is an outflow
    - currency: 3-letter code
    - bank_category / bank_reference / bank_type: bank metadata, cleaned
    - state: "completed" | "pending" | "reversed"
    - raw_data: the original row keyed by the bank's header names
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

STATE_COMPLETED = "completed"
STATE_PENDING = "pending"
STATE_REVERSED = "reversed"

STATES: frozenset[str] = frozenset({STATE_COMPLETED, STATE_PENDING, STATE_REVERSED})


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A single canonicalized transaction row."""

    account_label: str
    transaction_date: date
    booking_date: date | None
    counterparty: str | None
    description: str
    amount: Decimal
    currency: str
    bank_category: str | None = None
    bank_reference: str | None = None
    bank_type: str | None = None
    state: str = STATE_COMPLETED
    raw_data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.description:
            raise ValueError("CanonicalTransaction.description must be non-empty")
        if self.state not in STATES:
            raise ValueError(f"unsupported transaction state: {self.state!r}")


__all__ = [
    "CanonicalTransaction",
    "STATES",
    "STATE_COMPLETED",
    "STATE_PENDING",
    "STATE_REVERSED",
]
