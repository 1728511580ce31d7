"""Shared SQLAlchemy models registry for the ledger database.

Currently includes the ledger domain models used by ``ledger_ingest``.
"""

from .ledger import Account, Base, ImportLog, LedgerTransaction

__all__ = [
    "Base",
    "Account",
    "LedgerTransaction",
    "ImportLog",
]
