"""Store operations for the importer.

Functions here write to the shared ledger database owned by ``libs/db``. They
rely on the SQLAlchemy ORM models in ``db.models.ledger`` and a session
provided by the caller (see ``db.client.session_scope``).

Scope:
- Resolve account labels to ids (accounts are never created on import).
- Insert a transaction unless its content hash is already present, as one
  ``INSERT ... ON CONFLICT (hash) DO NOTHING`` statement.
- Append import-log rows and report per-account transaction counts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from db.models.ledger import Account, ImportLog, LedgerTransaction

from .ctv import CanonicalTransaction

DEFAULT_ACCOUNTS: tuple[tuple[str, str], ...] = (
    ("alior", "PLN"),
    ("pekao", "PLN"),
    ("revolut", "PLN"),
)


@dataclass(frozen=True, slots=True)
class AccountSummary:
    name: str
    currency: str
    transaction_count: int


def _insert_for(session: Session):
    """Return the dialect-specific ``insert`` construct that supports ON CONFLICT."""

    name = session.get_bind().dialect.name
    if name == "postgresql":
        return pg_insert
    if name == "sqlite":
        return sqlite_insert
    raise NotImplementedError(f"insert-or-skip is not implemented for dialect {name!r}")


def find_account_by_name(session: Session, name: str) -> int | None:
    """Return the id of the account called ``name`` or ``None``."""

    return session.execute(select(Account.id).where(Account.name == name)).scalar_one_or_none()


def insert_transaction_if_new(
    session: Session,
    *,
    account_id: int,
    tx: CanonicalTransaction,
    content_hash: str,
) -> bool:
    """Insert ``tx`` unless a row with ``content_hash`` exists; ``True`` when inserted.

    The existence check and the insert are a single statement, so concurrent
    imports of overlapping files cannot both insert the same hash.
    """

    values = {
        "hash": content_hash,
        "account_id": account_id,
        "transaction_date": tx.transaction_date,
        "booking_date": tx.booking_date,
        "counterparty": tx.counterparty,
        "description": tx.description,
        "amount": tx.amount,
        "currency": tx.currency,
        "category_source": "bank" if tx.bank_category else None,
        "bank_category": tx.bank_category,
        "bank_reference": tx.bank_reference,
        "bank_type": tx.bank_type,
        "state": tx.state,
        "raw_data": dict(tx.raw_data),
    }
    insert = _insert_for(session)
    stmt = (
        insert(LedgerTransaction)
        .values(values)
        .on_conflict_do_nothing(index_elements=[LedgerTransaction.hash])
    )
    result = session.execute(stmt)
    return result.rowcount == 1


def insert_import_log(
    session: Session,
    *,
    filename: str,
    account_id: int,
    total_rows: int,
    imported: int,
    skipped: int,
) -> ImportLog:
    """Append one import-log row and flush it so ``id`` is populated."""

    entry = ImportLog(
        filename=filename,
        account_id=account_id,
        total_rows=total_rows,
        imported=imported,
        skipped=skipped,
    )
    session.add(entry)
    session.flush()
    return entry


def seed_accounts(
    session: Session,
    accounts: Iterable[tuple[str, str]] = DEFAULT_ACCOUNTS,
) -> int:
    """Create the given ``(name, currency)`` accounts when missing; return how many were added."""

    insert = _insert_for(session)
    added = 0
    for name, currency in accounts:
        stmt = (
            insert(Account)
            .values(name=name, currency=currency)
            .on_conflict_do_nothing(index_elements=[Account.name])
        )
        added += session.execute(stmt).rowcount
    return added


def list_accounts_with_counts(session: Session) -> list[AccountSummary]:
    """All accounts ordered by name, each with its number of stored transactions."""

    stmt = (
        select(Account.name, Account.currency, func.count(LedgerTransaction.id))
        .outerjoin(LedgerTransaction, LedgerTransaction.account_id == Account.id)
        .group_by(Account.id, Account.name, Account.currency)
        .order_by(Account.name)
    )
    return [
        AccountSummary(name=name, currency=currency, transaction_count=count)
        for name, currency, count in session.execute(stmt)
    ]


__all__ = [
    "AccountSummary",
    "DEFAULT_ACCOUNTS",
    "find_account_by_name",
    "insert_transaction_if_new",
    "insert_import_log",
    "seed_accounts",
    "list_accounts_with_counts",
]
