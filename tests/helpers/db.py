"""DB helpers for tests: bootstrap a temporary SQLite ledger and seed accounts."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from db import Base
from db.client import get_engine, session_scope
from db.models.ledger import ImportLog, LedgerTransaction
from sqlalchemy import event, func, select

from ledger_ingest.persistence import DEFAULT_ACCOUNTS, seed_accounts


def bootstrap_sqlite_db(
    db_file: Path,
    *,
    accounts: Iterable[tuple[str, str]] = DEFAULT_ACCOUNTS,
    set_default_env: bool = False,
) -> str:
    """Create a SQLite database file, initialize schema and accounts, and return the URL.

    Using a file-backed SQLite DB ensures multiple SQLAlchemy connections share
    the same state (in-memory DBs are per-connection by default).
    """

    url = f"sqlite+pysqlite:///{db_file}"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    engine = get_engine(database_url=url)

    # Enforce FKs like Postgres does
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _):  # pragma: no cover - tiny bridge
        dbapi_conn.execute("PRAGMA foreign_keys = ON")

    Base.metadata.create_all(bind=engine)
    with session_scope(database_url=url) as session:
        seed_accounts(session, accounts)

    if set_default_env:
        os.environ.setdefault("DATABASE_URL", url)
    return url


def count_transactions(database_url: str) -> int:
    with session_scope(database_url=database_url) as session:
        return session.execute(select(func.count(LedgerTransaction.id))).scalar_one()


def fetch_transactions(database_url: str) -> list[LedgerTransaction]:
    """All stored transactions in insertion order."""

    with session_scope(database_url=database_url) as session:
        return list(session.scalars(select(LedgerTransaction).order_by(LedgerTransaction.id)))


def fetch_import_logs(database_url: str) -> list[ImportLog]:
    with session_scope(database_url=database_url) as session:
        return list(session.scalars(select(ImportLog).order_by(ImportLog.id)))
