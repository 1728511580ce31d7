"""Pytest configuration for test isolation.

Every test gets its own file-backed SQLite ledger (``ledger_db``) and a clean
environment: ``DATABASE_URL`` and ``LEDGER_INGEST_LOG_LEVEL`` from the
developer's shell or ``.env`` must not leak into tests, and cached engines are
disposed afterwards so the next test starts from a fresh database.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from db.client import dispose_engines, get_session
from sqlalchemy.orm import Session

from tests.helpers.db import bootstrap_sqlite_db


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LEDGER_INGEST_LOG_LEVEL", raising=False)
    yield
    dispose_engines()


@pytest.fixture()
def ledger_db(tmp_path: Path) -> str:
    """URL of a fresh SQLite ledger with the alior/pekao/revolut accounts."""

    return bootstrap_sqlite_db(tmp_path / "ledger.sqlite3")


@pytest.fixture()
def session(ledger_db: str) -> Iterator[Session]:
    s = get_session(database_url=ledger_db)
    try:
        yield s
    finally:
        s.close()

