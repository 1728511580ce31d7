"""Public API surface for the ``ledger_ingest`` package.

Front doors (the CLI here, an HTTP layer elsewhere) call these functions with
a filename and decoded text; each call owns its session through
``db.client.session_scope``. The returned models serialize with
``model_dump()``.
"""

from __future__ import annotations

from pathlib import Path

from .importer import import_file, import_file_async
from .ingest.detect import detect_and_parse
from .models import ImportOutcome, ParseResult
from .persistence import AccountSummary, list_accounts_with_counts


def read_export(path: Path) -> str:
    """Read an export as UTF-8; a leading BOM is kept for the adapters to strip."""

    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def import_statement(
    filename: str,
    content: str,
    *,
    database_url: str | None = None,
) -> ImportOutcome:
    """Import one export in a fresh session (``DATABASE_URL`` unless overridden)."""

    from db.client import session_scope

    with session_scope(database_url=database_url) as session:
        return import_file(session, filename, content)


def preview_statement(filename: str, content: str) -> ParseResult:
    """Detect and parse without touching the database."""

    return detect_and_parse(filename, content)


def list_accounts(*, database_url: str | None = None) -> list[AccountSummary]:
    from db.client import session_scope

    with session_scope(database_url=database_url) as session:
        return list_accounts_with_counts(session)


def init_database(*, database_url: str | None = None) -> int:
    """Create missing tables and seed the default accounts; return accounts added."""

    from db.client import create_schema, session_scope

    from .persistence import seed_accounts

    create_schema(database_url=database_url)
    with session_scope(database_url=database_url) as session:
        return seed_accounts(session)


__all__ = [
    "read_export",
    "import_statement",
    "import_file",
    "import_file_async",
    "preview_statement",
    "list_accounts",
    "init_database",
]
