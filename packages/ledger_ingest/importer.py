"""Import orchestration: detected file → parsed records → deduplicated ledger rows.

:func:`import_file` is the synchronous core. It parses the whole file before
touching the store, resolves every account label up front and then inserts
records one by one in file order, committing each insert as it happens. A
store failure part way through therefore leaves the rows before it in place;
re-running the import skips them by content hash.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StoreFailure, UnknownAccount
from .logging_setup import get_logger
from .models import ImportOutcome
from .ingest.detect import detect_and_parse
from .normalizers import transaction_hash
from .persistence import find_account_by_name, insert_import_log, insert_transaction_if_new

logger = get_logger("ledger_ingest.importer")


def _resolve_accounts(session: Session, labels: list[str]) -> dict[str, int]:
    ids: dict[str, int] = {}
    for label in labels:
        try:
            account_id = find_account_by_name(session, label)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Account {label!r} lookup failed: {exc}") from exc
        if account_id is None:
            raise UnknownAccount(label)
        ids[label] = account_id
    return ids


def import_file(session: Session, filename: str, content: str) -> ImportOutcome:
    """Import one bank export into the ledger.

    Raises the parser's errors (``UnrecognizedFormat``, ``InvalidDate``,
    ``InvalidAmount``, ``EmptyImport``) before any write, ``UnknownAccount``
    when a parsed label has no account, and ``StoreFailure`` when the database
    rejects an operation.
    """

    result = detect_and_parse(filename, content)
    records = result.transactions
    total_rows = len(records)
    warnings = tuple(str(d) for d in result.diagnostics)
    for warning in warnings:
        logger.warning("%s: skipped %s", filename, warning)

    labels = list(dict.fromkeys(tx.account_label for tx in records))
    account_ids = _resolve_accounts(session, labels)

    imported = 0
    skipped = 0
    for tx in records:
        try:
            inserted = insert_transaction_if_new(
                session,
                account_id=account_ids[tx.account_label],
                tx=tx,
                content_hash=transaction_hash(tx),
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(
                "%s: store rejected a row after %d imported, %d skipped",
                filename,
                imported,
                skipped,
            )
            raise StoreFailure(f"Insert error: {exc}") from exc
        if inserted:
            imported += 1
        else:
            skipped += 1

    # The log row belongs to the account of the first record.
    try:
        insert_import_log(
            session,
            filename=filename,
            account_id=account_ids[records[0].account_label],
            total_rows=total_rows,
            imported=imported,
            skipped=skipped,
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreFailure(f"Import log error: {exc}") from exc

    logger.info(
        "Import complete: %d total, %d imported, %d skipped (duplicates)",
        total_rows,
        imported,
        skipped,
    )
    return ImportOutcome(
        total_rows=total_rows,
        imported=imported,
        skipped=skipped,
        dialect=result.dialect,
        warnings=warnings,
    )


def _import_in_own_session(filename: str, content: str, database_url: str | None) -> ImportOutcome:
    # Local import keeps ``db.client`` (and DATABASE_URL) out of pure parsing use.
    from db.client import session_scope

    with session_scope(database_url=database_url) as session:
        return import_file(session, filename, content)


async def import_file_async(
    filename: str,
    content: str,
    *,
    database_url: str | None = None,
) -> ImportOutcome:
    """Run :func:`import_file` in a worker thread with its own session."""

    return await asyncio.to_thread(_import_in_own_session, filename, content, database_url)


__all__ = ["import_file", "import_file_async"]
