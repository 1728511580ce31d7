"""CLI for the ``ledger_ingest`` package.

This module exposes callable command handlers (``cmd_import``, ``cmd_detect``,
``cmd_accounts``, ``cmd_init_db``) and a Typer-based console interface.
Environment variables (notably ``DATABASE_URL``) are loaded from a local
``.env`` using ``python-dotenv`` before delegating to command logic. Business
logic lives in ``ledger_ingest.api``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo

from .errors import LedgerIngestError
from .logging_setup import configure_logging


def _read(path: Path) -> str | None:
    from .api import read_export

    try:
        return read_export(path)
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
    except PermissionError:
        print(f"Error: Permission denied: {path}", file=sys.stderr)
    except UnicodeDecodeError as e:
        print(f"Error: {path} is not valid UTF-8: {e}", file=sys.stderr)
    except OSError as e:
        print(f"Error: Failed to read '{path}': {e}", file=sys.stderr)
    return None


def cmd_import(path: Path, *, database_url: str | None = None) -> int:
    """Import a bank export and print the summary line.

    Output is ``Import complete: <total> total, <imported> imported, <skipped>
    skipped (duplicates)`` followed by one ``warning:`` line per row that was
    skipped while parsing. Errors go to stderr with a non-zero exit status.
    """

    from .api import import_statement

    content = _read(path)
    if content is None:
        return 1

    try:
        outcome = import_statement(path.name, content, database_url=database_url)
    except LedgerIngestError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except RuntimeError as e:
        # Raised by db.client when no database URL is configured.
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Import complete: {outcome.total_rows} total, {outcome.imported} imported, "
        f"{outcome.skipped} skipped (duplicates)"
    )
    for warning in outcome.warnings:
        print(f"warning: {warning}")
    return 0


def cmd_detect(path: Path) -> int:
    """Print the detected dialect and parse statistics; never touches the database."""

    from .ingest.detect import detect_format

    content = _read(path)
    if content is None:
        return 1

    try:
        dialect = detect_format(path.name, content)
        result = dialect.parse(content)
    except LedgerIngestError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"{dialect.name}\t{len(result.transactions)} transactions\t"
        f"{len(result.diagnostics)} rows skipped"
    )
    return 0


def cmd_accounts(*, database_url: str | None = None) -> int:
    """Print ``<name>\\t<currency>\\t<count>`` for every account, ordered by name."""

    from sqlalchemy.exc import SQLAlchemyError

    from .api import list_accounts

    try:
        summaries = list_accounts(database_url=database_url)
    except (SQLAlchemyError, RuntimeError) as e:
        print(f"Error: failed to list accounts: {e}", file=sys.stderr)
        return 1

    for s in summaries:
        print(f"{s.name}\t{s.currency}\t{s.transaction_count}")
    return 0


def cmd_init_db(*, database_url: str | None = None) -> int:
    """Create tables and seed default accounts (development databases)."""

    from sqlalchemy.exc import SQLAlchemyError

    from .api import init_database

    try:
        added = init_database(database_url=database_url)
    except (SQLAlchemyError, RuntimeError) as e:
        print(f"Error: failed to initialize database: {e}", file=sys.stderr)
        return 1

    print(f"Database ready ({added} accounts added)")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Import Alior, Pekao and Revolut CSV exports into a deduplicated ledger. "
        "Loads DATABASE_URL from a local .env before running."
    ),
)

# Module-level argument object to satisfy ruff B008 (no calls in parameter
# defaults).
FILE_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Path to a bank CSV export",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)

DatabaseUrlOption = Annotated[
    str | None,
    typer.Option(help="Override DATABASE_URL (falls back to env var)."),
]


@app.command("import")
def import_cmd(
    path: Annotated[Path, FILE_ARGUMENT],
    database_url: DatabaseUrlOption = None,
) -> None:
    """Import a bank export; re-importing the same rows is a no-op."""

    raise typer.Exit(cmd_import(path, database_url=database_url))


@app.command("detect")
def detect_cmd(path: Annotated[Path, FILE_ARGUMENT]) -> None:
    """Show which bank format a file is detected as."""

    raise typer.Exit(cmd_detect(path))


@app.command("accounts")
def accounts_cmd(database_url: DatabaseUrlOption = None) -> None:
    """List accounts with their transaction counts."""

    raise typer.Exit(cmd_accounts(database_url=database_url))


@app.command("init-db")
def init_db_cmd(database_url: DatabaseUrlOption = None) -> None:
    """Create missing tables and seed the alior/pekao/revolut accounts."""

    raise typer.Exit(cmd_init_db(database_url=database_url))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m ledger_ingest.cli`
    app()
