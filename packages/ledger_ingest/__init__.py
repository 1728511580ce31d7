"""Public interface for the ``ledger_ingest`` package.

Bank CSV exports (Alior, Pekao, Revolut) are detected, parsed into
:class:`CanonicalTransaction` records and loaded into a ledger deduplicated by
content hash. This module only re-exports symbols.
"""

from .api import (
    import_file,
    import_file_async,
    import_statement,
    init_database,
    list_accounts,
    preview_statement,
)
from .ctv import CanonicalTransaction
from .errors import (
    EmptyImport,
    InvalidAmount,
    InvalidDate,
    LedgerIngestError,
    StoreFailure,
    UnknownAccount,
    UnrecognizedFormat,
)
from .ingest.detect import Dialect, detect_and_parse, detect_format
from .models import ImportOutcome, ParseResult, RowDiagnostic
from .normalizers import compute_hash, fix_mojibake, normalize_whitespace, parse_decimal

__all__ = [
    # API
    "import_file",
    "import_file_async",
    "import_statement",
    "init_database",
    "list_accounts",
    "preview_statement",
    "detect_format",
    "detect_and_parse",
    # Normalization
    "parse_decimal",
    "fix_mojibake",
    "compute_hash",
    "normalize_whitespace",
    # Models / types
    "CanonicalTransaction",
    "Dialect",
    "ImportOutcome",
    "ParseResult",
    "RowDiagnostic",
    # Errors
    "LedgerIngestError",
    "InvalidAmount",
    "InvalidDate",
    "UnrecognizedFormat",
    "EmptyImport",
    "UnknownAccount",
    "StoreFailure",
]
