"""Logging for bank-export imports.

Every module logs under the ``ledger_ingest`` hierarchy:

- ``ledger_ingest.ingest.detect`` reports which dialect a file resolved to and
  whether the filename or the leading lines decided it.
- ``ledger_ingest.ingest.utils`` reports how many rows each adapter parsed and
  skipped.
- ``ledger_ingest.importer`` warns once per skipped row, logs store failures
  and reports the final total/imported/skipped summary.

Nothing is printed until ``configure_logging`` runs; the ``ledger-ingest`` CLI
calls it at startup and embedding applications may call it themselves or
route the ``ledger_ingest`` logger into their own handlers. The level comes
from the ``level`` argument, then ``LEDGER_INGEST_LOG_LEVEL``, then INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledger_ingest"
LEVEL_ENV_VAR = "LEDGER_INGEST_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    """Resolve ``level`` to a numeric level.

    Accepts ints, digit strings and level names in any case. ``None`` falls
    back to ``LEDGER_INGEST_LOG_LEVEL``; anything unrecognised means INFO.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = getattr(logging, name, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send ``ledger_ingest`` records to ``stream``; later calls are no-ops."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    # Drop the placeholder installed by get_logger().
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Logger for an importer module, silent until ``configure_logging`` runs."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
