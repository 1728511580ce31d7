from __future__ import annotations

import logging

import pytest

from ledger_ingest.logging_setup import _parse_level, get_logger


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (logging.WARNING, logging.WARNING),
        ("debug", logging.DEBUG),
        (" Error ", logging.ERROR),
        ("15", 15),
        ("loud", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_parse_level(level: int | str | None, expected: int) -> None:
    assert _parse_level(level) == expected


def test_env_var_sets_default_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGER_INGEST_LOG_LEVEL", "warning")
    assert _parse_level(None) == logging.WARNING
    # An explicit level wins over the environment
    assert _parse_level("debug") == logging.DEBUG


def test_module_loggers_live_under_package_root() -> None:
    logger = get_logger("ledger_ingest.importer")
    assert logger.parent is logging.getLogger("ledger_ingest")
    assert logging.getLogger("ledger_ingest").handlers
