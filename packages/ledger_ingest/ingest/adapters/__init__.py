"""Per-bank CSV adapters producing :class:`~ledger_ingest.ctv.CanonicalTransaction` rows."""
