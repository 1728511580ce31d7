"""Bank export ingestion: format detection and per-bank adapters."""

from .detect import DIALECTS, Dialect, detect_and_parse, detect_format

__all__ = ["DIALECTS", "Dialect", "detect_and_parse", "detect_format"]
