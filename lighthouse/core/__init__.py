"""Core subpackage for Lighthouse receipt primitives and constants."""
from .receipt import dual_hash, emit_receipt, utc_iso
from .constants import (
    DEFAULT_HEADERS,
    HTTP_METHODS,
    MAX_RETRIES,
    RETENTION_DAYS,
)

__all__ = [
    # Receipt primitives
    "dual_hash",
    "emit_receipt",
    "utc_iso",
    # Constants
    "DEFAULT_HEADERS",
    "HTTP_METHODS",
    "MAX_RETRIES",
    "RETENTION_DAYS",
]
