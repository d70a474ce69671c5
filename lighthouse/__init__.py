"""
Lighthouse - offline outbox for the study-tracking client

Writes made while the study API is unreachable are queued on disk and
replayed once the connection comes back. Every queue operation emits a
receipt so the sync history can be audited after the fact.
"""

__version__ = "0.4.0"

from lighthouse.core.receipt import dual_hash, emit_receipt
from lighthouse.offline.errors import InvalidTransition, StorageError, TransportError

__all__ = [
    "dual_hash",
    "emit_receipt",
    "InvalidTransition",
    "StorageError",
    "TransportError",
    "__version__",
]
