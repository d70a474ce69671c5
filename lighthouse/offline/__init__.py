"""Offline outbox for writes made while the study API is unreachable.

Writes are captured locally, survive restarts, and are replayed when
connectivity returns. Each action is retried a bounded number of times,
and only one sync pass runs at a time.

Usage:
    from lighthouse.offline import build_offline_queue

    queue = build_offline_queue()

    # Capture a write (syncs immediately if the API is reachable)
    queue.enqueue("POST", "/api/sessions", body={"subject": "math", "minutes": 25})

    # Check queue status
    counts = queue.status().to_dict()

    # Give parked actions another chance
    queue.retry_failed()
"""
from lighthouse.offline.models import ActionStatus, QueuedAction, new_action
from lighthouse.offline.errors import InvalidTransition, StorageError, TransportError
from lighthouse.offline.clock import ManualClock, SystemClock
from lighthouse.offline.connectivity import (
    AlwaysOnline,
    ManualConnectivity,
    SocketConnectivity,
    is_reachable,
)
from lighthouse.offline.store import QueueStore
from lighthouse.offline.retry import RetryPolicy, Transition
from lighthouse.offline.cleanup import CleanupSweeper
from lighthouse.offline.status import QueueStatus, QueueStatusReporter
from lighthouse.offline.notify import ReceiptNotifier
from lighthouse.offline.transport import HttpTransport
from lighthouse.offline.sync import SyncOrchestrator, SyncResult
from lighthouse.offline.queue import OfflineQueue
from lighthouse.offline.compose import build_offline_queue

__all__ = [
    # Records
    "ActionStatus",
    "QueuedAction",
    "new_action",
    # Errors
    "InvalidTransition",
    "StorageError",
    "TransportError",
    # Collaborators
    "ManualClock",
    "SystemClock",
    "AlwaysOnline",
    "ManualConnectivity",
    "SocketConnectivity",
    "is_reachable",
    "HttpTransport",
    "ReceiptNotifier",
    # Queue machinery
    "QueueStore",
    "RetryPolicy",
    "Transition",
    "CleanupSweeper",
    "QueueStatus",
    "QueueStatusReporter",
    "SyncOrchestrator",
    "SyncResult",
    # Facade
    "OfflineQueue",
    "build_offline_queue",
]
