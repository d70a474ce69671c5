"""Offline queue facade used by the study client.

Writes issued while the study API is unreachable are captured here and
replayed by the sync orchestrator once connectivity returns.

Design constraints:
- File-based storage only (one JSONL file, no database)
- At-least-once delivery, bounded retries
- One sync pass at a time
"""
from typing import Any

from lighthouse.core.receipt import emit_receipt

from .cleanup import CleanupSweeper
from .models import ActionStatus, QueuedAction, new_action
from .retry import RetryPolicy
from .status import QueueStatus, QueueStatusReporter
from .store import QueueStore
from .sync import SyncOrchestrator, SyncResult


class OfflineQueue:
    """Public operations over the durable outbox."""

    def __init__(
        self,
        store: QueueStore,
        orchestrator: SyncOrchestrator,
        clock,
        connectivity,
    ):
        self.store = store
        self.orchestrator = orchestrator
        self.clock = clock
        self.connectivity = connectivity
        self.reporter = QueueStatusReporter(store)
        self.last_result: SyncResult | None = None

    @property
    def policy(self) -> RetryPolicy:
        return self.orchestrator.policy

    @property
    def sweeper(self) -> CleanupSweeper:
        return self.orchestrator.sweeper

    def enqueue(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> QueuedAction:
        """Persist a write for later delivery and sync right away if online.

        Args:
            method: GET, POST, PUT, PATCH or DELETE
            url: Absolute URL or API path
            headers: Extra request headers
            body: JSON-serialisable payload

        Returns:
            The stored action as it was enqueued

        Raises:
            ValueError: Invalid method, url or body
            StorageError: Queue file could not be written
        """
        action = new_action(method, url, self.clock.now(), headers=headers, body=body)
        self.store.add(action)

        emit_receipt("offline_enqueue", {
            "action_id": action.id,
            "method": action.method,
            "url": action.url,
            "queue_size": len(self.store),
        })

        if self.connectivity.is_online():
            self.trigger()

        return action

    def trigger(self) -> SyncResult:
        """Start a sync pass (no-op when offline or already syncing)."""
        self.last_result = self.orchestrator.trigger()
        return self.last_result

    def retry_failed(self) -> int:
        """Reset every failed action to pending and start a pass.

        Returns:
            Number of actions reset

        Raises:
            StorageError: Queue file could not be read or written
        """
        failed = self.store.list(lambda a: a.status == ActionStatus.FAILED)
        for action in failed:
            self.store.update(action.id, **self.policy.reset(action).fields())

        emit_receipt("queue_reset", {
            "reset_count": len(failed),
            "action_ids": [a.id for a in failed],
        })

        self.trigger()
        return len(failed)

    def status(self) -> QueueStatus:
        return self.reporter.status()

    def sweep(self) -> int:
        return self.sweeper.sweep()

    def clear(self) -> int:
        """Delete every queued action regardless of status.

        Raises:
            StorageError: Queue file could not be written
        """
        removed = self.store.clear()
        emit_receipt("queue_cleared", {"removed_count": removed})
        return removed

    def pending(self, limit: int | None = None) -> list[QueuedAction]:
        """Oldest pending actions without touching them."""
        actions = self.store.list(lambda a: a.status == ActionStatus.PENDING)
        actions.sort(key=lambda a: a.created_at)
        return actions if limit is None else actions[:limit]

    def actions(self, status: ActionStatus | str | None = None) -> list[QueuedAction]:
        """All actions, oldest first, optionally filtered by status."""
        if status is None:
            actions = self.store.list()
        else:
            wanted = ActionStatus(status)
            actions = self.store.list(lambda a: a.status == wanted)
        actions.sort(key=lambda a: a.created_at)
        return actions
