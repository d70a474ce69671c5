"""Age-based purge of delivered actions."""
from datetime import timedelta

from lighthouse.core.constants import RETENTION_DAYS
from lighthouse.core.receipt import emit_receipt, utc_iso

from .models import ActionStatus, QueuedAction
from .store import QueueStore


class CleanupSweeper:
    """Deletes synced actions created more than `retention_days` ago.

    Retention is measured from creation time, not from the moment the action
    reached synced. pending, syncing and failed actions are never touched.
    """

    def __init__(self, store: QueueStore, clock, retention_days: int = RETENTION_DAYS):
        self.store = store
        self.clock = clock
        self.retention = timedelta(days=retention_days)

    def is_expired(self, action: QueuedAction, cutoff) -> bool:
        return action.status == ActionStatus.SYNCED and action.created_at < cutoff

    def sweep(self) -> int:
        """Purge expired synced actions.

        Returns:
            Number of actions removed (0 on a repeated sweep)
        """
        cutoff = self.clock.now() - self.retention
        removed = self.store.remove_where(lambda a: self.is_expired(a, cutoff))

        if removed:
            emit_receipt("queue_cleanup", {
                "removed_count": removed,
                "cutoff": utc_iso(cutoff),
            })

        return removed
