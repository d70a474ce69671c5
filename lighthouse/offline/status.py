"""Read-only queue counts for status displays."""
from dataclasses import asdict, dataclass

from .models import ActionStatus
from .store import QueueStore


@dataclass(frozen=True)
class QueueStatus:
    pending: int = 0
    syncing: int = 0
    synced: int = 0
    failed: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class QueueStatusReporter:
    """Counts actions per status. Never writes."""

    def __init__(self, store: QueueStore):
        self.store = store

    def status(self) -> QueueStatus:
        counts = {s: 0 for s in ActionStatus}
        actions = self.store.list()
        for action in actions:
            counts[action.status] += 1
        return QueueStatus(
            pending=counts[ActionStatus.PENDING],
            syncing=counts[ActionStatus.SYNCING],
            synced=counts[ActionStatus.SYNCED],
            failed=counts[ActionStatus.FAILED],
            total=len(actions),
        )
