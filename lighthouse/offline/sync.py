"""Sync pass: replay queued actions against the study API.

Pass process:
1. Recover actions left in syncing by a crashed process
2. Snapshot pending actions, oldest first
3. Deliver each one in turn and apply the retry policy
4. Send one summary to the notifier
5. Sweep expired synced actions

Only one pass runs at a time: a thread lock covers one orchestrator and a
flock on <queue>.sync.lock covers every process sharing the queue file.
trigger() never raises for delivery or storage problems; those end up in
each action's error field or in SyncResult.
"""
import logging
import threading
from dataclasses import asdict, dataclass

from lighthouse.core.constants import INTERRUPTED_MESSAGE
from lighthouse.core.receipt import emit_receipt

from .cleanup import CleanupSweeper
from .errors import StorageError
from .models import ActionStatus, QueuedAction
from .retry import RetryPolicy
from .store import QueueStore

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one trigger() call."""
    ran: bool
    reason: str
    synced_count: int = 0
    failed_count: int = 0
    retried_count: int = 0
    recovered_count: int = 0
    swept_count: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


class SyncOrchestrator:
    """Drives sync passes over a QueueStore.

    Attributes:
        store: Durable queue
        transport: Object with deliver(method, url, headers, body)
        connectivity: Object with is_online()
        notifier: Object with summarize(success_count, failure_count)
        policy: Retry state machine
        sweeper: Cleanup run at the end of each pass
    """

    def __init__(
        self,
        store: QueueStore,
        transport,
        connectivity,
        notifier,
        sweeper: CleanupSweeper,
        policy: RetryPolicy | None = None,
    ):
        self.store = store
        self.transport = transport
        self.connectivity = connectivity
        self.notifier = notifier
        self.sweeper = sweeper
        self.policy = policy or RetryPolicy()
        self._in_flight = threading.Lock()

    @property
    def syncing(self) -> bool:
        """True while a pass holds the single-flight lock."""
        return self._in_flight.locked()

    def trigger(self) -> SyncResult:
        """Run one pass if online and no pass is running.

        Returns:
            SyncResult; ran=False with reason 'offline' or 'in_progress' when skipped,
            or 'storage_error' when the sync lock cannot be taken
        """
        if not self.connectivity.is_online():
            emit_receipt("sync_skipped", {"reason": "offline"})
            return SyncResult(ran=False, reason="offline")

        if not self._in_flight.acquire(blocking=False):
            emit_receipt("sync_skipped", {"reason": "in_progress"})
            return SyncResult(ran=False, reason="in_progress")

        try:
            with self.store.pass_lock() as claimed:
                if not claimed:
                    emit_receipt("sync_skipped", {"reason": "in_progress", "holder": "other_process"})
                    return SyncResult(ran=False, reason="in_progress")
                return self._run_pass()
        except StorageError as e:
            emit_receipt("sync_failed", {"reason": "storage_error", "error": str(e)})
            return SyncResult(ran=False, reason="storage_error", error=str(e))
        finally:
            self._in_flight.release()

    def _run_pass(self) -> SyncResult:
        result = SyncResult(ran=True, reason="completed")

        try:
            result.recovered_count = self._recover_interrupted()

            snapshot = self.store.list(lambda a: a.status == ActionStatus.PENDING)
            snapshot.sort(key=lambda a: a.created_at)
            if not snapshot:
                result.reason = "queue_empty"

            for action in snapshot:
                outcome = self._process(action)
                if outcome == ActionStatus.SYNCED:
                    result.synced_count += 1
                elif outcome == ActionStatus.FAILED:
                    result.failed_count += 1
                elif outcome == ActionStatus.PENDING:
                    result.retried_count += 1

        except StorageError as e:
            result.reason = "storage_error"
            result.error = str(e)
            emit_receipt("sync_failed", {
                "reason": "storage_error",
                "error": str(e),
                "synced_count": result.synced_count,
                "failed_count": result.failed_count,
            })

        if result.synced_count > 0 or result.failed_count > 0:
            self._notify(result.synced_count, result.failed_count)

        result.swept_count = self._sweep()

        emit_receipt("sync_pass", {
            "reason": result.reason,
            "synced_count": result.synced_count,
            "failed_count": result.failed_count,
            "retried_count": result.retried_count,
            "recovered_count": result.recovered_count,
            "swept_count": result.swept_count,
        })

        return result

    def _recover_interrupted(self) -> int:
        """Resolve actions stranded in syncing as failed attempts.

        Runs only under the cross-process pass lock, so no other pass is
        delivering and any syncing row was left behind by a process that
        died mid-delivery.
        """
        stranded = self.store.list(lambda a: a.status == ActionStatus.SYNCING)
        for action in stranded:
            transition = self.policy.on_failure(action, INTERRUPTED_MESSAGE)
            self.store.update(action.id, **transition.fields())

        if stranded:
            emit_receipt("sync_recovered", {
                "recovered_count": len(stranded),
                "action_ids": [a.id for a in stranded],
            })

        return len(stranded)

    def _process(self, action: QueuedAction) -> ActionStatus | None:
        """Deliver one action and persist its next state.

        Returns:
            Resulting status, or None if the action vanished mid-pass
        """
        current = self.store.update(action.id, **self.policy.start(action).fields())
        if current is None:
            return None

        try:
            self.transport.deliver(current.method, current.url, dict(current.headers), current.body)
        except Exception as e:
            message = str(e) or type(e).__name__
            transition = self.policy.on_failure(current, message)
        else:
            transition = self.policy.on_success(current)

        if self.store.update(current.id, **transition.fields()) is None:
            return None

        if transition.status == ActionStatus.SYNCED:
            emit_receipt("action_synced", {
                "action_id": current.id,
                "method": current.method,
                "url": current.url,
            })
        elif transition.status == ActionStatus.FAILED:
            emit_receipt("action_failed", {
                "action_id": current.id,
                "retry_count": transition.retry_count,
                "error": transition.error,
            })
        else:
            emit_receipt("action_retry", {
                "action_id": current.id,
                "retry_count": transition.retry_count,
                "error": transition.error,
            })

        return transition.status

    def _notify(self, success_count: int, failure_count: int) -> None:
        try:
            self.notifier.summarize(success_count, failure_count)
        except Exception as e:
            logger.exception("Sync summary notification failed")
            emit_receipt("notify_failed", {"error": str(e)})

    def _sweep(self) -> int:
        try:
            return self.sweeper.sweep()
        except Exception as e:
            logger.exception("Queue cleanup failed")
            emit_receipt("cleanup_failed", {"error": str(e)})
            return 0
