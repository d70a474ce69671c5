"""Retry state machine for queued actions.

    pending --start--> syncing
    syncing --success--> synced                      (error cleared)
    syncing --failure--> pending | failed            (retry_count + 1, error set)
    failed  --reset--> pending                       (retry_count = 0, error cleared)

An action becomes failed exactly when a failed attempt brings retry_count
up to max_retries. synced has no outgoing transitions.

Pure functions only: RetryPolicy never touches storage. The orchestrator
feeds Transition.fields() into QueueStore.update.
"""
from dataclasses import dataclass

from lighthouse.core.constants import MAX_RETRIES

from .errors import InvalidTransition
from .models import ActionStatus, QueuedAction


@dataclass(frozen=True)
class Transition:
    """Next persisted state for an action."""
    status: ActionStatus
    retry_count: int
    error: str | None

    def fields(self) -> dict:
        return {"status": self.status, "retry_count": self.retry_count, "error": self.error}


class RetryPolicy:
    """Bounded-retry transitions over ActionStatus."""

    def __init__(self, max_retries: int = MAX_RETRIES):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries

    def _require(self, action: QueuedAction, expected: ActionStatus, event: str) -> None:
        if action.status != expected:
            raise InvalidTransition(action.id, action.status.value, event)

    def start(self, action: QueuedAction) -> Transition:
        """pending -> syncing."""
        self._require(action, ActionStatus.PENDING, "start")
        return Transition(ActionStatus.SYNCING, action.retry_count, action.error)

    def on_success(self, action: QueuedAction) -> Transition:
        """syncing -> synced."""
        self._require(action, ActionStatus.SYNCING, "success")
        return Transition(ActionStatus.SYNCED, action.retry_count, None)

    def on_failure(self, action: QueuedAction, message: str) -> Transition:
        """syncing -> pending, or failed once retries are exhausted."""
        self._require(action, ActionStatus.SYNCING, "failure")
        retry_count = action.retry_count + 1
        if retry_count >= self.max_retries:
            return Transition(ActionStatus.FAILED, retry_count, message)
        return Transition(ActionStatus.PENDING, retry_count, message)

    def reset(self, action: QueuedAction) -> Transition:
        """failed -> pending, explicit operator request only."""
        self._require(action, ActionStatus.FAILED, "reset")
        return Transition(ActionStatus.PENDING, 0, None)
