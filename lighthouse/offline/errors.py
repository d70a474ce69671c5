"""Exceptions raised by the offline queue."""


class StorageError(Exception):
    """Queue file unavailable, unwritable or corrupted. Never retried automatically."""
    pass


class TransportError(Exception):
    """A single delivery attempt failed. Absorbed into the retry state machine."""
    pass


class InvalidTransition(ValueError):
    """Attempted status change that the retry state machine does not allow."""

    def __init__(self, action_id: str, current: str, event: str):
        self.action_id = action_id
        self.current = current
        self.event = event
        super().__init__(f"Action {action_id}: cannot apply '{event}' from status '{current}'")
