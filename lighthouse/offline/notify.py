"""Sync summary notifiers.

A notifier receives one summary per pass: how many actions were delivered and
how many were parked as failed. It is best-effort; the orchestrator shields
queue state from anything a notifier raises.
"""
from lighthouse.core.receipt import emit_receipt


def summary_message(success_count: int, failure_count: int) -> tuple[str, str]:
    """Human summary and level ('success' or 'warning') for a pass."""
    if failure_count == 0:
        noun = "item" if success_count == 1 else "items"
        return f"{success_count} {noun} synced", "success"
    return f"{success_count} succeeded, {failure_count} failed", "warning"


class ReceiptNotifier:
    """Publishes the pass summary as a sync_summary receipt."""

    def summarize(self, success_count: int, failure_count: int) -> None:
        message, level = summary_message(success_count, failure_count)
        emit_receipt("sync_summary", {
            "success_count": success_count,
            "failure_count": failure_count,
            "message": message,
            "level": level,
        })
