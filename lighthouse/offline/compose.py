"""Wiring for a ready-to-use OfflineQueue.

This is the only place that subscribes the queue to connectivity changes.
"""
from lighthouse.config.settings import OutboxConfig

from .cleanup import CleanupSweeper
from .clock import SystemClock
from .connectivity import SocketConnectivity
from .notify import ReceiptNotifier
from .queue import OfflineQueue
from .retry import RetryPolicy
from .store import QueueStore
from .sync import SyncOrchestrator
from .transport import HttpTransport


def build_offline_queue(
    config: OutboxConfig | None = None,
    *,
    store: QueueStore | None = None,
    transport=None,
    connectivity=None,
    clock=None,
    notifier=None,
    policy: RetryPolicy | None = None,
) -> OfflineQueue:
    """Assemble an OfflineQueue and subscribe it to online transitions.

    Any collaborator left as None is built from config.

    Args:
        config: Settings (defaults to OutboxConfig.from_env())
        store, transport, connectivity, clock, notifier, policy: Overrides

    Returns:
        OfflineQueue whose trigger() runs on every offline -> online transition
    """
    if config is None:
        config = OutboxConfig.from_env()
    if clock is None:
        clock = SystemClock()
    if store is None:
        store = QueueStore(config.queue_path)
    if transport is None:
        transport = HttpTransport(
            base_url=config.base_url,
            auth_token=config.auth_token,
            timeout_ms=config.request_timeout_ms,
        )
    if connectivity is None:
        connectivity = SocketConnectivity(
            host=config.probe_host,
            port=config.probe_port,
            timeout=config.probe_timeout_s,
        )
    if notifier is None:
        notifier = ReceiptNotifier()

    sweeper = CleanupSweeper(store, clock, retention_days=config.retention_days)
    orchestrator = SyncOrchestrator(
        store=store,
        transport=transport,
        connectivity=connectivity,
        notifier=notifier,
        sweeper=sweeper,
        policy=policy,
    )
    queue = OfflineQueue(store, orchestrator, clock, connectivity)

    connectivity.on_online(queue.trigger)

    return queue
