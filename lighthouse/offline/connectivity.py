"""Connectivity providers.

A provider answers is_online() and calls its on_online callbacks every time
the state flips from offline to online. Providers never call into the queue
themselves; the composition layer subscribes OfflineQueue.trigger.
"""
import socket
import threading
from typing import Callable

from lighthouse.core.constants import (
    DEFAULT_PROBE_HOST,
    DEFAULT_PROBE_PORT,
    DEFAULT_PROBE_TIMEOUT_S,
)
from lighthouse.core.receipt import emit_receipt


def is_reachable(
    host: str = DEFAULT_PROBE_HOST,
    port: int = DEFAULT_PROBE_PORT,
    timeout: float = DEFAULT_PROBE_TIMEOUT_S,
) -> bool:
    """Check if the study API host accepts TCP connections.

    Args:
        host: API host
        port: API port
        timeout: Connection timeout in seconds

    Returns:
        True if a connection could be opened
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            return sock.connect_ex((host, port)) == 0
    except (socket.error, OSError):
        return False


class _TransitionNotifier:
    """Shared state and callback fan-out for providers."""

    def __init__(self, online: bool):
        self._online = online
        self._callbacks: list[Callable[[], object]] = []
        self._state_lock = threading.Lock()

    def is_online(self) -> bool:
        return self._online

    def on_online(self, callback: Callable[[], object]) -> None:
        self._callbacks.append(callback)

    def _set(self, online: bool) -> bool:
        """Record new state. Returns True on an offline -> online transition."""
        with self._state_lock:
            went_online = online and not self._online
            self._online = online
        if went_online:
            emit_receipt("connectivity", {"online": True})
            for callback in list(self._callbacks):
                callback()
        elif not online:
            emit_receipt("connectivity", {"online": False})
        return went_online


class ManualConnectivity(_TransitionNotifier):
    """State flipped explicitly by the host application (or a test)."""

    def __init__(self, online: bool = False):
        super().__init__(online)

    def set_online(self, online: bool) -> bool:
        return self._set(online)


class AlwaysOnline(_TransitionNotifier):
    """Assume the API is reachable. Used by `sync --force`."""

    def __init__(self):
        super().__init__(True)


class SocketConnectivity(_TransitionNotifier):
    """Connectivity derived from a TCP probe of the API host."""

    def __init__(
        self,
        host: str = DEFAULT_PROBE_HOST,
        port: int = DEFAULT_PROBE_PORT,
        timeout: float = DEFAULT_PROBE_TIMEOUT_S,
        probe: Callable[[str, int, float], bool] = is_reachable,
    ):
        self.host = host
        self.port = port
        self.timeout = timeout
        self._probe = probe
        super().__init__(probe(host, port, timeout))

    def poll(self) -> bool:
        """Re-probe and fire callbacks if the host just became reachable.

        Returns:
            Current online state
        """
        online = self._probe(self.host, self.port, self.timeout)
        if online != self._online:
            self._set(online)
        return online
