"""Test configuration and fixtures for the offline outbox.

ScriptedTransport: delivery double that replays scripted outcomes
RecordingNotifier: collects pass summaries
Fixtures: queue file under tmp_path, manual clock and connectivity, wired queue
"""
from datetime import datetime, timezone
from typing import Callable

import pytest

from lighthouse.config.settings import OutboxConfig
from lighthouse.offline import (
    ManualClock,
    ManualConnectivity,
    QueueStore,
    TransportError,
    build_offline_queue,
)

START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class ScriptedTransport:
    """Transport double.

    outcomes is consumed one per delivery: None means success, a string
    means TransportError(string), an exception instance is raised as-is.
    When outcomes run out, `default` applies.
    """

    def __init__(self, outcomes: list | None = None, default=None):
        self.outcomes = list(outcomes or [])
        self.default = default
        self.calls: list[dict] = []
        self.on_deliver: Callable[[dict], None] | None = None

    def deliver(self, method, url, headers=None, body=None):
        call = {"method": method, "url": url, "headers": headers, "body": body}
        self.calls.append(call)
        if self.on_deliver is not None:
            self.on_deliver(call)

        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if outcome is None:
            return None
        if isinstance(outcome, BaseException):
            raise outcome
        raise TransportError(outcome)


class RecordingNotifier:
    def __init__(self):
        self.summaries: list[tuple[int, int]] = []

    def summarize(self, success_count, failure_count):
        self.summaries.append((success_count, failure_count))


@pytest.fixture
def queue_path(tmp_path):
    return tmp_path / "offline_queue.jsonl"


@pytest.fixture
def store(queue_path) -> QueueStore:
    return QueueStore(queue_path)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(START)


@pytest.fixture
def connectivity() -> ManualConnectivity:
    """Starts offline so enqueue does not sync by itself."""
    return ManualConnectivity(online=False)


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def config(queue_path) -> OutboxConfig:
    return OutboxConfig(queue_path=queue_path)


@pytest.fixture
def queue(config, store, transport, connectivity, clock, notifier):
    return build_offline_queue(
        config,
        store=store,
        transport=transport,
        connectivity=connectivity,
        clock=clock,
        notifier=notifier,
    )
