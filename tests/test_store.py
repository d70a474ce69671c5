"""Tests for the JSONL queue store."""
import json

import pytest

from conftest import START
from lighthouse.offline import ActionStatus, QueueStore, StorageError, new_action


def make_action(method="POST", url="/api/sessions", **kwargs):
    return new_action(method, url, START, **kwargs)


class TestQueueStoreCrud:
    """add / get / list / update / remove / clear."""

    def test_add_returns_id_and_persists(self, store, queue_path):
        action = make_action(body={"minutes": 25})

        assert store.add(action) == action.id
        assert queue_path.exists()
        assert store.get(action.id) == action

    def test_survives_reopen(self, store, queue_path):
        """Records persist across process restarts."""
        action = make_action(headers={"X-Client": "web"}, body={"subject": "math"})
        store.add(action)

        reopened = QueueStore(queue_path)
        loaded = reopened.get(action.id)

        assert loaded == action
        assert loaded.headers == {"X-Client": "web"}
        assert loaded.status == ActionStatus.PENDING

    def test_duplicate_id_rejected(self, store):
        action = make_action()
        store.add(action)

        with pytest.raises(StorageError, match="Duplicate"):
            store.add(action)
        assert len(store) == 1

    def test_list_with_predicate(self, store):
        first = make_action()
        second = make_action(method="DELETE", url="/api/sessions/1")
        store.add(first)
        store.add(second)

        deletes = store.list(lambda a: a.method == "DELETE")

        assert [a.id for a in deletes] == [second.id]
        assert [a.id for a in store.list()] == [first.id, second.id]

    def test_list_is_a_snapshot(self, store):
        action = make_action()
        store.add(action)

        snapshot = store.list()
        store.update(action.id, status=ActionStatus.SYNCING)

        assert snapshot[0].status == ActionStatus.PENDING
        assert store.get(action.id).status == ActionStatus.SYNCING

    def test_update_merges_fields(self, store):
        action = make_action(body={"minutes": 25})
        store.add(action)

        updated = store.update(action.id, retry_count=2, error="HTTP 503: Service Unavailable")

        assert updated.retry_count == 2
        assert updated.error == "HTTP 503: Service Unavailable"
        assert updated.body == {"minutes": 25}
        assert updated.status == ActionStatus.PENDING

    def test_update_accepts_status_string(self, store):
        action = make_action()
        store.add(action)

        assert store.update(action.id, status="failed").status == ActionStatus.FAILED

    def test_update_cannot_change_id_or_timestamp(self, store):
        action = make_action()
        store.add(action)

        with pytest.raises(ValueError):
            store.update(action.id, timestamp="2000-01-01T00:00:00Z")

    def test_update_missing_returns_none(self, store):
        assert store.update("nope", status=ActionStatus.SYNCED) is None

    def test_remove(self, store):
        action = make_action()
        store.add(action)

        assert store.remove(action.id) is True
        assert store.remove(action.id) is False
        assert store.get(action.id) is None

    def test_clear_returns_count(self, store):
        for _ in range(3):
            store.add(make_action())

        assert store.clear() == 3
        assert store.list() == []

    def test_no_temp_files_left_behind(self, store, queue_path):
        store.add(make_action())
        store.clear()

        leftovers = [p.name for p in queue_path.parent.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []


class TestQueueStoreFailures:
    """Persistence problems surface as StorageError."""

    def test_corrupted_row(self, store, queue_path):
        store.add(make_action())
        with open(queue_path, "a") as f:
            f.write("{not json\n")

        with pytest.raises(StorageError, match="Corrupted"):
            store.list()

    def test_unknown_status_is_corruption(self, store, queue_path):
        action = make_action()
        store.add(action)
        queue_path.write_text(queue_path.read_text().replace('"pending"', '"lost"'))

        with pytest.raises(StorageError):
            store.get(action.id)

    @pytest.mark.parametrize("timestamp", ["not-a-date", "2024-03-01T12:00:00", 1709294400])
    def test_bad_timestamp_is_corruption(self, store, queue_path, timestamp):
        action = make_action()
        store.add(action)
        queue_path.write_text(
            queue_path.read_text().replace('"2024-03-01T12:00:00Z"', json.dumps(timestamp))
        )

        with pytest.raises(StorageError, match="Corrupted"):
            store.list()

    def test_unreadable_medium(self, tmp_path):
        # A directory where the queue file should be
        target = tmp_path / "queue.jsonl"
        target.mkdir()
        store = QueueStore(target)

        with pytest.raises(StorageError):
            store.add(make_action())

    def test_unavailable_parent(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(StorageError):
            QueueStore(blocker / "queue.jsonl")


class TestNewAction:
    def test_defaults(self):
        action = make_action(method="post")

        assert action.method == "POST"
        assert action.retry_count == 0
        assert action.status == ActionStatus.PENDING
        assert action.error is None
        assert action.timestamp == "2024-03-01T12:00:00Z"
        assert action.created_at == START

    def test_ids_unique(self):
        ids = {make_action().id for _ in range(200)}
        assert len(ids) == 200

    def test_rejects_unknown_method(self):
        with pytest.raises(ValueError, match="Unsupported method"):
            make_action(method="TRACE")

    def test_rejects_unserialisable_body(self):
        with pytest.raises(ValueError, match="serialisable"):
            make_action(body={"when": object()})
