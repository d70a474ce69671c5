"""Durable queue storage backed by a JSONL file.

One line per queued action, keyed by id. Every mutation rewrites the file
through a temp file and os.replace, under an in-process lock plus an
exclusive flock on a sidecar lock file, so a crash never leaves a
half-written queue and concurrent writers never lose an update.

A second sidecar (<queue>.sync.lock) marks the process running a sync pass.
"""
import fcntl
import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from .errors import StorageError
from .models import QueuedAction


class QueueStore:
    """Durable table of queued actions.

    Attributes:
        path: Path to the JSONL queue file
    """

    def __init__(self, path: str | Path):
        """Initialize QueueStore.

        Args:
            path: Path to JSONL file for queue storage

        Raises:
            StorageError: Parent directory cannot be created
        """
        self.path = Path(path).expanduser()
        self._lock_path = self.path.with_name(self.path.name + ".lock")
        self._pass_lock_path = self.path.with_name(self.path.name + ".sync.lock")
        self._mutex = threading.RLock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Queue directory unavailable: {self.path.parent}: {e}") from e

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Hold the in-process mutex and the cross-process file lock."""
        with self._mutex:
            try:
                lock_file = open(self._lock_path, "a")
            except OSError as e:
                raise StorageError(f"Queue lock unavailable: {self._lock_path}: {e}") from e
            with lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    @contextmanager
    def pass_lock(self) -> Iterator[bool]:
        """Try to claim the queue for one sync pass across processes.

        Non-blocking flock on a second sidecar file, held until the block
        exits. Yields False when another holder already has it.

        Raises:
            StorageError: Lock file cannot be opened or locked
        """
        try:
            lock_file = open(self._pass_lock_path, "a")
        except OSError as e:
            raise StorageError(f"Sync lock unavailable: {self._pass_lock_path}: {e}") from e
        with lock_file:
            try:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            except BlockingIOError:
                yield False
                return
            except OSError as e:
                raise StorageError(f"Sync lock unavailable: {self._pass_lock_path}: {e}") from e
            try:
                yield True
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _read(self) -> list[QueuedAction]:
        if not self.path.exists():
            return []

        actions = []
        try:
            with open(self.path, "r") as f:
                for lineno, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        actions.append(QueuedAction.from_dict(json.loads(line)))
                    except (ValueError, KeyError, TypeError) as e:
                        raise StorageError(f"Corrupted queue row at {self.path}:{lineno}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read queue file {self.path}: {e}") from e

        return actions

    def _write(self, actions: list[QueuedAction]) -> None:
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp"
            )
            with os.fdopen(fd, "w") as f:
                for action in actions:
                    f.write(json.dumps(action.to_dict(), sort_keys=True) + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write queue file {self.path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def add(self, action: QueuedAction) -> str:
        """Append an action.

        Args:
            action: Action to persist

        Returns:
            The action id

        Raises:
            StorageError: Write failed or the id is already present
        """
        with self._locked():
            actions = self._read()
            if any(a.id == action.id for a in actions):
                raise StorageError(f"Duplicate action id {action.id}")
            actions.append(action)
            self._write(actions)
        return action.id

    def get(self, action_id: str) -> QueuedAction | None:
        with self._locked():
            for action in self._read():
                if action.id == action_id:
                    return action
        return None

    def list(self, predicate: Callable[[QueuedAction], bool] | None = None) -> list[QueuedAction]:
        """Snapshot of actions matching predicate, in storage order.

        Args:
            predicate: Function that returns True for matching actions (all if None)

        Returns:
            List of freshly loaded QueuedAction objects
        """
        with self._locked():
            actions = self._read()
        if predicate is None:
            return actions
        return [a for a in actions if predicate(a)]

    def update(self, action_id: str, **fields) -> QueuedAction | None:
        """Merge fields into one action.

        Returns:
            The updated action, or None if the id is no longer stored
        """
        with self._locked():
            actions = self._read()
            for i, action in enumerate(actions):
                if action.id == action_id:
                    actions[i] = action.merged(**fields)
                    self._write(actions)
                    return actions[i]
        return None

    def remove(self, action_id: str) -> bool:
        with self._locked():
            actions = self._read()
            kept = [a for a in actions if a.id != action_id]
            if len(kept) == len(actions):
                return False
            self._write(kept)
        return True

    def remove_where(self, predicate: Callable[[QueuedAction], bool]) -> int:
        """Delete every action matching predicate in one rewrite. Returns count removed."""
        with self._locked():
            actions = self._read()
            kept = [a for a in actions if not predicate(a)]
            removed = len(actions) - len(kept)
            if removed:
                self._write(kept)
        return removed

    def clear(self) -> int:
        """Delete every action. Returns count removed."""
        with self._locked():
            count = len(self._read())
            self._write([])
        return count

    def __len__(self) -> int:
        return len(self.list())
