import threading
from datetime import datetime
from typing import List, Optional, Tuple

from core.models import Snapshot
from settings import EditorDefaults


class HistoryStack:
    """Linear undo/redo over whole-document snapshots.

    Undo and redo only move the pointer. A push truncates everything ahead of
    the pointer, appends, then evicts from the front past `capacity`, leaving
    the pointer on the snapshot just pushed.
    """

    def __init__(self, initial: Snapshot, capacity: int = EditorDefaults.HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self.lock = threading.Lock()
        self._snapshots: List[Snapshot] = [tuple(initial)]
        self._timestamps: List[datetime] = [datetime.now()]
        self._pointer = 0

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def snapshots(self) -> Tuple[Snapshot, ...]:
        with self.lock:
            return tuple(self._snapshots)

    @property
    def timestamps(self) -> Tuple[datetime, ...]:
        with self.lock:
            return tuple(self._timestamps)

    def entries(self) -> Tuple[Tuple[Snapshot, datetime], ...]:
        """(snapshot, push time) pairs, read under one lock."""
        with self.lock:
            return tuple(zip(self._snapshots, self._timestamps))

    def __len__(self):
        return len(self._snapshots)

    def current(self) -> Snapshot:
        with self.lock:
            return self._snapshots[self._pointer]

    def push(self, snapshot: Snapshot) -> Snapshot:
        snapshot = tuple(snapshot)
        with self.lock:
            del self._snapshots[self._pointer + 1:]
            del self._timestamps[self._pointer + 1:]
            self._snapshots.append(snapshot)
            self._timestamps.append(datetime.now())

            overflow = len(self._snapshots) - self.capacity
            if overflow > 0:
                del self._snapshots[:overflow]
                del self._timestamps[:overflow]
            self._pointer = len(self._snapshots) - 1
            return snapshot

    def can_undo(self) -> bool:
        return self._pointer > 0

    def can_redo(self) -> bool:
        return self._pointer < len(self._snapshots) - 1

    def undo(self) -> Optional[Snapshot]:
        with self.lock:
            if self._pointer == 0:
                return None
            self._pointer -= 1
            return self._snapshots[self._pointer]

    def redo(self) -> Optional[Snapshot]:
        with self.lock:
            if self._pointer >= len(self._snapshots) - 1:
                return None
            self._pointer += 1
            return self._snapshots[self._pointer]
