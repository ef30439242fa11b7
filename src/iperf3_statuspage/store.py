"""Single-slot store for the latest successful probe result."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from iperf3_statuspage.types import RawDocument, Snapshot


class SnapshotStore:
    """Latest-value-wins holder shared by the scheduler and request handlers.

    The current value is an immutable `Snapshot` swapped in by reference, so
    readers never take a lock and never observe a half-written value. The
    writer lock only orders sequence numbers between publishes.
    """

    def __init__(self) -> None:
        self._current: Snapshot | None = None
        self._write_lock = threading.Lock()

    def publish(self, document: RawDocument) -> Snapshot:
        with self._write_lock:
            previous = self._current
            snapshot = Snapshot(
                document=document,
                sequence=1 if previous is None else previous.sequence + 1,
                published_at=datetime.now(timezone.utc),
            )
            self._current = snapshot
        return snapshot

    def read(self) -> RawDocument | None:
        snapshot = self._current
        return None if snapshot is None else snapshot.document

    def snapshot(self) -> Snapshot | None:
        return self._current
