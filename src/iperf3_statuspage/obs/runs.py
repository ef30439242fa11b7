"""Run bookkeeping and latency timing for scheduler ticks."""

from __future__ import annotations

import threading
import time
import uuid
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

OUTCOME_OK = "ok"


@dataclass(slots=True)
class RunRecord:
    run_id: str
    timestamp_utc: str
    outcome: str
    latency_ms: float
    error: str | None = None


class RunLog:
    """Bounded in-memory log of recent ticks for the health endpoint.

    Only outcomes are kept here, never probe documents.
    """

    def __init__(self, max_records: int = 50) -> None:
        self._records: deque[RunRecord] = deque(maxlen=max_records)
        self._total = 0
        self._failures = 0
        self._last_success_utc: str | None = None
        self._lock = threading.Lock()

    def record(self, *, outcome: str, latency_ms: float, error: str | None = None) -> RunRecord:
        record = RunRecord(
            run_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            outcome=outcome,
            latency_ms=latency_ms,
            error=error,
        )
        with self._lock:
            self._records.append(record)
            self._total += 1
            if outcome == OUTCOME_OK:
                self._last_success_utc = record.timestamp_utc
            else:
                self._failures += 1
        return record

    def list_recent(self, limit: int = 20) -> list[RunRecord]:
        with self._lock:
            records = list(self._records)
        return records[-limit:] if limit > 0 else []

    def summary(self) -> dict[str, Any]:
        with self._lock:
            records = list(self._records)
            total = self._total
            failures = self._failures
            last_success = self._last_success_utc

        last = records[-1] if records else None
        avg_latency = (
            sum(record.latency_ms for record in records) / len(records) if records else 0.0
        )
        return {
            "total_runs": total,
            "failed_runs": failures,
            "avg_latency_ms": avg_latency,
            "last_success_utc": last_success,
            "last_run": asdict(last) if last is not None else None,
        }


class Timer:
    """Simple context timer used around probe calls."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
