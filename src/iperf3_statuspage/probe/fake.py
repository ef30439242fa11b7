"""Scripted probe runner for tests and local runs without iperf3."""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Iterable

from iperf3_statuspage.probe.base import parse_document
from iperf3_statuspage.types import ProbeError, ProbeErrorKind, RawDocument

ScriptItem = RawDocument | bytes | str | ProbeError


class FakeProbeRunner:
    """Returns scripted results in order, one per call.

    Each script item is a `RawDocument`, raw output (validated like real
    output), or a `ProbeError` to raise. Once the script is exhausted every
    call fails with `non_zero_exit`. `delay_seconds` makes each call block,
    which lets tests observe overlapping invocations.
    """

    def __init__(
        self,
        script: Iterable[ScriptItem] | None = None,
        *,
        delay_seconds: float = 0.0,
    ) -> None:
        self._script: deque[ScriptItem] = deque(script or [])
        self.delay_seconds = delay_seconds
        self.calls: list[tuple[str, int]] = []
        self.call_started_at: list[float] = []
        self.call_finished_at: list[float] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def run_probe(self, target_address: str, target_port: int) -> RawDocument:
        with self._lock:
            self.calls.append((target_address, target_port))
            self.call_started_at.append(time.monotonic())
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            item = self._script.popleft() if self._script else None
        try:
            if self.delay_seconds > 0:
                time.sleep(self.delay_seconds)
            return _resolve(item)
        finally:
            with self._lock:
                self.in_flight -= 1
                self.call_finished_at.append(time.monotonic())


def _resolve(item: ScriptItem | None) -> RawDocument:
    if item is None:
        raise ProbeError(ProbeErrorKind.NON_ZERO_EXIT, "no scripted result left", exit_code=1)
    if isinstance(item, ProbeError):
        raise item
    if isinstance(item, RawDocument):
        return item
    if isinstance(item, str):
        item = item.encode("utf-8")
    return parse_document(item)
