"""Background loop that refreshes the snapshot store on a fixed gap."""

from __future__ import annotations

import logging
import threading
from enum import Enum

from iperf3_statuspage.config import ScheduleConfig
from iperf3_statuspage.obs.runs import OUTCOME_OK, RunLog, Timer
from iperf3_statuspage.probe.base import ProbeRunner
from iperf3_statuspage.store import SnapshotStore
from iperf3_statuspage.types import ProbeError

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class ProbeScheduler:
    """Runs the probe periodically and publishes successful results.

    Ticks run one after another on a single daemon thread, so at most one probe
    is ever in flight. The wait before the next tick starts when the previous
    probe finishes; interval boundaries that pass during a slow probe are
    dropped rather than queued. A failed tick leaves the store untouched.
    """

    def __init__(
        self,
        runner: ProbeRunner,
        store: SnapshotStore,
        config: ScheduleConfig | None = None,
        *,
        run_log: RunLog | None = None,
    ) -> None:
        self.runner = runner
        self.store = store
        self.config = config or ScheduleConfig()
        self.run_log = run_log or RunLog()
        self._state = SchedulerState.IDLE
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            raise RuntimeError("scheduler already started")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="iperf3-scheduler", daemon=True
        )
        self._thread.start()
        logger.info(
            "scheduler started: target=%s:%s interval=%gs run_on_start=%s",
            self.config.target_address,
            self.config.target_port,
            self.config.interval_seconds,
            self.config.run_on_start,
        )

    def stop(self, timeout: float | None = None) -> bool:
        """Ask the loop to exit and wait for it.

        A probe already in flight is allowed to finish. Returns False if the
        thread is still alive after `timeout`.
        """

        self._stop.set()
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        stopped = not thread.is_alive()
        if stopped:
            self._thread = None
            logger.info("scheduler stopped")
        return stopped

    def run_once(self) -> bool:
        """Run one tick. Returns True if a new snapshot was published."""

        target = (self.config.target_address, self.config.target_port)
        timer = Timer()
        self._state = SchedulerState.RUNNING
        try:
            try:
                with timer:
                    document = self.runner.run_probe(*target)
            except ProbeError as exc:
                logger.warning(
                    "probe against %s:%s failed after %.0f ms, keeping previous result: %s",
                    *target,
                    timer.elapsed_ms,
                    exc,
                )
                self.run_log.record(
                    outcome=exc.kind.value, latency_ms=timer.elapsed_ms, error=str(exc)
                )
                return False
            except Exception as exc:
                logger.exception("probe runner raised an unexpected error")
                self.run_log.record(outcome="error", latency_ms=timer.elapsed_ms, error=repr(exc))
                return False

            snapshot = self.store.publish(document)
            self.run_log.record(outcome=OUTCOME_OK, latency_ms=timer.elapsed_ms)
            logger.info(
                "iperf3 result updated: sequence=%d bytes=%d latency=%.0f ms",
                snapshot.sequence,
                len(document),
                timer.elapsed_ms,
            )
            return True
        finally:
            self._state = SchedulerState.IDLE

    def _loop(self) -> None:
        interval = self.config.interval_seconds
        delay = 0.0 if self.config.run_on_start else interval
        while not self._stop.wait(delay):
            self.run_once()
            delay = interval
