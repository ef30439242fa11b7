"""FastAPI entrypoint serving the latest iperf3 result."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import anyio.to_thread
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response

from iperf3_statuspage.config import ServiceSettings, get_settings
from iperf3_statuspage.obs.runs import RunLog
from iperf3_statuspage.probe.base import ProbeRunner
from iperf3_statuspage.probe.iperf3 import Iperf3ProbeRunner
from iperf3_statuspage.scheduler import ProbeScheduler
from iperf3_statuspage.store import SnapshotStore

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Iperf3 result not available yet."


def create_app(
    settings: ServiceSettings | None = None,
    *,
    store: SnapshotStore | None = None,
    runner: ProbeRunner | None = None,
    run_log: RunLog | None = None,
    scheduler: ProbeScheduler | None = None,
) -> FastAPI:
    """Build the app around an injectable store and scheduler.

    The scheduler is started and stopped by the app lifespan, so it only runs
    when the app is served (or used as a context manager in tests). Serve it
    with `uvicorn --factory iperf3_statuspage.api.main:create_app`.
    """

    settings = settings or get_settings()
    store = store or (scheduler.store if scheduler is not None else SnapshotStore())
    if scheduler is None:
        scheduler = ProbeScheduler(
            runner or Iperf3ProbeRunner(settings.probe_config()),
            store,
            settings.schedule_config(),
            run_log=run_log,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler.start()
        try:
            yield
        finally:
            logger.info("shutting down, waiting for any in-flight probe")
            await anyio.to_thread.run_sync(scheduler.stop)

    app = FastAPI(title="iperf3 status page", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.scheduler = scheduler

    @app.get("/iperf3")
    def iperf3() -> Response:
        document = store.read()
        if document is None:
            return PlainTextResponse(NOT_READY_MESSAGE, status_code=503)
        return Response(content=document.body, media_type="application/json")

    @app.get("/health")
    def health() -> dict[str, Any]:
        snapshot = store.snapshot()
        return {
            "status": "ok",
            "snapshot_available": snapshot is not None,
            "snapshot_sequence": snapshot.sequence if snapshot is not None else None,
            "snapshot_published_utc": (
                snapshot.published_at.isoformat() if snapshot is not None else None
            ),
            "scheduler_running": scheduler.is_running,
            "scheduler_state": scheduler.state.value,
            "runs": scheduler.run_log.summary(),
        }

    return app
