"""Serve the most recent iperf3 measurement over HTTP."""

from .config import ProbeConfig, ScheduleConfig, ServiceSettings
from .store import SnapshotStore
from .types import ProbeError, ProbeErrorKind, RawDocument, Snapshot

__all__ = [
    "ProbeConfig",
    "ProbeError",
    "ProbeErrorKind",
    "RawDocument",
    "ScheduleConfig",
    "ServiceSettings",
    "Snapshot",
    "SnapshotStore",
]
