"""Probe runner contract and output validation."""

from __future__ import annotations

import json
from typing import Protocol

from iperf3_statuspage.types import ProbeError, ProbeErrorKind, RawDocument

EXCERPT_LENGTH = 500


class ProbeRunner(Protocol):
    """Runs one measurement against a target."""

    def run_probe(self, target_address: str, target_port: int) -> RawDocument:
        """Return the probe's document or raise `ProbeError`."""


def parse_document(data: bytes) -> RawDocument:
    """Wrap `data` verbatim once it is known to be one JSON document."""

    try:
        json.loads(data, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ProbeError(
            ProbeErrorKind.MALFORMED_OUTPUT,
            f"probe output is not valid JSON: {exc}",
            output_excerpt=excerpt(data),
        ) from exc
    return RawDocument(body=bytes(data))


def excerpt(data: bytes | str | None, max_length: int = EXCERPT_LENGTH) -> str:
    if not data:
        return ""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    text = text.strip()
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _reject_constant(token: str) -> float:
    raise ValueError(f"non-standard JSON constant {token}")
