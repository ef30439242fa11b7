"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Exact bytes of one well-formed JSON document emitted by the probe."""

    body: bytes

    def __len__(self) -> int:
        return len(self.body)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """The latest published document and when it was published."""

    document: RawDocument
    sequence: int
    published_at: datetime


class ProbeErrorKind(str, Enum):
    SPAWN_FAILED = "spawn_failed"
    NON_ZERO_EXIT = "non_zero_exit"
    MALFORMED_OUTPUT = "malformed_output"
    TIMEOUT = "timeout"


class ProbeError(Exception):
    """A single probe attempt failed; the current tick is skipped."""

    def __init__(
        self,
        kind: ProbeErrorKind,
        message: str,
        *,
        exit_code: int | None = None,
        output_excerpt: str = "",
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.exit_code = exit_code
        self.output_excerpt = output_excerpt

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.message}"
        if self.exit_code is not None:
            text += f" (exit code {self.exit_code})"
        if self.output_excerpt:
            text += f"\noutput: {self.output_excerpt}"
        return text
