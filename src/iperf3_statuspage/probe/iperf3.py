"""Runs the `iperf3` client binary and captures its JSON report."""

from __future__ import annotations

import logging
import subprocess

from iperf3_statuspage.config import ProbeConfig
from iperf3_statuspage.probe.base import excerpt, parse_document
from iperf3_statuspage.types import ProbeError, ProbeErrorKind, RawDocument

logger = logging.getLogger(__name__)


class Iperf3ProbeRunner:
    """Invokes `iperf3 -c <address> -p <port> --json` once per call.

    The call blocks until the client exits or `ProbeConfig.timeout_seconds`
    elapses, in which case the child is killed. Retrying is left to the caller.
    """

    def __init__(self, config: ProbeConfig | None = None) -> None:
        self.config = config or ProbeConfig()

    def build_command(self, target_address: str, target_port: int) -> list[str]:
        return [
            self.config.iperf3_bin,
            "-c",
            target_address,
            "-p",
            str(target_port),
            "--json",
        ]

    def run_probe(self, target_address: str, target_port: int) -> RawDocument:
        cmd = self.build_command(target_address, target_port)
        logger.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.config.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise ProbeError(
                ProbeErrorKind.TIMEOUT,
                f"iperf3 did not finish within {self.config.timeout_seconds:g}s",
                output_excerpt=excerpt(exc.stderr or exc.stdout),
            ) from exc
        except OSError as exc:
            raise ProbeError(
                ProbeErrorKind.SPAWN_FAILED,
                f"failed to run {self.config.iperf3_bin}: {exc}",
            ) from exc

        if proc.returncode != 0:
            # iperf3 --json reports its own errors on stdout.
            raise ProbeError(
                ProbeErrorKind.NON_ZERO_EXIT,
                "iperf3 failed",
                exit_code=proc.returncode,
                output_excerpt=excerpt(proc.stderr) or excerpt(proc.stdout),
            )

        return parse_document(proc.stdout)
