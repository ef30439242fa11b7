"""Console entrypoint: serve the status page with uvicorn."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

import uvicorn

from iperf3_statuspage.config import get_settings
from iperf3_statuspage.obs.logs import configure_logging

logger = logging.getLogger(__name__)


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Serve the latest iperf3 result over HTTP")
    ap.add_argument("--host", help="Bind address (default: BIND_ADDRESS or 127.0.0.1)")
    ap.add_argument("--port", type=int, help="Bind port (default: BIND_PORT or 8080)")
    return ap


def main(argv: Sequence[str] | None = None) -> None:
    args = build_argparser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    host = args.host if args.host is not None else settings.bind_address
    port = args.port if args.port is not None else settings.bind_port
    logger.info("starting server at http://%s:%s/iperf3", host, port)

    uvicorn.run(
        "iperf3_statuspage.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
