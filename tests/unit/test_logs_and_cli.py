import logging
from typing import Any

import pytest

from iperf3_statuspage import cli
from iperf3_statuspage.cli import build_argparser
from iperf3_statuspage.config import ServiceSettings
from iperf3_statuspage.obs.logs import configure_logging


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging("debug")
    handlers = list(logger.handlers)

    again = configure_logging(logging.WARNING)

    assert again is logger
    assert again.handlers == handlers
    assert len(handlers) == 1
    assert again.level == logging.WARNING


def test_cli_overrides_are_optional() -> None:
    ap = build_argparser()

    defaults = ap.parse_args([])
    assert defaults.host is None
    assert defaults.port is None

    args = ap.parse_args(["--host", "0.0.0.0", "--port", "9000"])
    assert (args.host, args.port) == ("0.0.0.0", 9000)


def _capture_run(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    captured: dict[str, Any] = {}

    def _fake_run(app: Any, **kwargs: Any) -> None:
        captured["app"] = app
        captured.update(kwargs)

    settings = ServiceSettings(_env_file=None, bind_address="127.0.0.1", bind_port=8080)
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    monkeypatch.setattr(cli.uvicorn, "run", _fake_run)
    return captured


def test_main_serves_app_factory_with_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_run(monkeypatch)

    cli.main([])

    assert captured["app"] == "iperf3_statuspage.api.main:create_app"
    assert captured["factory"] is True
    assert (captured["host"], captured["port"]) == ("127.0.0.1", 8080)


def test_main_honours_explicit_port_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_run(monkeypatch)

    cli.main(["--port", "0", "--host", "0.0.0.0"])

    assert (captured["host"], captured["port"]) == ("0.0.0.0", 0)
