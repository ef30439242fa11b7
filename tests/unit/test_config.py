import pytest
from pydantic import ValidationError

from iperf3_statuspage.config import ScheduleConfig, ServiceSettings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "BIND_ADDRESS",
        "BIND_PORT",
        "INTERVAL_MINUTES",
        "IPERF3_SERVER_IP",
        "IPERF3_SERVER_PORT",
        "RUN_ON_START",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = ServiceSettings(_env_file=None)

    assert settings.bind_address == "127.0.0.1"
    assert settings.bind_port == 8080
    schedule = settings.schedule_config()
    assert schedule.target_address == "0.0.0.0"
    assert schedule.target_port == 5201
    assert schedule.interval_seconds == 3600.0
    assert schedule.run_on_start is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IPERF3_SERVER_IP", "192.0.2.10")
    monkeypatch.setenv("IPERF3_SERVER_PORT", "5999")
    monkeypatch.setenv("INTERVAL_MINUTES", "5")
    monkeypatch.setenv("PROBE_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("IPERF3_BIN", "/opt/iperf3/bin/iperf3")

    settings = ServiceSettings(_env_file=None)

    schedule = settings.schedule_config()
    assert (schedule.target_address, schedule.target_port) == ("192.0.2.10", 5999)
    assert schedule.interval_seconds == 300.0
    probe = settings.probe_config()
    assert probe.iperf3_bin == "/opt/iperf3/bin/iperf3"
    assert probe.timeout_seconds == 30.0


def test_env_file_is_read(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BIND_PORT", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("BIND_PORT=9090\n", encoding="utf-8")

    assert ServiceSettings(_env_file=env_file).bind_port == 9090


def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIND_PORT", "70000")
    with pytest.raises(ValidationError):
        ServiceSettings(_env_file=None)

    with pytest.raises(ValidationError):
        ScheduleConfig(interval_minutes=0)
