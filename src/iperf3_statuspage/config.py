"""Configuration models for the iperf3 status page."""

from __future__ import annotations

import shutil
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IPERF3_BIN = shutil.which("iperf3") or "iperf3"


class ScheduleConfig(BaseModel):
    """Configures which server is measured and how often."""

    model_config = ConfigDict(frozen=True)

    target_address: str = "0.0.0.0"
    target_port: int = Field(default=5201, ge=1, le=65535)
    interval_minutes: float = Field(default=60.0, gt=0.0)
    run_on_start: bool = False

    @property
    def interval_seconds(self) -> float:
        return self.interval_minutes * 60.0


class ProbeConfig(BaseModel):
    """Configures how the iperf3 client process is launched."""

    model_config = ConfigDict(frozen=True)

    iperf3_bin: str = Field(default=DEFAULT_IPERF3_BIN, min_length=1)
    timeout_seconds: float = Field(default=120.0, gt=0.0)


class ServiceSettings(BaseSettings):
    """Flat view of the environment (and optional `.env` file)."""

    bind_address: str = "127.0.0.1"
    bind_port: int = Field(default=8080, ge=1, le=65535)

    interval_minutes: float = Field(default=60.0, gt=0.0)
    run_on_start: bool = False

    iperf3_server_ip: str = "0.0.0.0"
    iperf3_server_port: int = Field(default=5201, ge=1, le=65535)
    iperf3_bin: str = Field(default=DEFAULT_IPERF3_BIN, min_length=1)
    probe_timeout_seconds: float = Field(default=120.0, gt=0.0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def schedule_config(self) -> ScheduleConfig:
        return ScheduleConfig(
            target_address=self.iperf3_server_ip,
            target_port=self.iperf3_server_port,
            interval_minutes=self.interval_minutes,
            run_on_start=self.run_on_start,
        )

    def probe_config(self) -> ProbeConfig:
        return ProbeConfig(
            iperf3_bin=self.iperf3_bin,
            timeout_seconds=self.probe_timeout_seconds,
        )


@lru_cache
def get_settings() -> ServiceSettings:
    return ServiceSettings()
