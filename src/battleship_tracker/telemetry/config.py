"""Telemetry configuration loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field

from .logger import init_logging
from .metrics import init_metrics
from .tracer import init_tracing

ENV_PREFIX = "BATTLESHIP_TRACKER_"
_TRUTHY = {"1", "true", "yes", "on"}


class TelemetryConfig(BaseModel):
    """Runtime switches and exporter endpoints for logging, tracing and metrics."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    log_level: str = "INFO"
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    service_name: str = "battleship-tracker"
    service_namespace: str = "game"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    def resource(self) -> dict[str, str]:
        """Resource attributes shared by every exporter."""
        attributes = {
            "service.name": self.service_name,
            "service.namespace": self.service_namespace,
        }
        attributes.update(self.resource_attributes)
        return attributes

    @classmethod
    def from_env(cls, **overrides: Any) -> TelemetryConfig:
        """Build a config from ``BATTLESHIP_TRACKER_*`` and ``OTEL_*`` variables.

        Explicit ``overrides`` win over anything read from the environment.
        """
        data: dict[str, Any] = {}

        flags = {
            "enable_tracing": (f"{ENV_PREFIX}ENABLE_TRACING", "OTEL_TRACES_ENABLED"),
            "enable_metrics": (f"{ENV_PREFIX}ENABLE_METRICS", "OTEL_METRICS_ENABLED"),
            "enable_logging": (f"{ENV_PREFIX}ENABLE_LOGGING", "OTEL_LOGS_ENABLED"),
        }
        for name, env_names in flags.items():
            for env_name in env_names:
                value = os.getenv(env_name)
                if value is not None:
                    data[name] = value.strip().lower() in _TRUTHY
                    break

        log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            data["log_level"] = log_level.strip().upper()

        base_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        for signal in ("traces", "metrics", "logs"):
            endpoint = os.getenv(f"OTEL_EXPORTER_OTLP_{signal.upper()}_ENDPOINT")
            if not endpoint and base_endpoint:
                endpoint = f"{base_endpoint.rstrip('/')}/v1/{signal}"
            if endpoint:
                data[f"otlp_{signal}_endpoint"] = endpoint

        service_name = os.getenv("OTEL_SERVICE_NAME")
        if service_name:
            data["service_name"] = service_name
        service_namespace = os.getenv("OTEL_SERVICE_NAMESPACE")
        if service_namespace:
            data["service_namespace"] = service_namespace

        resource_env = os.getenv("OTEL_RESOURCE_ATTRIBUTES")
        if resource_env:
            attrs: dict[str, str] = {}
            for part in resource_env.split(","):
                if "=" not in part:
                    continue
                key, value = part.split("=", 1)
                attrs[key.strip()] = value.strip()
            data["resource_attributes"] = attrs

        # An exporter endpoint switches its signal on unless explicitly disabled.
        for signal, flag in (
            ("traces", "enable_tracing"),
            ("metrics", "enable_metrics"),
            ("logs", "enable_logging"),
        ):
            if data.get(f"otlp_{signal}_endpoint"):
                data.setdefault(flag, True)

        data.update(overrides)
        return cls(**data)


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Load and cache telemetry config from the environment."""
    return TelemetryConfig.from_env()


def init_telemetry(config: TelemetryConfig | None = None) -> TelemetryConfig:
    """Initialise the enabled telemetry subsystems and return the config used."""
    resolved = config or load_telemetry_config()

    if resolved.enable_tracing:
        init_tracing(resolved)
    if resolved.enable_metrics:
        init_metrics(resolved)
    if resolved.enable_logging:
        init_logging(resolved)
    return resolved
