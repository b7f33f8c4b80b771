"""Metrics helper utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from opentelemetry import metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.metrics import Counter, Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:  # pragma: no cover
    from .config import TelemetryConfig

MetricAttributes = Mapping[str, str | bool | int | float]

_METER_PROVIDER: MeterProvider | None = None
_INSTRUMENTS: dict[str, Counter] = {}


def get_meter(name: str = "battleship_tracker") -> Meter:
    if _METER_PROVIDER is not None:
        return _METER_PROVIDER.get_meter(name)
    return otel_metrics.get_meter(name)


def init_metrics(config: TelemetryConfig) -> MeterProvider:
    global _METER_PROVIDER, _INSTRUMENTS

    # OpenTelemetry accepts a single global meter provider.
    if _METER_PROVIDER is not None:
        return _METER_PROVIDER

    readers = []
    if config.otlp_metrics_endpoint:
        exporter = OTLPMetricExporter(endpoint=config.otlp_metrics_endpoint, insecure=True)
        readers.append(PeriodicExportingMetricReader(exporter, export_interval_millis=5000))

    provider = MeterProvider(resource=Resource.create(config.resource()), metric_readers=readers)
    otel_metrics.set_meter_provider(provider)

    _METER_PROVIDER = provider
    _INSTRUMENTS = {}
    return provider


def record_game_metric(name: str, value: float, attrs: MetricAttributes | None = None) -> None:
    """Add ``value`` to a lazily created counter named ``name``."""
    instrument = _INSTRUMENTS.get(name)
    if instrument is None:
        instrument = get_meter().create_counter(name, unit="1")
        _INSTRUMENTS[name] = instrument
    instrument.add(value, attributes=attrs or {})
