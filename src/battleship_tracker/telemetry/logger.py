"""Logging setup with optional OpenTelemetry export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry.instrumentation.logging import LoggingInstrumentor

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)
ROOT_LOGGER_NAME = "battleship_tracker"

_CONSOLE_HANDLER: logging.Handler | None = None
_OTLP_HANDLER: logging.Handler | None = None


class _OtelContextFilter(logging.Filter):
    """Fill trace/span placeholders when no span context is active."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a standard library logger; module loggers nest under the package logger."""
    return logging.getLogger(name)


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Attach console and, when configured, OTLP handlers to the package logger."""
    global _CONSOLE_HANDLER, _OTLP_HANDLER

    logger = get_logger(ROOT_LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Injects otelTraceID/otelSpanID into every record created inside a span.
    instrumentor = LoggingInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument(set_logging_format=False)

    if _CONSOLE_HANDLER is None:
        _CONSOLE_HANDLER = logging.StreamHandler()
        _CONSOLE_HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        _CONSOLE_HANDLER.addFilter(_OtelContextFilter())
        logger.addHandler(_CONSOLE_HANDLER)

    if config.otlp_logs_endpoint and _OTLP_HANDLER is None:
        _OTLP_HANDLER = _build_otlp_handler(config)
        logger.addHandler(_OTLP_HANDLER)

    return logger


def _build_otlp_handler(config: TelemetryConfig) -> logging.Handler:
    from opentelemetry._logs import set_logger_provider
    from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
    from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
    from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    from opentelemetry.sdk.resources import Resource

    provider = LoggerProvider(resource=Resource.create(config.resource()))
    exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    set_logger_provider(provider)

    handler = LoggingHandler(level=logging.NOTSET, logger_provider=provider)
    handler.addFilter(_OtelContextFilter())
    return handler
