"""Infrastructure — process-wide logging and telemetry."""

from snotra.infrastructure.telemetry import LokiSink, Telemetry, setup_telemetry

__all__ = ["LokiSink", "Telemetry", "setup_telemetry"]
