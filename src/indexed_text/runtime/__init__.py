"""Ambient runtime services: settings and telemetry."""

from .config import TelemetrySettings

__all__ = ["TelemetrySettings"]
