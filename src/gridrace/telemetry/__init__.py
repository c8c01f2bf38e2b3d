"""
Telemetry module - Race event collection and export.

This module contains:
- RaceRecorder: Listens to a race engine and stores turn events
- RaceExporter: Export recorded races to CSV and JSON
"""

from gridrace.telemetry.recorder import RaceRecorder
from gridrace.telemetry.exporter import RaceExporter, ExporterConfig

__all__ = [
    "RaceRecorder",
    "RaceExporter",
    "ExporterConfig",
]
