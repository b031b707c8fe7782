"""Robot telemetry decoding and lidar scan rendering."""

from telemetry.draw import Circle, DrawCommand, Line, Point, Rgba, Text
from telemetry.lidar import (
    CartesianPoint,
    Scan,
    ScanSample,
    ScanStats,
    Surface,
    compute_stats,
    project,
    render,
)
from telemetry.monitor import TelemetryMonitor, TickResult
from telemetry.nmea import FixStatus, GpsFix, decode, validate_checksum

__all__ = [
    "CartesianPoint",
    "Circle",
    "DrawCommand",
    "FixStatus",
    "GpsFix",
    "Line",
    "Point",
    "Rgba",
    "Scan",
    "ScanSample",
    "ScanStats",
    "Surface",
    "TelemetryMonitor",
    "Text",
    "TickResult",
    "compute_stats",
    "decode",
    "project",
    "render",
    "validate_checksum",
]
