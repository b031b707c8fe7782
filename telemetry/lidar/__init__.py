"""Lidar scan statistics, projection and rendering."""

from telemetry.lidar.projection import CartesianPoint, project
from telemetry.lidar.render import Surface, render
from telemetry.lidar.stats import compute_stats, format_timestamp
from telemetry.lidar.types import Scan, ScanSample, ScanStats

__all__ = [
    "CartesianPoint",
    "Scan",
    "ScanSample",
    "ScanStats",
    "Surface",
    "compute_stats",
    "format_timestamp",
    "project",
    "render",
]
