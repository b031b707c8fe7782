"""JSON formatting for GPS fixes and rendered scans."""

import json
from collections.abc import Sequence
from typing import Any

from telemetry.draw import DrawCommand, command_to_dict
from telemetry.lidar import Scan, ScanStats
from telemetry.nmea import GpsFix

__all__ = ["format_fix_message", "format_scan_message", "marker_for_fix"]

GPS_MESSAGE_TYPE = "gps"
SCAN_MESSAGE_TYPE = "scan"


def marker_for_fix(fix: GpsFix) -> dict[str, Any] | None:
    """Build a map-marker payload, or None when the fix has no position."""
    coordinates = fix.coordinates()
    if coordinates is None:
        return None
    latitude, longitude = coordinates
    return {
        "latitude": latitude,
        "longitude": longitude,
        "title": "Current position",
        "callout": (
            f"GPS fix\nTime: {fix.time}\n"
            f"Position: {latitude:.6f}, {longitude:.6f}"
        ),
    }


def format_fix_message(fix: GpsFix) -> str:
    """Serialize a GPS fix into a JSON string for WebSocket transmission."""
    return json.dumps({
        "type": GPS_MESSAGE_TYPE,
        "time": fix.time,
        "latitude": fix.latitude,
        "lat_dir": fix.lat_dir,
        "longitude": fix.longitude,
        "lon_dir": fix.lon_dir,
        "status": fix.status.value,
        "satellites_in_view": fix.satellites_in_view,
        "horizontal_dilution": fix.horizontal_dilution,
        "altitude": fix.altitude,
        "geoid_height": fix.geoid_height,
        "marker": marker_for_fix(fix),
    })


def format_scan_message(
    scan: Scan, stats: ScanStats, commands: Sequence[DrawCommand]
) -> str:
    """Serialize a rendered scan into a JSON string for WebSocket transmission."""
    return json.dumps({
        "type": SCAN_MESSAGE_TYPE,
        "sample_count": scan.sample_count,
        "rpm": scan.rpm,
        "timestamp_ms": scan.timestamp_ms,
        "checksum": scan.checksum,
        "stats": {
            "valid_sample_count": stats.valid_sample_count,
            "max_range_mm": stats.max_range_mm,
            "min_range_mm": stats.min_range_mm,
            "formatted_timestamp": stats.formatted_timestamp,
        },
        "commands": [command_to_dict(command) for command in commands],
    })
