"""Background telemetry loop that publishes to WebSocket subscribers."""

import asyncio
import logging
from collections.abc import Sequence

from server.broadcaster import broadcast_message
from server.formatters import (
    GPS_MESSAGE_TYPE,
    SCAN_MESSAGE_TYPE,
    format_fix_message,
    format_scan_message,
)
from telemetry.draw import DrawCommand
from telemetry.lidar import Scan, ScanStats
from telemetry.monitor import TelemetryMonitor
from telemetry.nmea import GpsFix

__all__ = ["BroadcastSink", "run_monitor_loop"]

logger = logging.getLogger(__name__)


class BroadcastSink:
    """Telemetry sink that formats results and broadcasts them on ``loop``."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def publish_fix(self, fix: GpsFix) -> None:
        broadcast_message(GPS_MESSAGE_TYPE, format_fix_message(fix), self._loop)

    def publish_scan(
        self, scan: Scan, stats: ScanStats, commands: Sequence[DrawCommand]
    ) -> None:
        message = format_scan_message(scan, stats, commands)
        broadcast_message(SCAN_MESSAGE_TYPE, message, self._loop)


def run_monitor_loop(monitor: TelemetryMonitor, interval_seconds: float) -> None:
    """Run ``monitor`` until it is cancelled or its source ends.

    The caller owns *monitor*; ``monitor.cancel()`` stops the loop at its
    next wait. Intended to run in an executor thread.

    Args:
        monitor: A monitor wired to a ``BroadcastSink``.
        interval_seconds: Delay between ticks.
    """
    try:
        monitor.run(interval_seconds)
    except Exception:
        logger.exception("Telemetry loop crashed")
        raise
