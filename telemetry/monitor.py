"""Periodic telemetry update loop.

Each ``tick()`` runs one cycle: fetch -> decode -> summarize -> render ->
publish. Sources and sinks are plain protocols, so the same loop drives a
network client, a replay file, a map widget or a WebSocket broadcaster.

Only two values carry over from one tick to the next: the last ``GpsFix``
(returned unchanged by the decoder when a sentence is rejected) and the
last ``Scan`` (kept so that ``redraw`` can re-render after a resize).
"""

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from telemetry.draw import DrawCommand
from telemetry.lidar import Scan, ScanStats, Surface, compute_stats, render
from telemetry.nmea import GpsFix, decode
from telemetry.nmea.gga import DEFAULT_TALKER_IDS

__all__ = ["TelemetryMonitor", "TelemetrySink", "TelemetrySource", "TickResult"]

logger = logging.getLogger(__name__)

# Errors a source may raise for a single failed fetch; the loop keeps going.
# OSError also covers TimeoutError and ConnectionError.
_RECOVERABLE_ERRORS = (OSError, ValueError)


class TelemetrySource(Protocol):
    def read_gps(self) -> str: ...

    def read_scan(self) -> Scan: ...


class TelemetrySink(Protocol):
    def publish_fix(self, fix: GpsFix) -> None: ...

    def publish_scan(
        self, scan: Scan, stats: ScanStats, commands: Sequence[DrawCommand]
    ) -> None: ...


@dataclass(frozen=True)
class TickResult:
    """Outcome of one update cycle.

    Attributes:
        fix: The current fix (the previous one if nothing new was decoded).
        stats: Statistics for the scan rendered this tick, or None if the
            scan fetch failed.
        commands: Draw commands published this tick, empty if none.
        gps_ok: Whether the GPS fetch succeeded.
        scan_ok: Whether the scan fetch succeeded.
    """

    fix: GpsFix
    stats: ScanStats | None
    commands: tuple[DrawCommand, ...]
    gps_ok: bool
    scan_ok: bool


class TelemetryMonitor:
    """Drive a telemetry source into one or more sinks.

    Two consumption patterns are supported:

    Caller-owned scheduling::

        monitor = TelemetryMonitor(source, [sink])
        result = monitor.tick()

    Built-in fixed-interval loop (blocks until ``cancel()`` or EOF)::

        monitor.run(interval_seconds=2.0)

    Args:
        source: Where raw sentences and scans come from.
        sinks: Receivers of decoded fixes and rendered scans.
        surface: Geometry used to render scans.
        talker_ids: Accepted GGA talker prefixes.
    """

    def __init__(
        self,
        source: TelemetrySource,
        sinks: Iterable[TelemetrySink],
        surface: Surface | None = None,
        talker_ids: Sequence[str] = DEFAULT_TALKER_IDS,
    ) -> None:
        self._source = source
        self._sinks = list(sinks)
        self._surface = surface if surface is not None else Surface()
        self._talker_ids = tuple(talker_ids)
        self._fix = GpsFix()
        self._scan: Scan | None = None
        self._cancelled = threading.Event()

    @property
    def fix(self) -> GpsFix:
        return self._fix

    @property
    def last_scan(self) -> Scan | None:
        return self._scan

    def _update_gps(self) -> bool:
        try:
            raw = self._source.read_gps()
        except _RECOVERABLE_ERRORS as e:
            logger.warning("GPS fetch failed, keeping previous fix: %s", e)
            return False

        self._fix = decode(raw, self._fix, talker_ids=self._talker_ids)
        for sink in self._sinks:
            sink.publish_fix(self._fix)
        return True

    def _publish_scan(
        self, scan: Scan, surface: Surface
    ) -> tuple[ScanStats, tuple[DrawCommand, ...]]:
        stats = compute_stats(scan.samples, scan.timestamp_ms)
        commands = tuple(render(scan, stats, surface))
        for sink in self._sinks:
            sink.publish_scan(scan, stats, commands)
        return stats, commands

    def tick(self) -> TickResult:
        """Run one fetch -> decode -> render -> publish cycle.

        A failed fetch on one stage is logged and leaves that stage's state
        as it was; the other stage still runs.

        Raises:
            EOFError: If the source has no more data.
        """
        gps_ok = self._update_gps()

        try:
            scan = self._source.read_scan()
        except _RECOVERABLE_ERRORS as e:
            logger.warning("Scan fetch failed, skipping render: %s", e)
            return TickResult(self._fix, None, (), gps_ok, scan_ok=False)

        self._scan = scan
        stats, commands = self._publish_scan(scan, self._surface)
        return TickResult(self._fix, stats, commands, gps_ok, scan_ok=True)

    def redraw(self, surface: Surface) -> tuple[DrawCommand, ...]:
        """Re-render the last scan for a new surface and publish it.

        The new surface is used for later ticks too. Returns an empty tuple
        if no scan has been received yet.
        """
        self._surface = surface
        if self._scan is None:
            return ()
        _, commands = self._publish_scan(self._scan, surface)
        return commands

    def cancel(self) -> None:
        """Stop ``run()`` at its next wait; safe to call from another thread."""
        self._cancelled.set()

    def run(self, interval_seconds: float) -> None:
        """Tick every ``interval_seconds`` until cancelled or the source ends.

        The first tick runs immediately. A cancelled monitor stays
        cancelled; ``run()`` on it returns without ticking.
        """
        logger.info("Telemetry monitor started (interval %.2fs)", interval_seconds)
        try:
            while not self._cancelled.is_set():
                self.tick()
                self._cancelled.wait(interval_seconds)
        except EOFError as e:
            logger.info("Telemetry source ended: %s", e)
        logger.info("Telemetry monitor stopped")
