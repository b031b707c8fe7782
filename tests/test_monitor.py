"""Tests for the telemetry update loop."""

import threading
from collections.abc import Sequence

import pytest

from telemetry import (
    FixStatus,
    GpsFix,
    Scan,
    ScanSample,
    ScanStats,
    Surface,
    TelemetryMonitor,
)
from telemetry.draw import DrawCommand, Point
from telemetry.sources import ReplaySource
from tests.fixtures import GGA_SENTENCE, GLL_SENTENCE, make_scan


class RecordingSink:
    def __init__(self) -> None:
        self.fixes: list[GpsFix] = []
        self.scans: list[tuple[Scan, ScanStats, Sequence[DrawCommand]]] = []

    def publish_fix(self, fix: GpsFix) -> None:
        self.fixes.append(fix)

    def publish_scan(
        self, scan: Scan, stats: ScanStats, commands: Sequence[DrawCommand]
    ) -> None:
        self.scans.append((scan, stats, commands))


class FlakySource:
    """Source that raises the queued exceptions before returning data."""

    def __init__(self, gps_errors=(), scan_errors=()) -> None:
        self.gps_errors = list(gps_errors)
        self.scan_errors = list(scan_errors)

    def read_gps(self) -> str:
        if self.gps_errors:
            raise self.gps_errors.pop(0)
        return GGA_SENTENCE

    def read_scan(self) -> Scan:
        if self.scan_errors:
            raise self.scan_errors.pop(0)
        return make_scan()


class TestTick:
    """Tests for TelemetryMonitor.tick."""

    def test_publishes_fix_and_scan(self):
        sink = RecordingSink()
        monitor = TelemetryMonitor(FlakySource(), [sink])

        result = monitor.tick()

        assert result.gps_ok and result.scan_ok
        assert result.fix.status is FixStatus.FIX
        assert sink.fixes == [result.fix]
        assert monitor.fix == result.fix
        scan, stats, commands = sink.scans[0]
        assert scan == make_scan()
        assert stats == result.stats
        assert stats.valid_sample_count == 14
        assert tuple(commands) == result.commands

    def test_publishes_to_every_sink(self):
        sinks = [RecordingSink(), RecordingSink()]
        TelemetryMonitor(FlakySource(), sinks).tick()
        assert all(len(sink.fixes) == 1 and len(sink.scans) == 1 for sink in sinks)

    def test_gps_failure_keeps_previous_fix_and_still_renders(self, caplog):
        sink = RecordingSink()
        source = FlakySource()
        monitor = TelemetryMonitor(source, [sink])
        first = monitor.tick().fix

        source.gps_errors.append(TimeoutError("gps timed out"))
        result = monitor.tick()

        assert not result.gps_ok
        assert result.scan_ok
        assert result.fix is first
        assert len(sink.fixes) == 1
        assert len(sink.scans) == 2
        assert "gps timed out" in caplog.text

    def test_scan_failure_skips_render(self):
        sink = RecordingSink()
        monitor = TelemetryMonitor(FlakySource(scan_errors=[ValueError("bad payload")]), [sink])

        result = monitor.tick()

        assert result.gps_ok
        assert not result.scan_ok
        assert result.stats is None
        assert result.commands == ()
        assert sink.scans == []
        assert monitor.last_scan is None

    def test_rejected_sentence_republishes_previous_fix(self):
        sink = RecordingSink()
        source = ReplaySource([GGA_SENTENCE, GLL_SENTENCE], [make_scan()])
        monitor = TelemetryMonitor(source, [sink])

        first = monitor.tick().fix
        second = monitor.tick().fix

        assert second is first
        assert sink.fixes == [first, first]

    def test_talker_ids_forwarded_to_decoder(self):
        source = ReplaySource([GGA_SENTENCE.replace("$GNGGA", "$GPGGA")], [make_scan()])
        monitor = TelemetryMonitor(source, [], talker_ids=("GP",))
        assert monitor.tick().fix.time == "02:36:34"

    def test_far_future_timestamp_still_publishes(self):
        sink = RecordingSink()
        scan = Scan(timestamp_ms=10**17, samples=(ScanSample(0.0, 500),))
        monitor = TelemetryMonitor(ReplaySource([GGA_SENTENCE], [scan]), [sink])

        result = monitor.tick()

        assert result.scan_ok
        assert result.stats.valid_sample_count == 1
        assert len(sink.scans) == 1

    def test_eof_propagates(self):
        monitor = TelemetryMonitor(ReplaySource([], [], loop=False), [])
        with pytest.raises(EOFError):
            monitor.tick()


class TestRedraw:
    """Tests for TelemetryMonitor.redraw."""

    def test_without_scan(self):
        sink = RecordingSink()
        monitor = TelemetryMonitor(FlakySource(), [sink])
        assert monitor.redraw(Surface(width_px=600, height_px=600)) == ()
        assert sink.scans == []

    def test_rerenders_last_scan(self):
        sink = RecordingSink()
        monitor = TelemetryMonitor(FlakySource(), [sink])
        monitor.tick()

        # 1 px per meter brings every return inside a 200 px square.
        surface = Surface(width_px=200, height_px=200, meters_per_pixel=1.0)
        commands = monitor.redraw(surface)

        assert len([c for c in commands if isinstance(c, Point)]) == 14
        assert sink.scans[-1][2] == commands
        assert monitor.tick().commands == commands


class TestRun:
    """Tests for TelemetryMonitor.run."""

    def test_stops_when_source_ends(self):
        sink = RecordingSink()
        source = ReplaySource([GGA_SENTENCE] * 3, [make_scan()] * 3, loop=False)
        monitor = TelemetryMonitor(source, [sink])

        monitor.run(interval_seconds=0)

        assert len(sink.fixes) == 3
        assert len(sink.scans) == 3

    def test_cancel_from_another_thread(self):
        sink = RecordingSink()
        monitor = TelemetryMonitor(FlakySource(), [sink])

        thread = threading.Thread(target=monitor.run, args=(60.0,))
        thread.start()
        monitor.cancel()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert len(sink.fixes) <= 1

    def test_cancelled_monitor_does_not_tick(self):
        sink = RecordingSink()
        monitor = TelemetryMonitor(FlakySource(), [sink])
        monitor.cancel()
        monitor.run(interval_seconds=0)
        assert sink.fixes == []
