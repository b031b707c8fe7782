"""Tests for scan payload parsing and replay."""

import json

import pytest

from telemetry import Scan, ScanSample
from telemetry.sources import ReplaySource, scan_from_dict
from tests.fixtures import GGA_SENTENCE, SCAN_PAYLOAD


class TestScanFromDict:
    """Tests for scan_from_dict function."""

    def test_recorded_payload(self):
        scan = scan_from_dict(SCAN_PAYLOAD)
        assert scan.sample_count == 16
        assert scan.rpm == 0
        assert scan.timestamp_ms == 12345
        assert scan.checksum == 0
        assert len(scan.samples) == 16
        assert scan.samples[1] == ScanSample(22.5, 43520, 85)

    def test_missing_keys_default_to_zero(self):
        scan = scan_from_dict({"points": [{"angle": 10}]})
        assert scan.sample_count == 1
        assert scan.timestamp_ms == 0
        assert scan.samples == (ScanSample(10.0, 0, 0),)

    def test_empty_payload(self):
        assert scan_from_dict({}) == Scan()

    @pytest.mark.parametrize("payload", [None, [], "scan", 3])
    def test_non_object_payload(self, payload):
        with pytest.raises(ValueError):
            scan_from_dict(payload)

    def test_points_must_be_a_list(self):
        with pytest.raises(ValueError, match="points"):
            scan_from_dict({"points": {"angle": 0}})

    def test_point_must_be_an_object(self):
        with pytest.raises(ValueError):
            scan_from_dict({"points": [[0, 100, 5]]})

    @pytest.mark.parametrize(
        "point",
        [{"distance_mm": "far"}, {"distance_mm": None}, {"angle": [1]}],
    )
    def test_bad_numbers(self, point):
        with pytest.raises(ValueError):
            scan_from_dict({"points": [point]})


class TestReplaySource:
    """Tests for ReplaySource."""

    def test_loops_by_default(self):
        source = ReplaySource(["a", "b"], [Scan(timestamp_ms=1)])
        assert [source.read_gps() for _ in range(3)] == ["a", "b", "a"]
        assert source.read_scan().timestamp_ms == 1
        assert source.read_scan().timestamp_ms == 1

    def test_eof_without_loop(self):
        source = ReplaySource(["a"], [], loop=False)
        assert source.read_gps() == "a"
        with pytest.raises(EOFError):
            source.read_gps()
        with pytest.raises(EOFError):
            source.read_scan()

    def test_empty_recording_with_loop_raises_eof(self):
        with pytest.raises(EOFError):
            ReplaySource([], []).read_gps()

    def test_from_files(self, tmp_path):
        nmea_path = tmp_path / "drive.nmea"
        nmea_path.write_text(f"{GGA_SENTENCE}\r\n\n{GGA_SENTENCE}\n", "utf-8")
        scan_path = tmp_path / "drive.jsonl"
        scan_path.write_text(json.dumps(SCAN_PAYLOAD) + "\n\n", "utf-8")

        source = ReplaySource.from_files(nmea_path, scan_path, loop=False)
        assert source.read_gps() == GGA_SENTENCE
        assert source.read_gps() == GGA_SENTENCE
        assert source.read_scan().sample_count == 16
        with pytest.raises(EOFError):
            source.read_scan()

    def test_from_files_reports_bad_line(self, tmp_path):
        nmea_path = tmp_path / "drive.nmea"
        nmea_path.write_text(GGA_SENTENCE, "utf-8")
        scan_path = tmp_path / "drive.jsonl"
        scan_path.write_text(json.dumps(SCAN_PAYLOAD) + "\n{not json\n", "utf-8")

        with pytest.raises(ValueError, match=":2:"):
            ReplaySource.from_files(nmea_path, scan_path)

    def test_from_files_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            ReplaySource.from_files(tmp_path / "none.nmea", tmp_path / "none.jsonl")
