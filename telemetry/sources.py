"""Telemetry sources: scan payload parsing and recorded-data replay.

Scan wire format (one JSON object per rotation):
    {
        "N": 16,               # sample count
        "rpm": 0,
        "timestamp": 1718000000000,
        "points": [{"angle": 22.5, "distance_mm": 43520, "intensity": 85}, ...],
        "crc": 0
    }
"""

import itertools
import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from telemetry.lidar.types import Scan, ScanSample

__all__ = ["ReplaySource", "scan_from_dict"]

logger = logging.getLogger(__name__)


def _sample_from_dict(point: Any) -> ScanSample:
    if not isinstance(point, Mapping):
        raise ValueError(f"scan point must be an object, got {type(point).__name__}")
    return ScanSample(
        angle_deg=float(point.get("angle", 0.0)),
        range_mm=int(point.get("distance_mm", 0)),
        intensity=int(point.get("intensity", 0)),
    )


def scan_from_dict(payload: Any) -> Scan:
    """Build a ``Scan`` from a decoded wire record.

    Missing keys default to zero.

    Raises:
        ValueError: If the payload is not an object, ``points`` is not a
            list, or a value cannot be converted to a number.
    """
    if not isinstance(payload, Mapping):
        raise ValueError(f"scan payload must be an object, got {type(payload).__name__}")

    points = payload.get("points", [])
    if not isinstance(points, list):
        raise ValueError("scan payload 'points' must be a list")

    try:
        return Scan(
            sample_count=int(payload.get("N", len(points))),
            rpm=float(payload.get("rpm", 0)),
            timestamp_ms=int(payload.get("timestamp", 0)),
            samples=tuple(_sample_from_dict(point) for point in points),
            checksum=int(payload.get("crc", 0)),
        )
    except TypeError as e:
        raise ValueError(f"malformed scan payload: {e}") from e


class ReplaySource:
    """Replay recorded GGA sentences and scans as a telemetry source.

    Both streams advance independently, one item per read. With ``loop``
    set (the default) each stream restarts when exhausted; otherwise the
    read that runs past the end raises ``EOFError``, which ends the monitor
    loop.

    Example::

        source = ReplaySource.from_files("drive.nmea", "drive.scans.jsonl")
        monitor = TelemetryMonitor(source, [sink])
        monitor.run(interval_seconds=2.0)

    Args:
        sentences: Recorded NMEA sentences.
        scans: Recorded scans.
        loop: Restart each stream after its last item.
    """

    def __init__(
        self,
        sentences: Iterable[str],
        scans: Iterable[Scan],
        loop: bool = True,
    ) -> None:
        self._sentences = list(sentences)
        self._scans = list(scans)
        self._sentence_iter = self._make_iter(self._sentences, loop)
        self._scan_iter = self._make_iter(self._scans, loop)

    @staticmethod
    def _make_iter(items: list[Any], loop: bool) -> Iterator[Any]:
        if loop and items:
            return itertools.cycle(items)
        return iter(items)

    @classmethod
    def from_files(
        cls,
        nmea_path: str | Path,
        scan_path: str | Path,
        loop: bool = True,
    ) -> "ReplaySource":
        """Load an NMEA log (one sentence per line) and a JSON-lines scan log.

        Blank lines are skipped in both files.

        Raises:
            OSError: If either file cannot be read.
            ValueError: If a scan line is not valid JSON or not a scan record.
        """
        nmea_lines = Path(nmea_path).read_text("utf-8").splitlines()
        sentences = [line.strip() for line in nmea_lines if line.strip()]

        scans = []
        scan_lines = Path(scan_path).read_text("utf-8").splitlines()
        for number, line in enumerate(scan_lines, start=1):
            if not line.strip():
                continue
            try:
                scans.append(scan_from_dict(json.loads(line)))
            except ValueError as e:
                raise ValueError(f"{scan_path}:{number}: {e}") from e

        logger.info(
            "Loaded %d sentences from %s and %d scans from %s",
            len(sentences),
            nmea_path,
            len(scans),
            scan_path,
        )
        return cls(sentences, scans, loop=loop)

    def read_gps(self) -> str:
        """Return the next recorded sentence.

        Raises:
            EOFError: If the recording is exhausted.
        """
        try:
            return next(self._sentence_iter)
        except StopIteration:
            raise EOFError("NMEA replay exhausted.") from None

    def read_scan(self) -> Scan:
        """Return the next recorded scan.

        Raises:
            EOFError: If the recording is exhausted.
        """
        try:
            return next(self._scan_iter)
        except StopIteration:
            raise EOFError("Scan replay exhausted.") from None
