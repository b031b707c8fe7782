"""Lidar scan data types."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScanSample:
    """One lidar return.

    Attributes:
        angle_deg: Bearing in degrees as reported by the sensor. Usually
            0-360 but not normalized; callers must not assume wrapping.
        range_mm: Measured range in millimeters. 0 means "no return".
        intensity: Reflectivity estimate, 0-255.
    """

    angle_deg: float
    range_mm: int
    intensity: int = 0

    @property
    def is_valid(self) -> bool:
        return self.range_mm > 0


@dataclass(frozen=True)
class Scan:
    """One full rotation of samples, in angular acquisition order.

    Sample angles are not guaranteed to be sorted.
    """

    sample_count: int = 0
    rpm: float = 0
    timestamp_ms: int = 0
    samples: tuple[ScanSample, ...] = field(default_factory=tuple)
    checksum: int = 0


@dataclass(frozen=True)
class ScanStats:
    """Summary of a scan, derived on every update and never stored.

    Attributes:
        valid_sample_count: Number of samples with ``range_mm > 0``.
        max_range_mm: Longest valid range, 0 if there are none.
        min_range_mm: Shortest valid range, 0 if there are none.
        formatted_timestamp: ``YYYY-MM-DD HH:MM:SS.mmm`` in local time.
    """

    valid_sample_count: int
    max_range_mm: int
    min_range_mm: int
    formatted_timestamp: str
