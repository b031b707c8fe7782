"""Scan summary statistics."""

from collections.abc import Callable, Iterable
from datetime import datetime

from telemetry.lidar.types import ScanSample, ScanStats

# Anything above this looks like a real millisecond epoch (after 2001-09-09).
# Simulators and recorded fixtures often send a small placeholder instead.
EPOCH_MS_THRESHOLD = 1e12


def format_timestamp(
    timestamp_ms: float,
    clock: Callable[[], datetime] = datetime.now,
) -> str:
    """Format a millisecond epoch as ``YYYY-MM-DD HH:MM:SS.mmm`` local time.

    Values at or below ``EPOCH_MS_THRESHOLD`` are treated as placeholders
    and the current time from ``clock`` is shown instead. So are values
    too large for ``datetime`` to represent.

    Example:
        >>> format_timestamp(5, clock=lambda: datetime(2024, 1, 2, 3, 4, 5, 678000))
        '2024-01-02 03:04:05.678'
    """
    if timestamp_ms > EPOCH_MS_THRESHOLD:
        try:
            moment = datetime.fromtimestamp(timestamp_ms / 1000.0)
        except (OverflowError, OSError, ValueError):
            moment = clock()
    else:
        moment = clock()
    milliseconds = moment.microsecond // 1000
    return f"{moment:%Y-%m-%d %H:%M:%S}.{milliseconds:03d}"


def compute_stats(
    samples: Iterable[ScanSample],
    timestamp_ms: float,
    *,
    clock: Callable[[], datetime] = datetime.now,
) -> ScanStats:
    """Count valid samples and find the range extremes.

    Args:
        samples: Scan samples in any order.
        timestamp_ms: Rotation timestamp, milliseconds since the epoch.
        clock: Wall-clock source used when ``timestamp_ms`` is a placeholder.

    Returns:
        ``ScanStats``; an empty or all-invalid scan yields zero counts and
        ranges rather than an error.
    """
    ranges = [sample.range_mm for sample in samples if sample.is_valid]

    return ScanStats(
        valid_sample_count=len(ranges),
        max_range_mm=max(ranges, default=0),
        min_range_mm=min(ranges, default=0),
        formatted_timestamp=format_timestamp(timestamp_ms, clock),
    )
