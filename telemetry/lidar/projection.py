"""Polar to Cartesian projection in the sensor frame.

No heading offset or GPS fusion is applied: x/y follow whatever angle
convention (zero bearing, rotation direction) the sensor reports.
"""

import math
from dataclasses import dataclass

_MILLIMETERS_PER_METER = 1000.0


@dataclass(frozen=True)
class CartesianPoint:
    """Planar position in meters relative to the sensor."""

    x: float
    y: float


def project(angle_deg: float, range_mm: float) -> CartesianPoint:
    """Convert a polar sample to meters in the sensor frame.

        x = range_m * cos(angle_rad)
        y = range_m * sin(angle_rad)

    Negative or out-of-range angles are accepted as is. Non-finite input
    gives a NaN point instead of raising.

    Example:
        >>> project(0, 1000)
        CartesianPoint(x=1.0, y=0.0)
    """
    radians = angle_deg * math.pi / 180.0
    range_m = range_mm / _MILLIMETERS_PER_METER

    if not math.isfinite(radians) or not math.isfinite(range_m):
        return CartesianPoint(math.nan, math.nan)

    return CartesianPoint(range_m * math.cos(radians), range_m * math.sin(radians))
