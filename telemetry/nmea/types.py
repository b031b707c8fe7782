"""Decoded GNSS fix types.

Design decisions:
    1. String fields: every value is kept as the text that will be shown or
       forwarded to a map widget. An empty string means the field was
       absent or unparsable; a literal "0" means the receiver reported zero.

    2. Immutable records: a ``GpsFix`` is rebuilt on every update cycle and
       the previous one is handed back unchanged when a sentence is
       rejected, so sharing instances between callers is safe.
"""

import math
from dataclasses import dataclass
from enum import Enum


class FixStatus(str, Enum):
    """Tri-state fix indicator derived from the GGA fix-quality field."""

    FIX = "fix"
    NO_FIX = "no-fix"
    UNKNOWN = "unknown"

    @classmethod
    def from_field(cls, value: str) -> "FixStatus":
        """Map the raw GGA quality field: "1" -> FIX, "0" -> NO_FIX."""
        if value == "1":
            return cls.FIX
        if value == "0":
            return cls.NO_FIX
        return cls.UNKNOWN


@dataclass(frozen=True)
class GpsFix:
    """Decoded GGA (Global Positioning System Fix Data) sentence.

    Attributes:
        time: UTC time of day as ``HH:MM:SS``, or "" if unparsable.

        latitude: Signed decimal degrees with six fractional digits,
            negative in the southern hemisphere. "" if absent.

        lat_dir: Raw hemisphere letter ("N"/"S").

        longitude: Signed decimal degrees with six fractional digits,
            negative in the western hemisphere. "" if absent.

        lon_dir: Raw hemisphere letter ("E"/"W").

        status: ``FixStatus`` derived from the fix-quality field.

        satellites_in_view: Raw satellite count field.

        horizontal_dilution: Raw HDOP field. Lower is better.

        altitude: Raw altitude above mean sea level, meters.

        geoid_height: Raw geoid separation, meters.

    Example:
        >>> fix = decode("$GNGGA,023634.00,4004.73871635,N,11614.19729418,E,1,28,0.7,61.0988,M,-8.4923,M,,*58", GpsFix())
        >>> fix.latitude, fix.status
        ('40.078979', <FixStatus.FIX: 'fix'>)
    """

    time: str = ""
    latitude: str = ""
    lat_dir: str = ""
    longitude: str = ""
    lon_dir: str = ""
    status: FixStatus = FixStatus.UNKNOWN
    satellites_in_view: str = ""
    horizontal_dilution: str = ""
    altitude: str = ""
    geoid_height: str = ""

    def coordinates(self) -> tuple[float, float] | None:
        """Return ``(latitude, longitude)`` for a map marker.

        ``None`` when either coordinate is empty, non-finite or exactly zero,
        since a 0/0 position is what an unlocked receiver tends to report.
        """
        try:
            latitude = float(self.latitude)
            longitude = float(self.longitude)
        except ValueError:
            return None
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return None
        if not latitude or not longitude:
            return None
        return latitude, longitude
