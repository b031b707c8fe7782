"""NMEA 0183 GGA decoding."""

from telemetry.nmea.checksum import validate_checksum
from telemetry.nmea.gga import decode
from telemetry.nmea.types import FixStatus, GpsFix

__all__ = [
    "FixStatus",
    "GpsFix",
    "decode",
    "validate_checksum",
]
