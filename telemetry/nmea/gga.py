"""GGA sentence decoder.

GGA Sentence Format:
    $GNGGA,023634.00,4004.73871635,N,11614.19729418,E,1,28,0.7,61.0988,M,-8.4923,M,,*58
           |         |             | |              | | |  |   |       | |       |
           |         |             | |              | | |  |   |       | |       +-- DGPS info
           |         |             | |              | | |  |   |       | +-- Geoid height
           |         |             | |              | | |  |   +-------+-- Altitude above MSL
           |         |             | |              | | |  +-- HDOP
           |         |             | |              | | +-- Satellites
           |         |             | |              | +-- Fix quality
           |         |             | +--------------+-- Longitude + E/W
           |         +-------------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)

The decoder is permissive: a sentence of another type (or a failed checksum
when verification is requested) hands back the previous fix unchanged, and
missing trailing fields read as empty strings.
"""

from collections.abc import Iterable

from telemetry.nmea.checksum import split_checksum, validate_checksum
from telemetry.nmea.fields import (
    convert_to_decimal_degrees,
    field_at,
    format_utc_time,
)
from telemetry.nmea.types import FixStatus, GpsFix

DEFAULT_TALKER_IDS = ("GN",)

_LATITUDE_DEGREE_DIGITS = 2
_LONGITUDE_DEGREE_DIGITS = 3


def _is_gga(sentence_id: str, talker_ids: Iterable[str]) -> bool:
    """Check the first field against ``$<talker>GGA`` for each accepted talker.

    Example:
        "$GNGGA" with talker_ids=("GN",) -> True
        "$GPGGA" with talker_ids=("GN",) -> False
        "$GNGLL" -> False
    """
    return any(sentence_id == f"${talker}GGA" for talker in talker_ids)


def _build_fix(fields: list[str]) -> GpsFix:
    """Map GGA field indices onto a ``GpsFix``.

        fields[1]  -> time
        fields[2]  -> latitude (DDMM.MMMM), sign from fields[3]
        fields[3]  -> lat_dir
        fields[4]  -> longitude (DDDMM.MMMM), sign from fields[5]
        fields[5]  -> lon_dir
        fields[6]  -> status
        fields[7]  -> satellites_in_view
        fields[8]  -> horizontal_dilution
        fields[9]  -> altitude
        fields[11] -> geoid_height
    """
    lat_dir = field_at(fields, 3)
    lon_dir = field_at(fields, 5)

    return GpsFix(
        time=format_utc_time(field_at(fields, 1)),
        latitude=convert_to_decimal_degrees(
            field_at(fields, 2), _LATITUDE_DEGREE_DIGITS, lat_dir
        ),
        lat_dir=lat_dir,
        longitude=convert_to_decimal_degrees(
            field_at(fields, 4), _LONGITUDE_DEGREE_DIGITS, lon_dir
        ),
        lon_dir=lon_dir,
        status=FixStatus.from_field(field_at(fields, 6)),
        satellites_in_view=field_at(fields, 7),
        horizontal_dilution=field_at(fields, 8),
        altitude=field_at(fields, 9),
        geoid_height=field_at(fields, 11),
    )


def decode(
    raw: str,
    previous: GpsFix,
    *,
    talker_ids: Iterable[str] = DEFAULT_TALKER_IDS,
    verify_checksum: bool = False,
) -> GpsFix:
    """Decode a GGA sentence into a ``GpsFix``.

    Steps:
    1. Whitespace and the ``*hh`` checksum suffix are stripped
    2. Optionally, the checksum is verified
    3. The sentence id must be ``$<talker>GGA`` for an accepted talker
    4. Fields are mapped, with missing ones read as empty strings

    Args:
        raw: One NMEA sentence.
        previous: Fix to return when the sentence is rejected.
        talker_ids: Accepted talker prefixes. Defaults to "GN" only, so
            just ``$GNGGA`` is decoded.
        verify_checksum: Reject sentences whose checksum is missing or wrong.

    Returns:
        The decoded fix, or ``previous`` itself if the sentence is not an
        accepted GGA sentence. Never raises.

    Example:
        >>> fix = decode("$GNGGA,023634.00,4004.73871635,N,11614.19729418,E,1,28,0.7,61.0988,M,-8.4923,M,,*58", GpsFix())
        >>> fix.time, fix.longitude
        ('02:36:34', '116.236622')
        >>> decode("$GNGLL,4004.7387,N,11614.1973,E*6A", fix) is fix
        True
    """
    if verify_checksum and not validate_checksum(raw):
        return previous

    body, _ = split_checksum(raw)
    fields = body.split(",")

    if not _is_gga(fields[0], talker_ids):
        return previous

    return _build_fix(fields)
