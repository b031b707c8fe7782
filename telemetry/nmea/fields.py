"""NMEA field helpers.

Fields are comma separated and frequently empty. Decoded GGA values are kept
as strings so that "no data" (an empty string) stays distinct from a
measured zero; nothing in here substitutes a numeric default.
"""

import math

# Talker prefixes for multi-constellation receivers:
#   GP = GPS, GN = combined GNSS, GL = GLONASS,
#   GA = Galileo, GB = BeiDou, GQ = QZSS
VALID_TALKER_IDS = ("GP", "GN", "GL", "GA", "GB", "GQ")

_COORDINATE_DECIMALS = 6


def field_at(fields: list[str], index: int) -> str:
    """Return ``fields[index]``, or an empty string past the end of the list.

    Example:
        >>> field_at(["$GNGGA", "123519.00"], 5)
        ''
    """
    if index < len(fields):
        return fields[index]
    return ""


def format_utc_time(value: str) -> str:
    """Turn ``HHMMSS[.ss]`` into ``HH:MM:SS``.

    Fractional seconds are dropped. Fields shorter than six characters
    yield an empty string.

    Example:
        >>> format_utc_time("023634.00")
        '02:36:34'
    """
    if len(value) < 6:
        return ""
    return f"{value[0:2]}:{value[2:4]}:{value[4:6]}"


def convert_to_decimal_degrees(
    value: str,
    degree_digits: int,
    direction: str = "",
) -> str:
    """Convert an NMEA ``D..DMM.MMMM`` coordinate to decimal degrees.

    The first ``degree_digits`` characters are whole degrees (2 for
    latitude, 3 for longitude) and the remainder is decimal minutes:

        decimal_degrees = degrees + minutes / 60

    Southern and western hemispheres are reported as negative values.

    Args:
        value: Raw coordinate field (e.g. "4004.73871635").
        degree_digits: Width of the whole-degree prefix.
        direction: Hemisphere letter ("N", "S", "E" or "W"), may be empty.

    Returns:
        The coordinate formatted with six fractional digits, or an empty
        string if the field is empty or unparsable.

    Example:
        >>> convert_to_decimal_degrees("4004.73871635", 2, "N")
        '40.078979'
        >>> convert_to_decimal_degrees("11614.19729418", 3, "W")
        '-116.236622'
    """
    # float() also accepts digit separators like "1_0"
    if not value or "_" in value:
        return ""

    try:
        degrees = int(value[:degree_digits])
        minutes = float(value[degree_digits:])
    except ValueError:
        return ""

    decimal_degrees = degrees + minutes / 60.0
    if not math.isfinite(decimal_degrees):
        return ""
    if direction in ("S", "W"):
        decimal_degrees = -decimal_degrees

    return f"{decimal_degrees:.{_COORDINATE_DECIMALS}f}"
