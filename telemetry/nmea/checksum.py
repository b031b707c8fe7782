"""NMEA checksum handling.

An NMEA 0183 sentence carries an optional two-digit hexadecimal checksum
after a '*'. The value is the XOR of every character between the leading
'$' and the '*' (both exclusive).

Example:
    $GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F
     ^------------------- XOR over this span -------------------^ ^^
"""


def split_checksum(sentence: str) -> tuple[str, str | None]:
    """Separate a sentence body from its checksum suffix.

    Args:
        sentence: Raw sentence, possibly with trailing whitespace.

    Returns:
        ``(body, checksum)`` where ``body`` still starts with '$' and
        ``checksum`` is the text after '*', or ``None`` when no '*' exists.

    Example:
        >>> split_checksum("$GNGGA,123519*7F\\r\\n")
        ('$GNGGA,123519', '7F')
    """
    sentence = sentence.strip()
    body, star, checksum = sentence.partition("*")
    if not star:
        return body, None
    return body, checksum


def calculate_checksum(content: str) -> int:
    """XOR the character codes of ``content`` (the text between '$' and '*')."""
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def validate_checksum(sentence: str) -> bool:
    """Check that a sentence's trailing checksum matches its content.

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.

    Returns:
        True if the checksum is present and correct. False when the '$'
        or '*' delimiter is missing, the checksum is not two hex digits,
        or it does not match.
    """
    body, checksum = split_checksum(sentence)
    if not body.startswith("$") or checksum is None or len(checksum) != 2:
        return False

    try:
        return calculate_checksum(body[1:]) == int(checksum, 16)
    except ValueError:
        return False
