"""Recorded telemetry used across the test suite."""

from telemetry.lidar import Scan
from telemetry.sources import scan_from_dict

GGA_SENTENCE = (
    "$GNGGA,023634.00,4004.73871635,N,11614.19729418,E,1,28,0.7,"
    "61.0988,M,-8.4923,M,,*58"
)

# Checksum verified: XOR over the body is 0x7F.
GGA_CHECKSUMMED = "$GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F"

GLL_SENTENCE = "$GNGLL,4004.7387,N,11614.1973,E,023634.00,A,A*6A"

# One rotation from a 16-sample test lidar. "timestamp" is a placeholder,
# not a real epoch, as the simulator sends it.
SCAN_PAYLOAD = {
    "N": 16,
    "rpm": 0,
    "timestamp": 12345,
    "points": [
        {"angle": 0.0, "distance_mm": 0, "intensity": 0},
        {"angle": 22.5, "distance_mm": 43520, "intensity": 85},
        {"angle": 45.0, "distance_mm": 257, "intensity": 153},
        {"angle": 67.5, "distance_mm": 39343, "intensity": 175},
        {"angle": 90.0, "distance_mm": 21675, "intensity": 0},
        {"angle": 112.5, "distance_mm": 43520, "intensity": 85},
        {"angle": 135.0, "distance_mm": 10240, "intensity": 217},
        {"angle": 157.5, "distance_mm": 8111, "intensity": 5},
        {"angle": 180.0, "distance_mm": 37172, "intensity": 0},
        {"angle": 202.5, "distance_mm": 0, "intensity": 0},
        {"angle": 225.0, "distance_mm": 15000, "intensity": 100},
        {"angle": 247.5, "distance_mm": 20000, "intensity": 120},
        {"angle": 270.0, "distance_mm": 25000, "intensity": 140},
        {"angle": 292.5, "distance_mm": 30000, "intensity": 160},
        {"angle": 315.0, "distance_mm": 35000, "intensity": 180},
        {"angle": 337.5, "distance_mm": 40000, "intensity": 200},
    ],
    "crc": 0,
}


def make_scan() -> Scan:
    return scan_from_dict(SCAN_PAYLOAD)
