"""Scan renderer: turns a lidar scan into draw commands.

Layout, in paint order:
    1. Range rings at ``ring_radii_m`` with a "<r>m" label beside each
    2. Crosshair through the center (horizontal, then vertical)
    3. Origin marker for the robot and a short forward-heading tick
    4. One dot per visible scan return, colored by distance:
       near returns are warm (red), far returns cool (blue)
    5. Cardinal labels N, S, W, E

The sensor sits at the surface midpoint. Points are never clipped: a return
beyond ``max_display_range_m`` or outside the surface is simply not emitted.
"""

import math
from dataclasses import dataclass

from telemetry.draw import Circle, DrawCommand, Line, Point, Rgba, Text
from telemetry.lidar.projection import project
from telemetry.lidar.types import Scan, ScanSample, ScanStats

_RING_COLOR = Rgba(0, 200, 255, 0.15)
_RING_LINE_WIDTH = 0.8
_RING_LABEL_COLOR = Rgba(100, 255, 218, 0.7)
_RING_LABEL_FONT_PX = 12
_RING_LABEL_OFFSET_PX = 5

_CROSSHAIR_COLOR = Rgba(0, 200, 255, 0.3)

_ORIGIN_COLOR = Rgba(255, 69, 0, 0.9)
_ORIGIN_RADIUS_PX = 4
_HEADING_COLOR = Rgba(255, 69, 0, 0.8)
_HEADING_LENGTH_PX = 15
_HEADING_LINE_WIDTH = 2

_CARDINAL_COLOR = Rgba(100, 255, 218, 0.8)
_CARDINAL_FONT_PX = 14

_MAX_INTENSITY = 255.0
_MILLIMETERS_PER_METER = 1000.0


@dataclass(frozen=True)
class Surface:
    """Target surface geometry.

    Attributes:
        width_px: Surface width in pixels.
        height_px: Surface height in pixels.
        meters_per_pixel: Map scale; the default 0.02 is 50 px per meter.
        max_display_range_m: Returns farther than this are not drawn and
            set the far end of the color ramp.
        ring_radii_m: Radii of the range rings in meters.
    """

    width_px: float = 300
    height_px: float = 300
    meters_per_pixel: float = 0.02
    max_display_range_m: float = 100.0
    ring_radii_m: tuple[float, ...] = (1, 2, 3, 4, 5)

    def __post_init__(self) -> None:
        if self.meters_per_pixel <= 0:
            raise ValueError("meters_per_pixel must be positive")
        if self.max_display_range_m <= 0:
            raise ValueError("max_display_range_m must be positive")

    @property
    def center(self) -> tuple[float, float]:
        return self.width_px / 2, self.height_px / 2

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width_px and 0 <= y <= self.height_px


def _ring_commands(surface: Surface) -> list[DrawCommand]:
    center_x, center_y = surface.center
    commands: list[DrawCommand] = []
    for radius_m in surface.ring_radii_m:
        radius_px = radius_m / surface.meters_per_pixel
        commands.append(
            Circle(center_x, center_y, radius_px, _RING_COLOR, _RING_LINE_WIDTH)
        )
        commands.append(
            Text(
                center_x + radius_px + _RING_LABEL_OFFSET_PX,
                center_y - _RING_LABEL_OFFSET_PX,
                f"{radius_m:g}m",
                _RING_LABEL_COLOR,
                _RING_LABEL_FONT_PX,
            )
        )
    return commands


def _pose_commands(surface: Surface) -> list[DrawCommand]:
    center_x, center_y = surface.center
    return [
        Line(0, center_y, surface.width_px, center_y, _CROSSHAIR_COLOR),
        Line(center_x, 0, center_x, surface.height_px, _CROSSHAIR_COLOR),
        Circle(center_x, center_y, _ORIGIN_RADIUS_PX, _ORIGIN_COLOR, filled=True),
        Line(
            center_x,
            center_y,
            center_x,
            center_y - _HEADING_LENGTH_PX,
            _HEADING_COLOR,
            _HEADING_LINE_WIDTH,
        ),
    ]


def _cardinal_commands(surface: Surface) -> list[DrawCommand]:
    center_x, center_y = surface.center
    labels = (
        ("N", center_x - 6, 20),
        ("S", center_x - 6, surface.height_px - 10),
        ("W", 10, center_y + 6),
        ("E", surface.width_px - 20, center_y + 6),
    )
    return [
        Text(x, y, label, _CARDINAL_COLOR, _CARDINAL_FONT_PX)
        for label, x, y in labels
    ]


def sample_color(range_m: float, intensity: float, max_range_m: float) -> Rgba:
    """Color a return by distance (hue) and intensity (alpha).

        distance_ratio = min(range_m / max_range_m, 1)
        red   = 255 * (1 - distance_ratio)
        green = 100 + 100 * (1 - distance_ratio)
        blue  = 100 + 155 * distance_ratio
        alpha = 0.3 + 0.7 * min(intensity / 255, 1)
    """
    distance_ratio = min(range_m / max_range_m, 1.0)
    intensity_ratio = _intensity_ratio(intensity)
    return Rgba(
        math.floor(255 * (1 - distance_ratio)),
        math.floor(100 + 100 * (1 - distance_ratio)),
        math.floor(100 + 155 * distance_ratio),
        0.3 + 0.7 * intensity_ratio,
    )


def _intensity_ratio(intensity: float) -> float:
    return min(max(intensity, 0) / _MAX_INTENSITY, 1.0)


def _sample_command(sample: ScanSample, surface: Surface) -> Point | None:
    """Build the dot for one sample, or None if it must be culled."""
    if not sample.is_valid:
        return None

    range_m = sample.range_mm / _MILLIMETERS_PER_METER
    if range_m > surface.max_display_range_m:
        return None

    position = project(sample.angle_deg, sample.range_mm)
    center_x, center_y = surface.center
    x = center_x + position.x / surface.meters_per_pixel
    y = center_y + position.y / surface.meters_per_pixel
    if not surface.contains(x, y):
        return None

    return Point(
        x,
        y,
        1 + 2 * _intensity_ratio(sample.intensity),
        sample_color(range_m, sample.intensity, surface.max_display_range_m),
    )


def render(scan: Scan, stats: ScanStats, surface: Surface) -> list[DrawCommand]:
    """Render a scan onto ``surface`` as an ordered list of draw commands.

    Args:
        scan: The scan to draw. Sample order is preserved in the output.
        stats: Statistics for ``scan``; a scan with no valid samples skips
            the point pass.
        surface: Target geometry and scale.

    Returns:
        Draw commands in paint order. The same inputs always produce an
        equal list.
    """
    commands = _ring_commands(surface)
    commands.extend(_pose_commands(surface))

    if stats.valid_sample_count:
        for sample in scan.samples:
            point = _sample_command(sample, surface)
            if point is not None:
                commands.append(point)

    commands.extend(_cardinal_commands(surface))
    return commands
