"""Backend-neutral draw primitives.

Renderers emit these commands in paint order; an adapter for a concrete
surface (HTML canvas, a GUI toolkit, an image library) replays them. Every
coordinate is in surface pixels with the origin at the top-left corner.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Rgba:
    """Color with 0-255 integer channels and a 0-1 alpha."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def css(self) -> str:
        """Format as a CSS ``rgba()`` string, as canvas ``fillStyle`` expects."""
        return f"rgba({self.red}, {self.green}, {self.blue}, {self.alpha:g})"


@dataclass(frozen=True)
class Circle:
    """Full circle outline, or a filled disc when ``filled`` is set."""

    center_x: float
    center_y: float
    radius: float
    color: Rgba
    line_width: float = 1.0
    filled: bool = False


@dataclass(frozen=True)
class Line:
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    color: Rgba
    line_width: float = 1.0


@dataclass(frozen=True)
class Point:
    """Filled dot, used for scan returns."""

    x: float
    y: float
    radius: float
    color: Rgba


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: Rgba
    font_px: int = 12


DrawCommand = Circle | Line | Point | Text


def command_to_dict(command: DrawCommand) -> dict[str, Any]:
    """Serialize a command for JSON transport.

    The result carries a ``"kind"`` key (the lowercase class name) and the
    color as a CSS string.

    Example:
        >>> command_to_dict(Point(1.0, 2.0, 1.5, Rgba(255, 0, 0, 0.5)))
        {'kind': 'point', 'x': 1.0, 'y': 2.0, 'radius': 1.5, 'color': 'rgba(255, 0, 0, 0.5)'}
    """
    payload: dict[str, Any] = {"kind": type(command).__name__.lower()}
    payload.update(asdict(command))
    payload["color"] = command.color.css()
    return payload
