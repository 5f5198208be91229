"""Bounding-circle geometry of the half-disc dial and host size negotiation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from speedgauge.core.primitives import Rect

# Scale factors of the concentric layers
OUTER_RING_FACTOR = 1.0
INNER_RING_FACTOR = 0.9
VALUE_TRACK_FACTOR = 0.7
PIVOT_FACTOR = 0.1


class Padding(NamedTuple):
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Oval:
    """Bounding circle of a gauge layer (named after the painter's oval rect)."""

    center_x: float
    center_y: float
    radius: float

    @property
    def width(self) -> float:
        return 2.0 * self.radius

    height = width

    @property
    def left(self) -> float:
        return self.center_x - self.radius

    @property
    def top(self) -> float:
        return self.center_y - self.radius

    @property
    def right(self) -> float:
        return self.center_x + self.radius

    @property
    def bottom(self) -> float:
        return self.center_y + self.radius

    def rect(self) -> Rect:
        return (self.left, self.top, self.width, self.width)


def drawable_area(width: float, height: float, padding: Padding = Padding()) -> Tuple[float, float]:
    """Return the (width, height) left for drawing once padding is removed."""
    return (max(0.0, width - padding.left - padding.right),
            max(0.0, height - padding.top - padding.bottom))


def resolve_oval(draw_width: float, draw_height: float, scale_factor: float,
                 padding_left: float = 0.0, padding_top: float = 0.0) -> Oval:
    """Fit the dial circle in the drawable rect.

    Only the top half of the circle is visible, so the available height
    counts twice. The equator of the circle sits on the bottom edge of the
    drawable area, i.e. the center y equals ``padding_top + draw_height``.
    """
    if draw_height * 2 >= draw_width:
        diameter = draw_width * scale_factor
    else:
        diameter = draw_height * 2.0 * scale_factor
    left = (draw_width - diameter) / 2.0 + padding_left
    top = (draw_height * 2.0 - diameter) / 2.0 + padding_top
    radius = diameter / 2.0
    return Oval(left + radius, top + radius, radius)


def measure(width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
    """Negotiate the gauge size from host constraints; ``None`` is unconstrained.

    The preferred aspect ratio is 2:1 (width:height).
    """
    if width is not None and width >= 0 and height is not None and height >= 0:
        w = min(height, width)
        return w, w // 2
    if width is not None and width >= 0:
        return width, width // 2
    if height is not None and height >= 0:
        return height * 2, height
    return 0, 0
