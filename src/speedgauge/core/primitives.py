"""Drawing primitives emitted by the gauge layout.

Angles follow the painter convention of the drawing surface: degrees,
0° at 3 o'clock, positive sweeps going clockwise on screen (y grows down).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

Rect = Tuple[float, float, float, float]  # left, top, width, height


@dataclass(frozen=True)
class ArcPrimitive:
    rect: Rect
    start_deg: float
    sweep_deg: float
    color: str
    filled: bool = False
    stroke_width: float = 0.0
    layer: str = ""


@dataclass(frozen=True)
class LinePrimitive:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    stroke_width: float = 1.0
    layer: str = ""

    @property
    def length(self) -> float:
        return ((self.x2 - self.x1) ** 2 + (self.y2 - self.y1) ** 2) ** 0.5


@dataclass(frozen=True)
class TextPrimitive:
    """Text centered horizontally on (x, y), baseline rotated by ``rotation_deg``
    clockwise around the anchor."""
    x: float
    y: float
    text: str
    rotation_deg: float
    color: str
    size: float
    bold: bool = True
    layer: str = "label"


@dataclass(frozen=True)
class ImagePrimitive:
    """Placement of the center mask image; the surface decides its pixels."""
    rect: Rect
    source: Optional[str] = None
    layer: str = "mask"


Primitive = Union[ArcPrimitive, LinePrimitive, TextPrimitive, ImagePrimitive]
