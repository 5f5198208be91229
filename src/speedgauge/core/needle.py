"""Needle projection."""

from __future__ import annotations

from speedgauge.core.config import GaugeStyle
from speedgauge.core.geometry import Oval
from speedgauge.core.primitives import ArcPrimitive, LinePrimitive
from speedgauge.core.ticks import AVAILABLE_ANGLE, START_ANGLE, TICK_RING_RATIO, dial_point

NEEDLE_OVERHANG = 10.0


def needle_angle(value: float, max_value: float) -> float:
    return START_ANGLE + value / max_value * AVAILABLE_ANGLE


def project_needle(value: float, max_value: float, oval: Oval, pivot_oval: Oval,
                   style: GaugeStyle = GaugeStyle()) -> LinePrimitive:
    """Needle segment from the pivot cap edge to just past the tick ring."""
    angle = needle_angle(value, max_value)
    x1, y1 = dial_point(oval, angle, pivot_oval.width * 0.5)
    x2, y2 = dial_point(oval, angle, oval.width * TICK_RING_RATIO + NEEDLE_OVERHANG)
    return LinePrimitive(x1, y1, x2, y2, style.needle_color, style.needle_width, layer="needle")


def pivot_cap(pivot_oval: Oval, style: GaugeStyle = GaugeStyle()) -> ArcPrimitive:
    """Half-disc drawn over the pivot in the background color."""
    return ArcPrimitive(pivot_oval.rect(), 180.0, 180.0, style.background_color,
                        filled=True, layer="pivot")
