"""Tick layout: major/minor graduation angles, labels and their segments.

Tick angles are in dial degrees: 0° on the right horizon, growing
counter-clockwise through the top. The 160° value span starts at 10° and
ends at 170°, leaving a 10° blank margin at each end of the half circle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from speedgauge.core.config import GaugeConfig, GaugeStyle
from speedgauge.core.geometry import Oval
from speedgauge.core.primitives import LinePrimitive, TextPrimitive

START_ANGLE = 10.0
END_ANGLE = 170.0
AVAILABLE_ANGLE = 160.0
TICK_RING_RATIO = 0.35

# absorbs float drift accumulated on the major step
_ANGLE_EPS = 1e-9


@dataclass(frozen=True)
class Tick:
    angle_deg: float
    progress: float
    is_major: bool
    label: Optional[str] = None


def major_angle_step(config: GaugeConfig) -> float:
    return config.major_step / config.max_value * AVAILABLE_ANGLE


def dial_point(oval: Oval, angle_deg: float, r: float):
    """Point at distance ``r`` from the oval center along a dial angle."""
    return (oval.center_x + math.cos((180.0 - angle_deg) / 180.0 * math.pi) * r,
            oval.center_y - math.sin(angle_deg / 180.0 * math.pi) * r)


def layout_ticks(config: GaugeConfig) -> List[Tick]:
    """Return the ordered ticks of the dial, majors followed by their minors."""
    major_step = major_angle_step(config)
    minor_step = major_step / (1 + config.minor_ticks)
    limit = END_ANGLE + minor_step / 2.0

    ticks: List[Tick] = []
    angle = START_ANGLE
    progress = 0.0
    while angle <= END_ANGLE + _ANGLE_EPS:
        label = config.label_formatter(progress, config.max_value) if config.has_labels else None
        ticks.append(Tick(angle, progress, True, label))

        for i in range(1, config.minor_ticks + 1):
            minor = angle + i * minor_step
            if minor >= limit - _ANGLE_EPS:
                break
            ticks.append(Tick(minor, progress + i * config.major_step / (1 + config.minor_ticks), False))

        angle += major_step
        progress += config.major_step
    return ticks


def tick_ring_radius(oval: Oval) -> float:
    return oval.width * TICK_RING_RATIO


def tick_segment(oval: Oval, tick: Tick, style: GaugeStyle, color: str) -> LinePrimitive:
    """Line segment of a tick; majors straddle the tick ring, minors sit outside it."""
    r = tick_ring_radius(oval)
    half = style.major_tick_length / 2.0
    if tick.is_major:
        r1, r2 = r - half, r + half
    else:
        r1, r2 = r, r + style.minor_tick_length
    x1, y1 = dial_point(oval, tick.angle_deg, r1)
    x2, y2 = dial_point(oval, tick.angle_deg, r2)
    return LinePrimitive(x1, y1, x2, y2, color, style.tick_width,
                         layer="major_tick" if tick.is_major else "minor_tick")


def label_placement(oval: Oval, tick: Tick, style: GaugeStyle, size: float) -> Optional[TextPrimitive]:
    """Anchor a major tick label just outside the tick ring.

    The baseline is turned by ``180 + angle`` (pointing along the radius),
    then by another 90° so the text runs along the tangent.
    """
    if tick.label is None:
        return None
    r = tick_ring_radius(oval) + style.major_tick_length / 2.0 + style.label_gap
    x, y = dial_point(oval, tick.angle_deg, r)
    rotation = (180.0 + tick.angle_deg + 90.0) % 360.0
    return TextPrimitive(x, y, tick.label, rotation, style.label_color, size)
