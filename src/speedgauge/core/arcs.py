"""Value-track arcs: the default-colored base arc and user colored ranges.

Arc angles use the painter convention (0° at 3 o'clock, clockwise sweep), on
a ring concentric with the ticks. The 185°/190° bases are calibrated
constants of that ring and are independent from the 10° tick base.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from speedgauge.core.config import RANGE_MARGIN_FRACTION, ColoredRange, ColorLike, GaugeConfig, normalize_color
from speedgauge.core.errors import InvalidRange

logger = logging.getLogger("RangeArcs")

BASE_ARC_START = 185.0
BASE_ARC_SWEEP = 170.0
RANGE_ARC_START = 190.0
RANGE_ARC_SPAN = 160.0


@dataclass(frozen=True)
class ArcSegment:
    start_deg: float
    sweep_deg: float
    color: str


def clamp_range(begin: float, end: float, max_value: float):
    """Clamp range bounds to the dial span plus its 5° overshoot margin."""
    low = -RANGE_MARGIN_FRACTION * max_value
    high = max_value * (RANGE_MARGIN_FRACTION + 1.0)
    return max(begin, low), min(end, high)


def make_range(begin: float, end: float, color: ColorLike, max_value: float) -> ColoredRange:
    """Validate and clamp a colored range before it gets stored.

    Raises:
        InvalidRange: If ``begin >= end``.
    """
    begin, end = float(begin), float(end)
    if not begin < end:
        raise InvalidRange(f"incorrect range specified: begin={begin} end={end}")
    c_begin, c_end = clamp_range(begin, end, max_value)
    if (c_begin, c_end) != (begin, end):
        logger.debug("range %s..%s clamped to %s..%s", begin, end, c_begin, c_end)
    return ColoredRange(normalize_color(color), c_begin, c_end)


def composite_arcs(config: GaugeConfig, ranges: Iterable[ColoredRange]) -> List[ArcSegment]:
    """Base arc first, then ranges in insertion order (later ones paint over)."""
    arcs = [ArcSegment(BASE_ARC_START, BASE_ARC_SWEEP, config.default_color)]
    for rng in ranges:
        arcs.append(ArcSegment(
            RANGE_ARC_START + rng.begin / config.max_value * RANGE_ARC_SPAN,
            (rng.end - rng.begin) / config.max_value * RANGE_ARC_SPAN,
            rng.color,
        ))
    return arcs
