"""Speed gauge model and renderer (toolkit independent)."""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Callable, List, Optional, Tuple

from speedgauge.core.animation import AnimationDriver, AnimationHandle, FrameScheduler, monotonic_ms
from speedgauge.core.arcs import composite_arcs, make_range
from speedgauge.core.config import (
    DEFAULT_ANIMATION_DELAY_MS,
    DEFAULT_ANIMATION_DURATION_MS,
    ColoredRange,
    ColorLike,
    GaugeConfig,
    GaugeStyle,
    LabelFormatter,
)
from speedgauge.core.errors import InvalidConfiguration
from speedgauge.core.geometry import (
    INNER_RING_FACTOR,
    OUTER_RING_FACTOR,
    PIVOT_FACTOR,
    VALUE_TRACK_FACTOR,
    Padding,
    drawable_area,
    measure,
    resolve_oval,
)
from speedgauge.core.needle import pivot_cap, project_needle
from speedgauge.core.primitives import ArcPrimitive, ImagePrimitive, Primitive
from speedgauge.core.ticks import label_placement, layout_ticks, tick_segment

MASK_SCALE = 1.1


def check_value(value: float) -> None:
    """Raise InvalidConfiguration for a negative or non finite gauge value."""
    if not math.isfinite(value) or value < 0:
        raise InvalidConfiguration(f"negative or non finite value specified as a value: {value}")


def check_animated_target(target: float) -> None:
    if not math.isfinite(target) or not target > 0:
        raise InvalidConfiguration(f"non positive or non finite animation target: {target}")


def _check_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or not value > 0:
        raise InvalidConfiguration(f"non positive or non finite value specified as {name}: {value}")


class Gauge:
    """Holds the gauge state and maps it to drawing primitives.

    Every setter validates its input and then notifies the repaint
    listeners. Not thread-safe: use it from the thread that renders it.
    """

    def __init__(self, config: Optional[GaugeConfig] = None,
                 style: Optional[GaugeStyle] = None,
                 scheduler: Optional[FrameScheduler] = None,
                 clock: Callable[[], float] = monotonic_ms) -> None:
        self.logger = logging.getLogger("Gauge")
        self._config = config or GaugeConfig()
        self._style = style or GaugeStyle()
        self._value = 0.0
        self._ranges: List[ColoredRange] = []
        self._listeners: List[Callable[[], None]] = []
        self._scheduler = scheduler
        self._animator: Optional[AnimationDriver] = None
        if scheduler is not None:
            self._animator = AnimationDriver(self._apply_animated_value, scheduler, clock)

    # ----------------------------- listeners ----------------------------------
    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _invalidate(self) -> None:
        for cb in list(self._listeners):
            cb()

    # ----------------------------- properties ---------------------------------
    @property
    def config(self) -> GaugeConfig:
        return self._config

    @property
    def style(self) -> GaugeStyle:
        return self._style

    @property
    def value(self) -> float:
        return self._value

    @property
    def max_value(self) -> float:
        return self._config.max_value

    @property
    def ranges(self) -> Tuple[ColoredRange, ...]:
        return tuple(self._ranges)

    @property
    def animator(self) -> Optional[AnimationDriver]:
        return self._animator

    # ----------------------------- setters ------------------------------------
    def _replace_config(self, **changes) -> None:
        self._config = dataclasses.replace(self._config, **changes)
        self._invalidate()

    def set_max_value(self, max_value: float) -> None:
        try:
            _check_positive("max value", max_value)
        except InvalidConfiguration:
            self.logger.debug("rejected max value %s", max_value)
            raise
        self._value = min(self._value, float(max_value))
        self._replace_config(max_value=max_value)

    def set_value(self, value: float) -> None:
        try:
            check_value(value)
        except InvalidConfiguration:
            self.logger.debug("rejected value %s", value)
            raise
        self._value = min(float(value), self._config.max_value)
        self._invalidate()

    def set_major_step(self, step: float) -> None:
        try:
            _check_positive("major tick step", step)
        except InvalidConfiguration:
            self.logger.debug("rejected major step %s", step)
            raise
        self._replace_config(major_step=step)

    def set_minor_ticks(self, count: int) -> None:
        if count < 0:
            raise InvalidConfiguration(f"negative minor tick count: {count}")
        self._replace_config(minor_ticks=int(count))

    def set_default_color(self, color: ColorLike) -> None:
        self._replace_config(default_color=color)

    def set_label_text_size(self, size: int) -> None:
        self._replace_config(label_text_size=size)

    def set_label_formatter(self, formatter: Optional[LabelFormatter]) -> None:
        self._replace_config(label_formatter=formatter)

    def set_style(self, style: GaugeStyle) -> None:
        self._style = style
        self._invalidate()

    def add_colored_range(self, begin: float, end: float, color: ColorLike) -> ColoredRange:
        rng = make_range(begin, end, color, self._config.max_value)
        self._ranges.append(rng)
        self._invalidate()
        return rng

    def clear_colored_ranges(self) -> None:
        self._ranges.clear()
        self._invalidate()

    # ----------------------------- animation ----------------------------------
    def set_value_animated(self, target: float,
                           duration_ms: float = DEFAULT_ANIMATION_DURATION_MS,
                           start_delay_ms: float = DEFAULT_ANIMATION_DELAY_MS) -> AnimationHandle:
        """Animate the value from its current position to ``target``.

        Raises:
            InvalidConfiguration: If ``target`` is not positive or the timing
                is negative.
            RuntimeError: If the gauge was built without a frame scheduler.
        """
        try:
            check_animated_target(target)
        except InvalidConfiguration:
            self.logger.debug("rejected animated target %s", target)
            raise
        if self._animator is None:
            raise RuntimeError("Gauge has no frame scheduler; animations are unavailable")
        target = min(float(target), self._config.max_value)
        return self._animator.animate_to(self._value, target, duration_ms, start_delay_ms)

    def _apply_animated_value(self, value: float) -> None:
        self._value = max(0.0, min(float(value), self._config.max_value))
        self._invalidate()

    # ----------------------------- layout -------------------------------------
    @staticmethod
    def measure(width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
        return measure(width, height)

    def render(self, width: float, height: float, padding: Padding = Padding()) -> List[Primitive]:
        """Return the primitives of one frame in paint order."""
        cfg, style = self._config, self._style
        w, h = drawable_area(width, height, padding)

        def oval_at(factor: float):
            return resolve_oval(w, h, factor, padding.left, padding.top)

        oval = oval_at(OUTER_RING_FACTOR)
        inner = oval_at(INNER_RING_FACTOR)
        track = oval_at(VALUE_TRACK_FACTOR)
        pivot = oval_at(PIVOT_FACTOR)

        out: List[Primitive] = [
            ArcPrimitive(oval.rect(), 180.0, 180.0, style.background_color,
                         filled=True, layer="background"),
            ArcPrimitive(inner.rect(), 180.0, 180.0, style.inner_color,
                         filled=True, layer="inner"),
        ]

        mask_w = oval.width * MASK_SCALE
        out.append(ImagePrimitive((oval.center_x - mask_w / 2.0, oval.center_y - mask_w / 2.0,
                                   mask_w, mask_w / 2.0), style.mask_image))

        for tick in layout_ticks(cfg):
            out.append(tick_segment(oval, tick, style, cfg.default_color))
            text = label_placement(oval, tick, style, cfg.label_text_size)
            if text is not None:
                out.append(text)

        for arc in composite_arcs(cfg, self._ranges):
            out.append(ArcPrimitive(track.rect(), arc.start_deg, arc.sweep_deg, arc.color,
                                    stroke_width=style.range_width, layer="range"))

        out.append(project_needle(self._value, cfg.max_value, oval, pivot, style))
        out.append(pivot_cap(pivot, style))
        return out
