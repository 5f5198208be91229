"""Time-based value interpolation driven by a frame scheduler."""

from __future__ import annotations

import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from speedgauge.core.errors import InvalidConfiguration

Interpolator = Callable[[float, float, float], float]


def interpolate(start: float, end: float, fraction: float) -> float:
    """Linear interpolation between ``start`` and ``end``."""
    return start + fraction * (end - start)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def check_timing(duration_ms: float, start_delay_ms: float) -> None:
    """Raise InvalidConfiguration unless both timings are finite and non-negative."""
    for t in (duration_ms, start_delay_ms):
        if not math.isfinite(t) or t < 0:
            raise InvalidConfiguration(
                f"invalid animation timing: duration={duration_ms} delay={start_delay_ms}")


class FrameScheduler(ABC):
    """Runs callbacks once per display frame until they are cancelled.

    Implementations must invoke callbacks on the thread that owns the gauge
    state (the GUI thread for the Qt front end).
    """

    @abstractmethod
    def schedule(self, callback: Callable[[], None]) -> Any:
        """Register ``callback`` for every frame; return a cancellation token."""

    @abstractmethod
    def cancel(self, token: Any) -> None:
        """Stop calling the callback registered under ``token``."""


class AnimationStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    FINISHED = "finished"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class AnimationTask:
    start_value: float
    target_value: float
    duration_ms: float
    start_delay_ms: float
    start_time_ms: float

    def fraction(self, now_ms: float) -> float:
        """Elapsed fraction of the duration, 0 during the start delay."""
        elapsed = now_ms - self.start_time_ms - self.start_delay_ms
        if elapsed < 0:
            return 0.0
        if self.duration_ms <= 0:
            return 1.0
        return min(1.0, elapsed / self.duration_ms)

    def started(self, now_ms: float) -> bool:
        return now_ms - self.start_time_ms >= self.start_delay_ms

    def value_at(self, now_ms: float, interpolator: Interpolator = interpolate) -> float:
        f = self.fraction(now_ms)
        if f >= 1.0:
            return self.target_value
        return interpolator(self.start_value, self.target_value, f)


class AnimationHandle:
    """Handle on a scheduled animation; ``cancel()`` stops it where it is."""

    def __init__(self, driver: "AnimationDriver", task: AnimationTask) -> None:
        self.task = task
        self.status = AnimationStatus.PENDING
        self.token: Any = None
        self.last_error: Optional[str] = None
        self._driver = driver

    @property
    def is_active(self) -> bool:
        return self.status in (AnimationStatus.PENDING, AnimationStatus.RUNNING)

    def cancel(self) -> None:
        self._driver._stop(self, AnimationStatus.CANCELLED)


class AnimationDriver:
    """Pushes interpolated values into ``apply`` on every scheduler frame.

    Only one animation runs at a time: a new ``animate_to`` cancels the one
    in flight, leaving the value where the last frame put it.
    """

    def __init__(self, apply: Callable[[float], None], scheduler: FrameScheduler,
                 clock: Callable[[], float] = monotonic_ms,
                 interpolator: Interpolator = interpolate) -> None:
        self._apply = apply
        self._scheduler = scheduler
        self._clock = clock
        self._interpolator = interpolator
        self._active: Optional[AnimationHandle] = None
        self.logger = logging.getLogger("AnimationDriver")

    @property
    def active(self) -> Optional[AnimationHandle]:
        return self._active

    def animate_to(self, current_value: float, target_value: float,
                   duration_ms: float, start_delay_ms: float = 0.0) -> AnimationHandle:
        """Start animating from ``current_value`` to ``target_value``.

        Raises:
            InvalidConfiguration: If the duration or the delay is negative or not finite.
        """
        check_timing(duration_ms, start_delay_ms)
        if self._active is not None:
            self.logger.debug("superseding animation towards %s", self._active.task.target_value)
            self._active.cancel()

        task = AnimationTask(float(current_value), float(target_value),
                             float(duration_ms), float(start_delay_ms), self._clock())
        handle = AnimationHandle(self, task)
        self._active = handle
        handle.token = self._scheduler.schedule(lambda: self._on_frame(handle))
        self.logger.debug("animation %s -> %s over %s ms (delay %s ms)",
                          task.start_value, task.target_value, duration_ms, start_delay_ms)
        return handle

    def cancel(self) -> None:
        if self._active is not None:
            self._active.cancel()

    def _on_frame(self, handle: AnimationHandle) -> None:
        if not handle.is_active:
            return
        now = self._clock()
        task = handle.task
        if not task.started(now):
            return
        handle.status = AnimationStatus.RUNNING
        try:
            self._apply(task.value_at(now, self._interpolator))
        except Exception as exc:
            handle.last_error = str(exc)
            self.logger.exception("animation towards %s aborted", task.target_value)
            self._stop(handle, AnimationStatus.FAILED)
            return
        if task.fraction(now) >= 1.0:
            self._stop(handle, AnimationStatus.FINISHED)

    def _stop(self, handle: AnimationHandle, status: AnimationStatus) -> None:
        if not handle.is_active:
            return
        handle.status = status
        if handle.token is not None:
            self._scheduler.cancel(handle.token)
        if self._active is handle:
            self._active = None
        self.logger.debug("animation towards %s %s", handle.task.target_value, status.value)
