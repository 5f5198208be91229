"""QTimer-backed frame scheduler for gauge animations."""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Dict, Optional

from PyQt5.QtCore import QObject, QTimer

from speedgauge.core.animation import FrameScheduler

DEFAULT_FRAME_INTERVAL_MS = 16


class QtFrameScheduler(FrameScheduler):
    """Runs frame callbacks from QTimers owned by the GUI thread."""

    def __init__(self, interval_ms: int = DEFAULT_FRAME_INTERVAL_MS,
                 parent: Optional[QObject] = None) -> None:
        self.interval_ms = int(interval_ms)
        self._parent = parent
        self._timers: Dict[int, QTimer] = {}
        self._ids = itertools.count(1)
        self.logger = logging.getLogger("QtFrameScheduler")

    def schedule(self, callback: Callable[[], None]) -> int:
        token = next(self._ids)
        timer = QTimer(self._parent)
        timer.setInterval(self.interval_ms)
        timer.timeout.connect(callback)
        self._timers[token] = timer
        timer.start()
        return token

    def cancel(self, token: int) -> None:
        timer = self._timers.pop(token, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()

    def cancel_all(self) -> None:
        for token in list(self._timers):
            self.cancel(token)

    @property
    def active_count(self) -> int:
        return len(self._timers)
