import pytest

from speedgauge.core.animation import FrameScheduler


class ManualScheduler(FrameScheduler):
    """Frame scheduler driven by the test through ``frame()``."""

    def __init__(self):
        self.callbacks = {}
        self._next = 0

    def schedule(self, callback):
        self._next += 1
        self.callbacks[self._next] = callback
        return self._next

    def cancel(self, token):
        self.callbacks.pop(token, None)

    def frame(self):
        for cb in list(self.callbacks.values()):
            cb()


class FakeClock:
    def __init__(self, now_ms=0.0):
        self.now_ms = now_ms

    def __call__(self):
        return self.now_ms

    def advance(self, ms):
        self.now_ms += ms


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock(1000.0)
