import math

import pytest

from speedgauge.core.geometry import resolve_oval
from speedgauge.core.needle import needle_angle, pivot_cap, project_needle


@pytest.mark.parametrize("value", [0, 12.5, 50, 99.9, 100])
def test_needle_angle_within_dial(value):
    angle = needle_angle(value, 100)
    assert angle == pytest.approx(10 + value / 100 * 160)
    assert 10 <= angle <= 170


def test_needle_endpoints():
    oval = resolve_oval(400, 200, 1.0)
    pivot = resolve_oval(400, 200, 0.1)
    seg = project_needle(50, 100, oval, pivot)
    # value 50 of 100 points straight up
    assert seg.x1 == pytest.approx(200)
    assert seg.y1 == pytest.approx(200 - 20)
    assert seg.y2 == pytest.approx(200 - (400 * 0.35 + 10))


def test_needle_at_zero_points_left():
    oval = resolve_oval(400, 200, 1.0)
    pivot = resolve_oval(400, 200, 0.1)
    seg = project_needle(0, 100, oval, pivot)
    r = 400 * 0.35 + 10
    assert seg.x2 == pytest.approx(200 + math.cos(math.radians(170)) * r)
    assert seg.y2 == pytest.approx(200 - math.sin(math.radians(10)) * r)
    assert seg.x2 < 200


def test_pivot_cap_is_half_disc():
    pivot = resolve_oval(400, 200, 0.1)
    cap = pivot_cap(pivot)
    assert (cap.start_deg, cap.sweep_deg, cap.filled) == (180.0, 180.0, True)
    assert cap.rect == pytest.approx((180, 180, 40, 40))
