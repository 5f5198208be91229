import pytest

from speedgauge.core.config import GaugeConfig, GaugeStyle, integer_label
from speedgauge.core.geometry import resolve_oval
from speedgauge.core.ticks import label_placement, layout_ticks, major_angle_step, tick_segment


def _majors(ticks):
    return [t for t in ticks if t.is_major]


def test_default_major_ticks():
    majors = _majors(layout_ticks(GaugeConfig()))
    assert [t.progress for t in majors] == pytest.approx([0, 20, 40, 60, 80, 100])
    assert [t.angle_deg for t in majors] == pytest.approx([10, 42, 74, 106, 138, 170])
    assert major_angle_step(GaugeConfig()) == pytest.approx(32)


def test_minor_ticks_between_majors_only():
    ticks = layout_ticks(GaugeConfig(minor_ticks=1))
    minors = [t for t in ticks if not t.is_major]
    assert len(minors) == 5
    assert [t.angle_deg for t in minors] == pytest.approx([26, 58, 90, 122, 154])
    assert all(t.label is None for t in minors)
    assert max(t.angle_deg for t in ticks) == pytest.approx(170)


def test_ticks_are_ordered_by_angle():
    ticks = layout_ticks(GaugeConfig(minor_ticks=3))
    angles = [t.angle_deg for t in ticks]
    assert angles == sorted(angles)
    assert len(ticks) == 6 + 5 * 3


def test_no_minor_ticks():
    ticks = layout_ticks(GaugeConfig(minor_ticks=0))
    assert all(t.is_major for t in ticks)
    assert len(ticks) == 6


def test_uneven_step_stops_before_dial_end():
    majors = _majors(layout_ticks(GaugeConfig(max_value=100, major_step=30)))
    assert [t.progress for t in majors] == pytest.approx([0, 30, 60, 90])
    assert majors[-1].angle_deg == pytest.approx(154)


def test_step_larger_than_dial_gives_single_major():
    majors = _majors(layout_ticks(GaugeConfig(max_value=100, major_step=150, minor_ticks=0)))
    assert len(majors) == 1
    assert majors[0].angle_deg == pytest.approx(10)


def test_labels_follow_formatter():
    ticks = layout_ticks(GaugeConfig(label_formatter=integer_label))
    assert [t.label for t in _majors(ticks)] == ["0", "20", "40", "60", "80", "100"]
    assert all(t.label is None for t in layout_ticks(GaugeConfig()))


def test_layout_is_restartable():
    cfg = GaugeConfig(minor_ticks=2, label_formatter=integer_label)
    assert layout_ticks(cfg) == layout_ticks(cfg)


def test_tick_segments_lengths():
    style = GaugeStyle()
    oval = resolve_oval(400, 200, 1.0)
    major, minor = layout_ticks(GaugeConfig())[:2]
    seg = tick_segment(oval, major, style, "#b4b4b4")
    assert seg.length == pytest.approx(30)
    assert tick_segment(oval, minor, style, "#b4b4b4").length == pytest.approx(15)
    # 90° major tick points straight up
    up = layout_ticks(GaugeConfig(major_step=50, minor_ticks=0))[1]
    assert up.angle_deg == pytest.approx(90)
    seg = tick_segment(oval, up, style, "#b4b4b4")
    assert seg.x1 == pytest.approx(200)
    assert seg.y1 == pytest.approx(200 - 140 + 15)
    assert seg.y2 == pytest.approx(200 - 140 - 15)


def test_label_placement_outside_ring():
    style = GaugeStyle()
    oval = resolve_oval(400, 200, 1.0)
    first = layout_ticks(GaugeConfig(label_formatter=integer_label))[0]
    text = label_placement(oval, first, style, 14)
    r = 400 * 0.35 + 15 + 8
    assert text.text == "0"
    assert text.rotation_deg == pytest.approx(280)
    assert ((text.x - 200) ** 2 + (text.y - 200) ** 2) ** 0.5 == pytest.approx(r)
    assert text.x < 200 and text.y < 200
    assert label_placement(oval, layout_ticks(GaugeConfig())[0], style, 14) is None
