import pytest

from speedgauge.core.config import GaugeConfig, integer_label
from speedgauge.core.errors import InvalidConfiguration, InvalidRange
from speedgauge.core.gauge import Gauge
from speedgauge.core.geometry import Padding
from speedgauge.core.primitives import ArcPrimitive, ImagePrimitive, LinePrimitive, TextPrimitive


def test_set_value_clamps_to_max():
    g = Gauge()
    g.set_value(150)
    assert g.value == 100


def test_set_value_rejects_negative():
    g = Gauge()
    g.set_value(30)
    with pytest.raises(InvalidConfiguration):
        g.set_value(-1)
    assert g.value == 30


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_set_value_rejects_non_finite(bad):
    g = Gauge()
    g.set_value(30)
    with pytest.raises(InvalidConfiguration):
        g.set_value(bad)
    assert g.value == 30


@pytest.mark.parametrize("field", ["max_value", "major_step"])
def test_config_rejects_non_finite(field):
    with pytest.raises(InvalidConfiguration):
        GaugeConfig(**{field: float("inf")})


@pytest.mark.parametrize("setter", ["set_max_value", "set_major_step"])
@pytest.mark.parametrize("bad", [0, -5, float("nan"), float("inf")])
def test_non_positive_or_non_finite_config_rejected(setter, bad):
    g = Gauge()
    with pytest.raises(InvalidConfiguration):
        getattr(g, setter)(bad)
    assert g.config == GaugeConfig()


def test_lowering_max_value_clamps_current_value():
    g = Gauge()
    g.set_value(80)
    g.set_max_value(50)
    assert g.value == 50


def test_setters_notify_listeners():
    g = Gauge()
    calls = []
    g.add_listener(lambda: calls.append(1))
    g.set_value(10)
    g.set_minor_ticks(0)
    g.set_default_color((255, 0, 0))
    g.set_label_text_size(18)
    g.set_label_formatter(integer_label)
    g.add_colored_range(0, 10, "#00ff00")
    g.clear_colored_ranges()
    assert len(calls) == 7
    assert g.config.default_color == "#ff0000"
    assert g.config.minor_ticks == 0


def test_add_colored_range_rejects_and_keeps_ranges():
    g = Gauge()
    g.add_colored_range(10, 20, "#00ff00")
    with pytest.raises(InvalidRange):
        g.add_colored_range(30, 30, "#ff0000")
    assert len(g.ranges) == 1


def test_add_colored_range_clamped():
    g = Gauge()
    rng = g.add_colored_range(-10, 110, "#00ff00")
    assert (rng.begin, rng.end) == pytest.approx((-3.125, 103.125))


def test_render_order():
    g = Gauge(GaugeConfig(label_formatter=integer_label))
    g.add_colored_range(60, 100, "#ff0000")
    prims = g.render(400, 200)
    layers = [p.layer for p in prims]
    assert layers[:3] == ["background", "inner", "mask"]
    assert layers[-2:] == ["needle", "pivot"]
    first_range = layers.index("range")
    assert all(l in ("major_tick", "minor_tick", "label") for l in layers[3:first_range])
    assert layers[first_range:-2] == ["range", "range"]
    assert isinstance(prims[2], ImagePrimitive)
    assert sum(isinstance(p, TextPrimitive) for p in prims) == 6


def test_render_after_clear_has_only_base_arc():
    g = Gauge()
    g.add_colored_range(60, 100, "#ff0000")
    g.clear_colored_ranges()
    arcs = [p for p in g.render(400, 200) if p.layer == "range"]
    assert len(arcs) == 1
    assert (arcs[0].start_deg, arcs[0].sweep_deg, arcs[0].color) == (185.0, 170.0, "#b4b4b4")
    # value track ring is the 0.7 layer
    assert arcs[0].rect == pytest.approx((60, 60, 280, 280))


def test_render_geometry_with_padding():
    g = Gauge()
    prims = g.render(420, 220, Padding(10, 10, 10, 10))
    background = prims[0]
    assert isinstance(background, ArcPrimitive)
    assert background.rect == pytest.approx((10, 10, 400, 400))
    mask = prims[2]
    assert mask.rect == pytest.approx((210 - 220, 210 - 220, 440, 220))


def test_needle_follows_value():
    g = Gauge()
    g.set_value(50)
    needle = g.render(400, 200)[-2]
    assert isinstance(needle, LinePrimitive)
    assert needle.x2 == pytest.approx(200)


def test_measure_delegates():
    assert Gauge.measure(300, None) == (300, 150)


def test_animated_value(scheduler, clock):
    g = Gauge(scheduler=scheduler, clock=clock)
    g.set_value_animated(50, 1500, 200)
    clock.advance(200 + 750)
    scheduler.frame()
    assert g.value == pytest.approx(25)
    clock.advance(750)
    scheduler.frame()
    assert g.value == 50


def test_animated_target_clamped(scheduler, clock):
    g = Gauge(scheduler=scheduler, clock=clock)
    handle = g.set_value_animated(500, 100, 0)
    assert handle.task.target_value == 100


@pytest.mark.parametrize("target", [0, -10, float("nan"), float("inf")])
def test_animated_target_must_be_positive_and_finite(scheduler, clock, target):
    g = Gauge(scheduler=scheduler, clock=clock)
    with pytest.raises(InvalidConfiguration):
        g.set_value_animated(target)


def test_animation_requires_scheduler():
    with pytest.raises(RuntimeError):
        Gauge().set_value_animated(10)
