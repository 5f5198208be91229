"""Configuration records for the speed gauge (layout inputs and paint style)."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from speedgauge.core.errors import InvalidConfiguration, InvalidRange

logger = logging.getLogger("GaugeConfig")

# ===================== Default values =====================
DEFAULT_MAX_VALUE = 100.0
DEFAULT_MAJOR_STEP = 20.0
DEFAULT_MINOR_TICKS = 1
DEFAULT_LABEL_TEXT_SIZE = 14
DEFAULT_COLOR = "#b4b4b4"

DEFAULT_BACKGROUND_COLOR = "#cbccd1"
DEFAULT_INNER_COLOR = "#584ee5"
DEFAULT_NEEDLE_COLOR = "#584ee5"
DEFAULT_LABEL_COLOR = "#000000"

DEFAULT_ANIMATION_DURATION_MS = 1500
DEFAULT_ANIMATION_DELAY_MS = 200

# Ranges may overshoot the labeled span by the 5° blank margin of the 160° dial.
RANGE_MARGIN_FRACTION = 5.0 / 160.0

ColorLike = Union[str, Tuple[int, int, int]]
LabelFormatter = Callable[[float, float], str]

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_color(color: ColorLike) -> str:
    """Return ``color`` as a lowercase ``#rrggbb`` string.

    Accepts ``#rrggbb`` strings and ``(r, g, b)`` tuples of 0..255 ints.
    """
    if isinstance(color, str):
        c = color.strip()
        if not _HEX_RE.match(c):
            raise InvalidConfiguration(f"invalid color {color!r}, expected #rrggbb")
        return c.lower()
    try:
        r, g, b = (int(v) for v in color)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"invalid color {color!r}, expected (r, g, b)") from None
    if not all(0 <= v <= 255 for v in (r, g, b)):
        raise InvalidConfiguration(f"color component out of range in {color!r}")
    return f"#{r:02x}{g:02x}{b:02x}"


def format_label(template: str) -> LabelFormatter:
    """Build a label formatter from a ``str.format`` template.

    The template sees ``progress``, ``max_value`` and ``percent`` fields,
    e.g. ``"{progress:.0f}"`` or ``"{percent:.0f}%"``.
    """
    def _fmt(progress: float, max_value: float) -> str:
        percent = progress / max_value * 100.0 if max_value else 0.0
        return template.format(progress=progress, max_value=max_value, percent=percent)
    return _fmt


def integer_label(progress: float, max_value: float) -> str:
    return str(int(round(progress)))


@dataclass(frozen=True)
class GaugeConfig:
    """Value-range and labeling parameters that drive the layout."""

    max_value: float = DEFAULT_MAX_VALUE
    major_step: float = DEFAULT_MAJOR_STEP
    minor_ticks: int = DEFAULT_MINOR_TICKS
    default_color: str = DEFAULT_COLOR
    label_formatter: Optional[LabelFormatter] = field(default=None, compare=False)
    label_text_size: int = DEFAULT_LABEL_TEXT_SIZE

    def __post_init__(self) -> None:
        if not (self.max_value > 0 and math.isfinite(self.max_value)):
            raise InvalidConfiguration(f"non positive or non finite max value: {self.max_value}")
        if not (self.major_step > 0 and math.isfinite(self.major_step)):
            raise InvalidConfiguration(f"non positive or non finite major tick step: {self.major_step}")
        if int(self.minor_ticks) < 0:
            raise InvalidConfiguration(f"negative minor tick count: {self.minor_ticks}")
        if int(self.label_text_size) < 0:
            raise InvalidConfiguration(f"negative label text size: {self.label_text_size}")
        object.__setattr__(self, "max_value", float(self.max_value))
        object.__setattr__(self, "major_step", float(self.major_step))
        object.__setattr__(self, "minor_ticks", int(self.minor_ticks))
        object.__setattr__(self, "label_text_size", int(self.label_text_size))
        object.__setattr__(self, "default_color", normalize_color(self.default_color))

    @property
    def has_labels(self) -> bool:
        return self.label_formatter is not None

    @classmethod
    def from_settings(cls, settings: Dict[str, Dict[str, Any]]) -> "GaugeConfig":
        """Build a config from the ``[GAUGE]`` section of loaded settings.

        Missing keys fall back to the defaults.
        """
        section = settings.get("GAUGE", {})
        template = section.get("label_format")
        return cls(
            max_value=section.get("max_value", DEFAULT_MAX_VALUE),
            major_step=section.get("major_step", DEFAULT_MAJOR_STEP),
            minor_ticks=section.get("minor_ticks", DEFAULT_MINOR_TICKS),
            default_color=section.get("default_color", DEFAULT_COLOR),
            label_formatter=format_label(str(template)) if template else None,
            label_text_size=section.get("label_text_size", DEFAULT_LABEL_TEXT_SIZE),
        )


@dataclass(frozen=True)
class GaugeStyle:
    """Paint parameters of the primitives (colors, stroke widths, lengths)."""

    background_color: str = DEFAULT_BACKGROUND_COLOR
    inner_color: str = DEFAULT_INNER_COLOR
    needle_color: str = DEFAULT_NEEDLE_COLOR
    label_color: str = DEFAULT_LABEL_COLOR
    tick_width: float = 4.0
    needle_width: float = 5.0
    range_width: float = 5.0
    major_tick_length: float = 30.0
    label_gap: float = 8.0
    mask_image: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("background_color", "inner_color", "needle_color", "label_color"):
            object.__setattr__(self, name, normalize_color(getattr(self, name)))

    @property
    def minor_tick_length(self) -> float:
        return self.major_tick_length / 2.0

    @classmethod
    def from_settings(cls, settings: Dict[str, Dict[str, Any]]) -> "GaugeStyle":
        section = settings.get("STYLE", {})
        return cls(
            background_color=section.get("background_color", DEFAULT_BACKGROUND_COLOR),
            inner_color=section.get("inner_color", DEFAULT_INNER_COLOR),
            needle_color=section.get("needle_color", DEFAULT_NEEDLE_COLOR),
            label_color=section.get("label_color", DEFAULT_LABEL_COLOR),
            mask_image=section.get("mask_image") or None,
        )


@dataclass(frozen=True)
class ColoredRange:
    color: str
    begin: float
    end: float


def ranges_from_settings(settings: Dict[str, Dict[str, Any]]) -> List[Tuple[float, float, str]]:
    """Parse ``[RANGES]`` entries of the form ``name = begin, end, #rrggbb``.

    Returns raw ``(begin, end, color)`` triples in file order; validation and
    clamping happen when they are added to a gauge.
    """
    out: List[Tuple[float, float, str]] = []
    for name, raw in settings.get("RANGES", {}).items():
        parts = [p.strip() for p in str(raw).split(",")]
        if len(parts) != 3:
            raise InvalidRange(f"range '{name}': expected 'begin, end, color', got {raw!r}")
        try:
            begin, end = float(parts[0]), float(parts[1])
        except ValueError:
            raise InvalidRange(f"range '{name}': non numeric bounds in {raw!r}") from None
        out.append((begin, end, parts[2]))
        logger.debug("range '%s' read from settings: %s..%s %s", name, begin, end, parts[2])
    return out
