# -*- coding: utf-8 -*-
import logging
from typing import Dict, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from speedgauge.core.animation import AnimationHandle, check_timing
from speedgauge.core.arcs import make_range
from speedgauge.core.config import (
    DEFAULT_ANIMATION_DELAY_MS,
    DEFAULT_ANIMATION_DURATION_MS,
    ColorLike,
    GaugeConfig,
    GaugeStyle,
)
from speedgauge.core.gauge import Gauge, check_animated_target, check_value
from speedgauge.core.geometry import Padding
from speedgauge.core.primitives import ArcPrimitive, ImagePrimitive, LinePrimitive, Primitive, TextPrimitive
from speedgauge.gui.qt_scheduler import DEFAULT_FRAME_INTERVAL_MS, QtFrameScheduler

# ===================== Default colors =====================
_QCOLOR_MASK_CENTER = QtGui.QColor(255, 255, 255, 0)
_QCOLOR_MASK_RIM    = QtGui.QColor(0, 0, 0, 90)


def _qcol(c: str) -> QtGui.QColor:
    return QtGui.QColor(c)


class SpeedGaugeWidget(QtWidgets.QWidget):
    """Half-disc speedometer painting the primitives of a ``Gauge``."""

    valueChanged = QtCore.pyqtSignal(float)

    _reqSetValue   = QtCore.pyqtSignal(float)
    _reqAnimate    = QtCore.pyqtSignal(float, float, float)
    _reqAddRange   = QtCore.pyqtSignal(float, float, str)
    _reqClearRange = QtCore.pyqtSignal()

    def __init__(self,
                 config: Optional[GaugeConfig] = None,
                 style: Optional[GaugeStyle] = None,
                 frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS,
                 parent=None):
        super().__init__(parent)
        self.logger = logging.getLogger("SpeedGaugeWidget")
        self.setMinimumSize(120, 60)
        sp = self.sizePolicy()
        sp.setHeightForWidth(True)
        self.setSizePolicy(sp)

        self.scheduler = QtFrameScheduler(frame_interval_ms, parent=self)
        self.gauge = Gauge(config, style, scheduler=self.scheduler)
        self.gauge.add_listener(self._on_gauge_changed)
        self._last_value = self.gauge.value
        self._mask_cache: Dict[str, Optional[QtGui.QPixmap]] = {}

        # Signaux thread-safe
        self._reqSetValue.connect(self._set_value_gui, QtCore.Qt.QueuedConnection)
        self._reqAnimate.connect(self._animate_gui, QtCore.Qt.QueuedConnection)
        self._reqAddRange.connect(self._add_range_gui, QtCore.Qt.QueuedConnection)
        self._reqClearRange.connect(self._clear_ranges_gui, QtCore.Qt.QueuedConnection)

    # ----------------------------- public API ---------------------------------
    def value(self) -> float:
        return self.gauge.value

    def set_value(self, value: float) -> None:
        """Set the value; callable from any thread, validated in the caller."""
        check_value(value)
        if self._on_gui_thread():
            self.gauge.set_value(value)
        else:
            self._reqSetValue.emit(float(value))

    def set_value_animated(self, target: float,
                           duration_ms: float = DEFAULT_ANIMATION_DURATION_MS,
                           start_delay_ms: float = DEFAULT_ANIMATION_DELAY_MS) -> Optional[AnimationHandle]:
        """Animate towards ``target``.

        Returns the animation handle when called on the GUI thread; calls from
        other threads are validated here, queued and return None.
        """
        check_animated_target(target)
        check_timing(duration_ms, start_delay_ms)
        if self._on_gui_thread():
            return self.gauge.set_value_animated(target, duration_ms, start_delay_ms)
        self._reqAnimate.emit(float(target), float(duration_ms), float(start_delay_ms))
        return None

    def add_colored_range(self, begin: float, end: float, color: ColorLike) -> None:
        if self._on_gui_thread():
            self.gauge.add_colored_range(begin, end, color)
            return
        # order and color checked here; clamping waits for the GUI thread max value
        rng = make_range(begin, end, color, self.gauge.max_value)
        self._reqAddRange.emit(float(begin), float(end), rng.color)

    def clear_colored_ranges(self) -> None:
        if self._on_gui_thread():
            self.gauge.clear_colored_ranges()
        else:
            self._reqClearRange.emit()

    def stop_animation(self) -> None:
        if self.gauge.animator is not None:
            self.gauge.animator.cancel()

    # ----------------------------- Qt sizing ----------------------------------
    def sizeHint(self) -> QtCore.QSize:
        w, h = Gauge.measure(320, None)
        return QtCore.QSize(w, h)

    def hasHeightForWidth(self) -> bool:
        return True

    def heightForWidth(self, width: int) -> int:
        return Gauge.measure(width, None)[1]

    # ----------------------------- Qt events ----------------------------------
    def paintEvent(self, ev: QtGui.QPaintEvent) -> None:
        m = self.contentsMargins()
        padding = Padding(m.left(), m.top(), m.right(), m.bottom())
        primitives = self.gauge.render(self.width(), self.height(), padding)

        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.Antialiasing, True)
        p.setRenderHint(QtGui.QPainter.TextAntialiasing, True)
        for prim in primitives:
            self._paint(p, prim)
        p.end()

    def closeEvent(self, ev: QtGui.QCloseEvent) -> None:
        self.scheduler.cancel_all()
        super().closeEvent(ev)

    # ----------------------------- internes -----------------------------------
    def _on_gui_thread(self) -> bool:
        return QtCore.QThread.currentThread() is self.thread()

    def _set_value_gui(self, value: float) -> None:
        self.gauge.set_value(value)

    def _animate_gui(self, target: float, duration_ms: float, start_delay_ms: float) -> None:
        self.gauge.set_value_animated(target, duration_ms, start_delay_ms)

    def _add_range_gui(self, begin: float, end: float, color: str) -> None:
        self.gauge.add_colored_range(begin, end, color)

    def _clear_ranges_gui(self) -> None:
        self.gauge.clear_colored_ranges()

    def _on_gauge_changed(self) -> None:
        v = self.gauge.value
        if v != self._last_value:
            self._last_value = v
            self.valueChanged.emit(v)
        self.update()

    def _paint(self, p: QtGui.QPainter, prim: Primitive) -> None:
        if isinstance(prim, ArcPrimitive):
            self._paint_arc(p, prim)
        elif isinstance(prim, LinePrimitive):
            pen = QtGui.QPen(_qcol(prim.color), prim.stroke_width, QtCore.Qt.SolidLine, QtCore.Qt.FlatCap)
            p.setPen(pen)
            p.drawLine(QtCore.QPointF(prim.x1, prim.y1), QtCore.QPointF(prim.x2, prim.y2))
        elif isinstance(prim, TextPrimitive):
            self._paint_text(p, prim)
        elif isinstance(prim, ImagePrimitive):
            self._paint_mask(p, prim)

    @staticmethod
    def _paint_arc(p: QtGui.QPainter, prim: ArcPrimitive) -> None:
        rect = QtCore.QRectF(*prim.rect)
        # primitives sweep clockwise on screen, Qt sweeps counter-clockwise in 1/16°
        start_qt = int(round(-prim.start_deg * 16.0))
        span_qt  = int(round(-prim.sweep_deg * 16.0))
        if prim.filled:
            p.setPen(QtCore.Qt.NoPen)
            p.setBrush(_qcol(prim.color))
            p.drawPie(rect, start_qt, span_qt)
        else:
            p.setPen(QtGui.QPen(_qcol(prim.color), prim.stroke_width, QtCore.Qt.SolidLine, QtCore.Qt.FlatCap))
            p.setBrush(QtCore.Qt.NoBrush)
            p.drawArc(rect, start_qt, span_qt)

    @staticmethod
    def _paint_text(p: QtGui.QPainter, prim: TextPrimitive) -> None:
        font = QtGui.QFont("DejaVu Sans")
        font.setPixelSize(max(1, int(prim.size)))
        font.setBold(prim.bold)
        fm = QtGui.QFontMetricsF(font)
        p.save()
        p.setFont(font)
        p.setPen(_qcol(prim.color))
        p.translate(prim.x, prim.y)
        p.rotate(prim.rotation_deg)
        p.drawText(QtCore.QPointF(-fm.width(prim.text) / 2.0, 0.0), prim.text)
        p.restore()

    def _paint_mask(self, p: QtGui.QPainter, prim: ImagePrimitive) -> None:
        x, y, w, h = prim.rect
        if w <= 0 or h <= 0:
            return
        target = QtCore.QRectF(x, y, w, h)
        pm = self._load_mask(prim.source) if prim.source else None
        if pm is not None:
            p.drawPixmap(target, pm, QtCore.QRectF(pm.rect()))
            return
        # no asset: radial shading over the top half of the dial
        cx, cy, r = x + w / 2.0, y + h, w / 2.0
        grad = QtGui.QRadialGradient(QtCore.QPointF(cx, cy), r)
        grad.setColorAt(0.0, _QCOLOR_MASK_CENTER)
        grad.setColorAt(0.85, _QCOLOR_MASK_CENTER)
        grad.setColorAt(1.0, _QCOLOR_MASK_RIM)
        path = QtGui.QPainterPath()
        path.moveTo(cx, cy)
        path.arcTo(QtCore.QRectF(cx - r, cy - r, 2 * r, 2 * r), 0.0, 180.0)
        path.closeSubpath()
        p.fillPath(path, QtGui.QBrush(grad))

    def _load_mask(self, source: str) -> Optional[QtGui.QPixmap]:
        if source in self._mask_cache:
            return self._mask_cache[source]
        pm = QtGui.QPixmap(source)
        if pm.isNull():
            self.logger.warning("mask image not readable: %s", source)
            self._mask_cache[source] = None
            return None
        # only the top half of the asset covers the dial
        pm = pm.copy(0, 0, pm.width(), max(1, pm.height() // 2))
        self._mask_cache[source] = pm
        return pm


# ---------------- Démo locale ----------------
if __name__ == "__main__":
    import random
    import sys
    from speedgauge.core.config import integer_label

    app = QtWidgets.QApplication(sys.argv)
    g = SpeedGaugeWidget(GaugeConfig(max_value=220, major_step=20, minor_ticks=3,
                                     label_formatter=integer_label))
    g.add_colored_range(0, 60, "#00c853")
    g.add_colored_range(160, 240, "#ff1744")
    g.resize(640, 320)
    g.show()
    timer = QtCore.QTimer()
    timer.timeout.connect(lambda: g.set_value_animated(random.uniform(1, 220), 1200, 0))
    timer.start(2000)
    sys.exit(app.exec_())
