# SpeedGauge demo application
# Shows a speedometer fed with random speeds from a background thread.

from speedgauge.app_info import name, version

import sys
import dataclasses
import random
import logging
import threading
from logging.handlers import TimedRotatingFileHandler

from PyQt5.QtWidgets import QApplication, QMessageBox, QVBoxLayout, QWidget

from speedgauge.core.config import GaugeConfig, GaugeStyle, ranges_from_settings
from speedgauge.gui.widgets.speed_gauge_widget import SpeedGaugeWidget
from speedgauge.utils.paths import get_logs_dir, get_log_file, resolve_asset
from speedgauge.utils.settings_loader import load_settings, resolve_settings_path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO) -> None:
    """Console + daily rotating file (7 days kept) on the root logger."""
    get_logs_dir().mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    file_handler = TimedRotatingFileHandler(
        get_log_file(), when='midnight', backupCount=7, encoding='utf-8', utc=False
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)


logger = logging.getLogger("main")


def build_gauge(settings: dict) -> SpeedGaugeWidget:
    """Create the gauge widget from loaded settings."""
    config = GaugeConfig.from_settings(settings)
    style = GaugeStyle.from_settings(settings)
    if style.mask_image:
        style = dataclasses.replace(style, mask_image=str(resolve_asset(style.mask_image)))

    anim = settings.get("ANIMATION", {})
    widget = SpeedGaugeWidget(config, style, frame_interval_ms=anim.get("frame_interval_ms", 16))
    for begin, end, color in ranges_from_settings(settings):
        widget.add_colored_range(begin, end, color)
    return widget


def feed_random_speeds(widget: SpeedGaugeWidget, settings: dict, stop: threading.Event) -> None:
    """Push random animated targets to the gauge; runs outside the GUI thread."""
    anim = settings.get("ANIMATION", {})
    duration = anim.get("duration_ms", 1500)
    delay = anim.get("start_delay_ms", 200)
    period_s = (duration + delay) / 1000.0 + 0.5
    max_value = widget.gauge.max_value
    while not stop.is_set():
        target = random.uniform(max_value * 0.05, max_value)
        widget.set_value_animated(target, duration, delay)
        stop.wait(period_s)


def main() -> int:
    setup_logging()
    logger.info(
        "\n"
        "================================================\n"
        "Starting %s %s\n"
        "================================================", name, version
    )

    stop = threading.Event()
    try:
        settings_path = resolve_settings_path()
        logger.info(f"Loading settings from: {settings_path}")
        settings = load_settings(settings_path)
        logger.info("Settings loaded")

        app = QApplication.instance() or QApplication(sys.argv)
        app.setApplicationName(name)

        window = QWidget()
        window.setWindowTitle(f"{name} {version}")
        layout = QVBoxLayout(window)
        gauge = build_gauge(settings)
        layout.addWidget(gauge)
        window.resize(640, 340)
        window.show()
        logger.info("Gauge initialised (max=%s)", gauge.gauge.max_value)

        feeder = threading.Thread(target=feed_random_speeds, args=(gauge, settings, stop),
                                  name="SpeedFeeder", daemon=True)
        feeder.start()
        app.aboutToQuit.connect(stop.set)

        exit_code = app.exec_()
        logger.info("Closing application...")
        return int(exit_code)

    except Exception as e:
        logger.exception("Application startup failed")
        if QApplication.instance() is None:
            QApplication(sys.argv)
        QMessageBox.critical(
            None,
            "Startup error",
            f"The application could not start: {str(e)}\n\n"
            "See the logs for details."
        )
        return 1
    finally:
        stop.set()


if __name__ == "__main__":
    raise SystemExit(main())
