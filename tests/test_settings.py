from pathlib import Path

import pytest

from speedgauge.core.config import GaugeConfig, GaugeStyle, normalize_color, ranges_from_settings
from speedgauge.core.errors import InvalidConfiguration, InvalidRange
from speedgauge.utils import paths
from speedgauge.utils.settings_loader import load_settings


def test_repo_root_contains_pyproject():
    repo_root = paths.get_repo_root()
    assert (repo_root / "pyproject.toml").exists()


def test_canonical_dirs():
    src_root = paths.get_src_root()
    assert paths.get_data_dir() == src_root / "data"
    assert paths.get_logs_dir() == src_root / "logs"
    assert paths.get_log_file().name == "speedgauge.log"
    assert paths.resolve_asset("mask.png") == paths.get_data_dir() / "mask.png"


def test_config_override(monkeypatch, tmp_path: Path):
    cfg = tmp_path / "settings.txt"
    cfg.write_text(
        "[GAUGE]\nMAX_VALUE=240\nMAJOR_STEP=40\nMINOR_TICKS=3\nLABEL_FORMAT={percent:.0f}%\n"
        "[RANGES]\nred=200, 260, #ff1744\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("SPEEDGAUGE_CONFIG_PATH", str(cfg))

    resolved = paths.get_config_path()
    assert resolved == cfg.resolve()

    settings = load_settings()
    assert settings["GAUGE"]["max_value"] == 240
    assert settings["GAUGE"]["minor_ticks"] == 3

    config = GaugeConfig.from_settings(settings)
    assert config.max_value == 240.0
    assert config.major_step == 40.0
    assert config.label_formatter(120, 240) == "50%"
    assert ranges_from_settings(settings) == [(200.0, 260.0, "#ff1744")]


def test_repo_settings_file_is_valid():
    settings = load_settings(paths.get_repo_root() / "settings.txt")
    config = GaugeConfig.from_settings(settings)
    style = GaugeStyle.from_settings(settings)
    assert config == GaugeConfig()
    assert config.label_formatter(20.0, 100.0) == "20"
    assert style.mask_image is None
    assert len(ranges_from_settings(settings)) == 3


def test_missing_settings_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.txt")


def test_defaults_without_sections():
    assert GaugeConfig.from_settings({}) == GaugeConfig()
    assert GaugeStyle.from_settings({}) == GaugeStyle()


def test_bad_range_entry():
    with pytest.raises(InvalidRange):
        ranges_from_settings({"RANGES": {"x": "1, 2"}})


@pytest.mark.parametrize("bad", ["red", "#12345", (1, 2), (0, 0, 300)])
def test_normalize_color_rejects(bad):
    with pytest.raises(InvalidConfiguration):
        normalize_color(bad)


def test_normalize_color():
    assert normalize_color("#ABCDEF") == "#abcdef"
    assert normalize_color((180, 180, 180)) == "#b4b4b4"
