"""Settings loader for repo-local configuration files."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from speedgauge.utils.paths import get_config_path

logger = logging.getLogger("settings_loader")


def resolve_settings_path(explicit_path: Optional[Union[str, Path]] = None) -> Path:
    """Resolve settings.txt path, honoring SPEEDGAUGE_CONFIG_PATH if set.

    Args:
        explicit_path: Optional explicit path to use instead of defaults.

    Returns:
        A resolved Path to the settings file.
    """
    if explicit_path:
        return Path(explicit_path).expanduser().resolve()
    return get_config_path()


def _coerce(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value.strip()


def load_settings(filepath: Optional[Union[str, Path]] = None) -> Dict[str, Dict[str, Any]]:
    """Load settings from a config file into a nested dictionary.

    Args:
        filepath: Optional path to the settings file. If omitted, uses
            SPEEDGAUGE_CONFIG_PATH or the repo-local settings.txt.

    Returns:
        A nested dict of settings: {section: {key: value}}. Numeric values
        are converted to int or float, everything else is kept as a string.

    Raises:
        FileNotFoundError: If the settings file does not exist.
        configparser.Error: If the file is not readable as config.
    """
    path = resolve_settings_path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    settings: Dict[str, Dict[str, Any]] = {}
    # '%' appears in label templates, no interpolation wanted
    config = configparser.ConfigParser(interpolation=None)
    with path.open("r", encoding="utf-8") as handle:
        config.read_file(handle)
    for section in config.sections():
        settings[section] = {key: _coerce(value) for key, value in config.items(section)}
    logger.debug("Loaded %d section(s) from %s", len(settings), path)
    return settings
