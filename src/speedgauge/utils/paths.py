"""Path helpers for repo-local development mode."""

from __future__ import annotations

import os
from pathlib import Path


def get_repo_root() -> Path:
    """Return the repository root (dev mode only)."""
    return Path(__file__).resolve().parents[3]


def get_src_root() -> Path:
    """Return the repo-local src/ directory."""
    return get_repo_root() / "src"


def get_data_dir() -> Path:
    """Return the data directory holding gauge assets (src/data)."""
    return get_src_root() / "data"


def get_logs_dir() -> Path:
    """Return the canonical logs directory (src/logs)."""
    return get_src_root() / "logs"


def get_log_file() -> Path:
    """Return the canonical log file path (src/logs/speedgauge.log)."""
    return get_logs_dir() / "speedgauge.log"


def resolve_asset(path: str) -> Path:
    """Resolve an asset path from settings; relative paths live in the data dir."""
    p = Path(path).expanduser()
    return p if p.is_absolute() else get_data_dir() / p


def get_config_path() -> Path:
    """Resolve the settings.txt path with SPEEDGAUGE_CONFIG_PATH override."""
    override = os.getenv("SPEEDGAUGE_CONFIG_PATH")
    if override:
        return Path(override).expanduser().resolve()
    return (get_repo_root() / "settings.txt").resolve()
