"""
YAML → user settings loader.

Merges optional user overrides from ``<data dir>/settings.yaml`` over the
built-in defaults:

    default_mode: high_performance   # mode used when --mode is omitted
    default_plan_id: midday-tuneup   # plan for a fresh state
    show_descriptions: false         # hide coaching text in `today`

Usage:
    from training_os.core.settings import load_settings
    settings = load_settings(data_dir)
    mode = settings["default_mode"]

If the file exists but cannot be parsed, a warning is emitted and the
defaults are used.  Unknown keys and invalid values are ignored.
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Any

import yaml

from .config import DEFAULT_MODE, DEFAULT_PLAN_ID, MODES, SETTINGS_FILENAME


DEFAULT_SETTINGS: dict[str, Any] = {
    "default_mode": DEFAULT_MODE,
    "default_plan_id": DEFAULT_PLAN_ID,
    "show_descriptions": True,
}


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} on parse errors."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"training-os: ignoring {path} ({exc})", stacklevel=3)
        return {}
    return data if isinstance(data, dict) else {}


def _clean(raw: dict[str, Any]) -> dict[str, Any]:
    """Keep known keys with values of the right type."""
    cleaned: dict[str, Any] = {}
    if raw.get("default_mode") in MODES:
        cleaned["default_mode"] = raw["default_mode"]
    if isinstance(raw.get("default_plan_id"), str) and raw["default_plan_id"].strip():
        cleaned["default_plan_id"] = raw["default_plan_id"]
    if isinstance(raw.get("show_descriptions"), bool):
        cleaned["show_descriptions"] = raw["show_descriptions"]
    return cleaned


def get_settings_path(data_dir: Path) -> Path:
    """Return the settings.yaml path inside data_dir."""
    return data_dir / SETTINGS_FILENAME


def load_settings(data_dir: Path | None = None) -> dict[str, Any]:
    """
    Load settings, merging the user file over DEFAULT_SETTINGS.

    Args:
        data_dir: Directory holding settings.yaml (None → defaults only)

    Returns:
        Settings dict with every DEFAULT_SETTINGS key present
    """
    settings = dict(DEFAULT_SETTINGS)
    if data_dir is None:
        return settings

    path = get_settings_path(data_dir)
    if path.exists():
        settings = {**settings, **_clean(_load_yaml_file(path))}
    return settings
