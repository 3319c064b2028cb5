"""Global app configuration (content source, auto-advance, timing)."""

import json
from pathlib import Path
from typing import Any

from .core import data_dir, default_story_path

_CONFIG_DEFAULTS: dict[str, Any] = {
    "story_path": "",
    "auto_advance": True,
    "time_scale": 1.0,
    "resume_sessions": True,
}


def _config_path() -> Path:
    return data_dir() / "config.json"


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config: dict[str, Any] = dict(_CONFIG_DEFAULTS)
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        for key in _CONFIG_DEFAULTS:
            if key in stored:
                config[key] = stored[key]
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge known fields into config and persist. Returns full config."""
    config = get_config()
    for key, value in fields.items():
        if key in _CONFIG_DEFAULTS:
            config[key] = value
    _config_path().write_text(json.dumps(config, indent=2))
    return config


def story_path() -> Path:
    """Content file to load: the configured one, else the bundled preset."""
    configured = get_config()["story_path"]
    if configured:
        return Path(configured)
    return default_story_path()
