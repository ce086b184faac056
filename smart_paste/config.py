"""
Configuration — loads settings from .smartpaste.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

from __future__ import annotations

import os

import yaml

from .editing.preview import DEFAULT_MARKERS
from .editing.range_applier import OVERLAP_POLICIES


_DEFAULTS = {
    "overlap_policy": "reject",
    "strict_line_counts": False,
    "use_tui": True,
    "log_dir": ".smartpaste/logs",
    "clipboard_timeout": 5.0,
    "markers": dict(DEFAULT_MARKERS),
}

# Config file search locations
_CONFIG_FILENAMES = [".smartpaste.yaml", ".smartpaste.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


class Config:
    """Application configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .smartpaste.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            value = os.getenv(env_key)
            if value is None:
                value = yd.get(yaml_key)
            if value is None:
                return default
            try:
                return cast(value)
            except (TypeError, ValueError):
                # Unparseable values fall back to the default
                return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() == "true"
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.OVERLAP_POLICY = _get("SMART_PASTE_OVERLAP_POLICY", "overlap_policy",
                                   _DEFAULTS["overlap_policy"]).lower()
        if self.OVERLAP_POLICY not in OVERLAP_POLICIES:
            self.OVERLAP_POLICY = _DEFAULTS["overlap_policy"]

        self.STRICT_LINE_COUNTS = _get_bool("SMART_PASTE_STRICT_LINE_COUNTS",
                                            "strict_line_counts",
                                            _DEFAULTS["strict_line_counts"])
        self.USE_TUI = _get_bool("SMART_PASTE_USE_TUI", "use_tui",
                                 _DEFAULTS["use_tui"])
        self.LOG_DIR = _get("SMART_PASTE_LOG_DIR", "log_dir", _DEFAULTS["log_dir"])
        self.CLIPBOARD_TIMEOUT = _get("SMART_PASTE_CLIPBOARD_TIMEOUT",
                                      "clipboard_timeout",
                                      _DEFAULTS["clipboard_timeout"], cast=float)

        # Preview markers: only known keys, string values
        self.MARKERS: dict[str, str] = dict(_DEFAULTS["markers"])
        markers_section = yd.get("markers", {})
        if isinstance(markers_section, dict):
            for kind in ("add", "remove", "context"):
                if kind in markers_section:
                    self.MARKERS[kind] = str(markers_section[kind])

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
