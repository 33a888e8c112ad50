"""Persistent CLI settings in ~/.pushjobs/config.yaml"""

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from .formatting import print_warning

DEFAULTS: dict[str, Any] = {
    "api": {"base_url": "http://localhost:8000", "timeout": 30},
    "jobs": {"collection": "notification_jobs"},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Dotted-key access to the CLI's YAML settings, layered over DEFAULTS"""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = config_dir or Path.home() / ".pushjobs"
        self.config_file = self.config_dir / "config.yaml"

    def get_default_config(self) -> dict[str, Any]:
        defaults = copy.deepcopy(DEFAULTS)
        # Environment wins over the built-in URL, not over a saved one
        if api_url := os.getenv("PUSHJOBS_API_URL"):
            defaults["api"]["base_url"] = api_url
        return defaults

    def _read_saved(self) -> dict[str, Any]:
        if not self.config_file.exists():
            return {}
        try:
            saved = yaml.safe_load(self.config_file.read_text()) or {}
        except yaml.YAMLError as e:
            print_warning(f"Ignoring unreadable {self.config_file}: {e}")
            return {}
        return saved if isinstance(saved, dict) else {}

    def load_config(self) -> dict[str, Any]:
        return _merge(self.get_default_config(), self._read_saved())

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'api.base_url'"""
        value: Any = self.load_config()
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, key: str, value: Any):
        """Save a dotted key; only explicitly set values are written"""
        saved = self._read_saved()
        *parents, leaf = key.split(".")
        section = saved
        for part in parents:
            if not isinstance(section.get(part), dict):
                section[part] = {}
            section = section[part]
        section[leaf] = value
        self._write(saved)

    def reset(self):
        self._write({})

    def _write(self, data: dict[str, Any]):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(yaml.safe_dump(data, default_flow_style=False))


config = ConfigManager()
