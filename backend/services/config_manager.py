"""
Configuration Manager - Persist default diff options and blob store settings
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from models.diff import DiffOptions

CONFIG_DIR_ENV = "BLOBDIFF_CONFIG_DIR"


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self, config_dir: str | os.PathLike | None = None):
        try:
            # 1. explicit argument, 2. environment variable
            config_dir = config_dir or os.environ.get(CONFIG_DIR_ENV)

            # 3. home directory ~/.blobdiff
            if not config_dir:
                config_dir = os.path.expanduser("~/.blobdiff")

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    print(f"[Config] Warning: Cannot write to {config_dir}: {e}")
                    self._config_file = None

            # Last resort: temp directory
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "blobdiff"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                print(f"[Config] Using temporary config path: {self._config_file}")

        except OSError as e:
            print(f"[Config] Critical error in ConfigManager init: {e}")
            self._config_file = Path(tempfile.gettempdir()) / "blobdiff_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Forget the singleton so the next get_instance() reloads from disk"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"[Config] Error loading config: {e}")
            return config

        if not isinstance(stored, dict):
            print(f"[Config] Ignoring malformed config in {self._config_file}")
            return config

        for section, values in stored.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section] = {**config[section], **values}
            else:
                config[section] = values
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "diff": DiffOptions().model_dump(mode="json"),
            "blob_store": {"endpoint": "http://localhost:8080", "timeout": 10},
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return json.loads(json.dumps(self._config))

    def get_diff_options(self) -> DiffOptions:
        """Default diff options as configured"""
        return DiffOptions(**self.get_config().get("diff", {}))

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)
