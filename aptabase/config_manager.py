"""
Configuration management for the Aptabase tracker.
Handles loading, validating, and providing access to tracker settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class TrackerConfig:
    """Tracker configuration settings."""
    app_key: str
    host: Optional[str]
    app_version: str


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    debug: bool


class ConfigManager:
    """Manages tracker configuration loading and access."""

    def __init__(self, config_file: str = "aptabase_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self._merge_config(json.load(f))
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep defaults if file is invalid or vanished
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "tracker": {
                "app_key": "",
                "host": None,
                "app_version": ""
            },
            "logging": {
                "debug": False
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("APTABASE_APP_KEY"):
            self._config["tracker"]["app_key"] = os.getenv("APTABASE_APP_KEY")

        if os.getenv("APTABASE_HOST"):
            self._config["tracker"]["host"] = os.getenv("APTABASE_HOST")

        if os.getenv("APTABASE_APP_VERSION"):
            self._config["tracker"]["app_version"] = os.getenv("APTABASE_APP_VERSION")

        if os.getenv("APTABASE_DEBUG"):
            self._config["logging"]["debug"] = os.getenv("APTABASE_DEBUG").lower() == "true"

    def get_tracker_config(self) -> TrackerConfig:
        """Get tracker configuration."""
        tracker_config = self._config["tracker"]
        return TrackerConfig(
            app_key=tracker_config["app_key"] or "",
            host=tracker_config["host"] or None,
            app_version=tracker_config["app_version"] or ""
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return LoggingConfig(debug=bool(self._config["logging"]["debug"]))

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file and environment."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_tracker_config() -> TrackerConfig:
    """Get tracker configuration."""
    return config_manager.get_tracker_config()


def get_logging_config() -> LoggingConfig:
    """Get logging configuration."""
    return config_manager.get_logging_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
