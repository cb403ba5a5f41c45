"""
Configuration management for Checktree.

This module handles loading and accessing configuration values from config.yaml.
Missing or unreadable files fall back to built-in defaults so the tool always
starts.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Checktree.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load configuration, using defaults: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "database": {
                "filename": "checktree.db"
            },
            "paths": {
                "log_file": "checktree.log",
                "backup_dir": "backups"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "board": {
                "new_task_title": "New Task",
                "default_priority": "none"
            },
            "engine": {
                "missing_target_policy": "end"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "database.filename")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("board.new_task_title")  # Returns "New Task"
            config.get("engine.missing_target_policy")  # Returns "end"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    # Convenience properties for commonly used values

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("database.filename", "checktree.db")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "checktree.log")

    @property
    def backup_directory(self) -> str:
        """Get the directory backups are exported to."""
        return self.get("paths.backup_dir", "backups")

    @property
    def new_task_title(self) -> str:
        """Get the title given to freshly added tasks."""
        return self.get("board.new_task_title", "New Task")

    @property
    def default_priority(self) -> str:
        """Get the priority given to freshly added tasks."""
        return self.get("board.default_priority", "none")

    @property
    def missing_target_policy(self) -> str:
        """Get the relocate policy for targets that cannot be found."""
        return self.get("engine.missing_target_policy", "end")


# Global configuration instance
config = ConfigManager()
