#!/usr/bin/env python3
"""
Configuration Manager for Access IRC
Handles loading and saving configuration in JSON format
"""

import copy
import json
import os
import shutil
from pathlib import Path
from typing import Dict, List, Any, Optional

from .highlight import HIGHLIGHT_OPTION, split_phrases


class ConfigManager:
    """Manages application configuration stored in JSON format"""

    DEFAULT_CONFIG = {
        "look": {
            "highlight": ""
        },
        "plugins": {
            "directory": ""
        }
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config manager

        Args:
            config_path: Path to the configuration file (defaults to ~/.config/access-irc/config.json)
        """
        if config_path is None:
            # Use XDG config directory
            config_dir = Path.home() / ".config" / "access-irc"
            config_dir.mkdir(parents=True, exist_ok=True)
            self.config_path = str(config_dir / "config.json")
        else:
            self.config_path = config_path

        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from file, creating default if doesn't exist

        Returns:
            Configuration dictionary
        """
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    config = json.load(f)
                # Merge with defaults to ensure all keys exist
                return self._merge_with_defaults(config)
            except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
                print(f"Error loading config: {e}")
                print("Using default configuration")
                return copy.deepcopy(self.DEFAULT_CONFIG)

        config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save_config(config)
        print(f"Created config: {self.config_path}")
        return config

    def _merge_with_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge user config with defaults to ensure all keys exist

        Keys the defaults don't know about (other host sections) are kept.

        Args:
            config: User configuration

        Returns:
            Merged configuration
        """
        if not isinstance(config, dict):
            return copy.deepcopy(self.DEFAULT_CONFIG)

        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for key, value in config.items():
            if isinstance(merged.get(key), dict) and isinstance(value, dict):
                merged[key].update(value)
            else:
                merged[key] = value

        return merged

    def save_config(self, config: Optional[Dict[str, Any]] = None) -> bool:
        """
        Save configuration to file atomically

        Uses a write-to-temp-then-rename strategy to prevent data loss
        if the save is interrupted. Also creates a backup of the previous
        config file.

        Args:
            config: Configuration to save (uses self.config if None)

        Returns:
            True if successful, False otherwise
        """
        if config is None:
            config = self.config

        temp_path = f"{self.config_path}.tmp"
        backup_path = f"{self.config_path}.backup"

        try:
            with open(temp_path, 'w') as f:
                json.dump(config, f, indent=2)

            if os.path.exists(self.config_path):
                try:
                    shutil.copy2(self.config_path, backup_path)
                except IOError as e:
                    # Backup failure is not fatal, just warn
                    print(f"Warning: Could not create config backup: {e}")

            # Atomic rename (on POSIX systems)
            os.replace(temp_path, self.config_path)
            return True

        except IOError as e:
            print(f"Error saving config: {e}")
            try:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
            except OSError:
                pass
            return False

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dotted key

        Args:
            key: Dot-separated key, e.g. 'look.highlight'
            default: Default value if any part of the key is missing

        Returns:
            Configuration value
        """
        value = self.config
        for part in key.split('.'):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def set_option(self, key: str, value: Any) -> bool:
        """
        Set a configuration value by dotted key and save

        Missing intermediate sections are created. If the save fails the
        previous in-memory value is restored.

        Args:
            key: Dot-separated key, e.g. 'look.highlight'
            value: Value to set

        Returns:
            True if the config was saved
        """
        *sections, name = key.split('.')
        node = self.config
        for section in sections:
            if not isinstance(node.get(section), dict):
                node[section] = {}
            node = node[section]
        missing = name not in node
        previous = node.get(name)
        node[name] = value
        if self.save_config():
            return True

        if missing:
            del node[name]
        else:
            node[name] = previous
        return False

    def get_highlight_phrases(self) -> List[str]:
        """Get the configured highlight phrases"""
        return split_phrases(self.get_option(HIGHLIGHT_OPTION, ""))

    def get_plugins_directory(self) -> Path:
        """Get the plugins directory (defaults to plugins/ next to the config file)"""
        directory = self.get_option("plugins.directory", "")
        if directory:
            return Path(os.path.expanduser(directory))
        return Path(self.config_path).parent / "plugins"
