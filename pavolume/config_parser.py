#!/usr/bin/env python3
"""
pavolume Configuration File Parser

Loads the optional JSON configuration file and merges it over the built-in
defaults. Example ~/.config/pavolume/pavolume.json:

    {
        "command": "pacmd",
        "step": 5,
        "normalize_target": 100,
        "bar_width": 20,
        "keys": {"Up": "increase", "Down": "decrease", "space": "toggle-mute"}
    }
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

CONFIG_FILE = "~/.config/pavolume/pavolume.json"
CONFIG_ENV = "PAVOLUME_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "command": "pacmd",
    "step": 5,
    "native_max": 65536,
    "normalize_target": 100,
    "bar_width": 20,
    "keys": {
        "k": "increase",
        "+": "increase",
        "j": "decrease",
        "-": "decrease",
        "m": "toggle-mute",
        "q": "exit",
    },
}

# (name, minimum, maximum or None) of the integer settings
_INT_SETTINGS = (
    ("step", 0, 100),
    ("native_max", 1, None),
    ("normalize_target", 0, 100),
    ("bar_width", 1, None),
)


@dataclass
class Settings:
    command: str = DEFAULTS["command"]
    step: int = DEFAULTS["step"]
    native_max: int = DEFAULTS["native_max"]
    normalize_target: int = DEFAULTS["normalize_target"]
    bar_width: int = DEFAULTS["bar_width"]
    keys: Dict[str, str] = field(default_factory=lambda: dict(DEFAULTS["keys"]))


class ConfigParser:
    """Parser for the pavolume JSON config file"""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize the config parser

        Args:
            config_file: Path to config file (defaults to $PAVOLUME_CONFIG or
                         ~/.config/pavolume/pavolume.json)
        """
        path = config_file or os.environ.get(CONFIG_ENV) or CONFIG_FILE
        self.config_file = os.path.expanduser(path)
        self._config = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load the configuration file

        Returns:
            Dictionary containing the configuration data, empty if the file
            is missing or unreadable
        """
        if not os.path.exists(self.config_file):
            logger.debug(f"Config file {self.config_file} not found, using defaults")
            self._config = {}
            return self._config

        try:
            with open(self.config_file, 'r') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
            config = {}
        except OSError as e:
            logger.error(f"Error loading config file {self.config_file}: {e}")
            config = {}

        if not isinstance(config, dict):
            logger.error(f"Config file {self.config_file} must contain a JSON object")
            config = {}

        logger.debug(f"Loaded config from {self.config_file}: {config}")
        self._config = config
        return config

    def get_config(self) -> Dict[str, Any]:
        """Get the loaded configuration, loading it if necessary"""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def get_section(self, section: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Get a specific section from the configuration

        Args:
            section: Name of the section to retrieve
            default: Default value if section doesn't exist

        Returns:
            Dictionary containing the section data
        """
        return self.get_config().get(section, default or {})

    def reload_config(self) -> Dict[str, Any]:
        """Force reload the configuration file"""
        self._config = None
        return self.load_config()

    def get_settings(self) -> Settings:
        """
        Merge the configuration file over DEFAULTS

        Unknown keys are ignored. Keys in the "keys" section replace the
        default binding for that key; other default bindings are kept.
        Values of the wrong type or out of range are logged and the default
        is kept.
        """
        config = self.get_config()
        settings = Settings()

        if "command" in config:
            if isinstance(config["command"], str) and config["command"]:
                settings.command = config["command"]
            else:
                logger.error(f"Invalid command in {self.config_file}: {config['command']!r}, using default")

        for name, low, high in _INT_SETTINGS:
            if name not in config:
                continue
            value = config[name]
            if (isinstance(value, int) and not isinstance(value, bool)
                    and low <= value and (high is None or value <= high)):
                setattr(settings, name, value)
            else:
                logger.error(f"Invalid {name} in {self.config_file}: {value!r}, using default")

        keys = self.get_section("keys")
        if isinstance(keys, dict):
            settings.keys.update(keys)
        else:
            logger.error(f"Invalid keys in {self.config_file}: {keys!r}, using default bindings")
        return settings


# Global config parser instance
_config_parser = None


def get_config_parser(config_file: Optional[str] = None) -> ConfigParser:
    """
    Get the global configuration parser instance

    Args:
        config_file: Replace the global instance with one reading this file
    """
    global _config_parser
    if _config_parser is None or config_file is not None:
        _config_parser = ConfigParser(config_file)
    return _config_parser


def get_config() -> Dict[str, Any]:
    return get_config_parser().get_config()


def get_config_section(section: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return get_config_parser().get_section(section, default)


def reload_config() -> Dict[str, Any]:
    return get_config_parser().reload_config()


def load_settings(config_file: Optional[str] = None) -> Settings:
    return get_config_parser(config_file).get_settings()
