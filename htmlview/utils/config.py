"""
Configuration utility for htmlview.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HTMLVIEW_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "selector": {
        "strict": False,
        "union_dedup": "identity"
    },
    "debug": {
        "max_elements": 10,
        "show_content": True,
        "show_attributes": True
    },
    "logging": {
        "level": "WARNING",
        "file": None
    }
}


class Config:
    """JSON backed configuration with dotted key access."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration.

        Args:
            config_path: Path to a JSON config file. Without one the
                configuration holds defaults only and is never written.
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    @classmethod
    def from_env(cls) -> 'Config':
        """Create a configuration from the file named by HTMLVIEW_CONFIG, if set."""
        return cls(os.environ.get(CONFIG_ENV_VAR) or None)

    def load(self) -> None:
        """
        Load configuration from file, layered over the defaults.

        Raises:
            ValueError: If the file exists but is not a JSON object
        """
        self._set_defaults()
        if not self.config_path:
            return
        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            return

        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid configuration file {self.config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {self.config_path} must hold a JSON object")

        with self._lock:
            _merge(self.config, data)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self) -> None:
        """Save configuration to file."""
        if not self.config_path:
            raise ValueError("No configuration path set")

        with self._lock:
            config_copy = copy.deepcopy(self.config)

        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'selector.strict')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]

            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots)
            value: Configuration value
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]

            config[parts[-1]] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Configuration key

        Returns:
            bool: True if key was removed
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return False
                config = config[part]

            if parts[-1] in config:
                del config[parts[-1]]
                return True
            return False

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self.config)

    def _set_defaults(self) -> None:
        with self._lock:
            self.config = copy.deepcopy(DEFAULTS)


def _merge(target: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value
