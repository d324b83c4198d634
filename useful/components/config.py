"""
Configuration management for useful.

This module provides functionality for managing configuration,
including loading from environment variables, files and default values.
"""

import os
import json
import logging
import threading
from typing import Dict, Optional, Any
from copy import deepcopy
import yaml

# Set up logging
logger = logging.getLogger(__name__)


def to_int(value: Any) -> Optional[int]:
    """
    Convert a value to an integer.

    Args:
        value: Value to convert

    Returns:
        Integer value, or None if conversion failed
    """
    if value is None:
        return None

    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def to_bool(value: Any) -> Optional[bool]:
    """
    Convert a value to a boolean.

    Args:
        value: Value to convert

    Returns:
        Boolean value, or None if conversion failed
    """
    if value is None:
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        return bool(value)

    if isinstance(value, str):
        value = value.lower().strip()
        if value in ('true', 'yes', 'y', '1', 't'):
            return True
        if value in ('false', 'no', 'n', '0', 'f'):
            return False

    return None


def read_config_file(filepath: str) -> Dict[str, Any]:
    """
    Read a JSON or YAML configuration file.

    Args:
        filepath: Path to the file

    Returns:
        Configuration dictionary
    """
    if filepath.endswith('.json'):
        with open(filepath, 'r') as f:
            return json.load(f)
    elif filepath.endswith('.yaml') or filepath.endswith('.yml'):
        with open(filepath, 'r') as f:
            return yaml.safe_load(f) or {}
    else:
        raise ValueError(f"Unsupported configuration file format: {filepath}")


class Config:
    """
    Configuration manager for useful.
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            overrides: Optional configuration overrides
        """
        self._lock = threading.RLock()
        self._config = {}
        self._initialized = False

        # Load configuration
        self.load_config(overrides)

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> None:
        """
        Load configuration from all sources.

        Args:
            overrides: Optional configuration overrides
        """
        with self._lock:
            # Start with default configuration
            config = self._get_defaults()

            # Apply environment variables
            config = self._apply_env_vars(config)

            # Apply overrides
            if overrides:
                config = self._apply_overrides(config, overrides)

            # Store configuration
            self._config = config
            self._initialized = True

            logger.info("Configuration loaded")

    def _get_defaults(self) -> Dict[str, Any]:
        """
        Get default configuration values.

        Returns:
            Default configuration
        """
        return {
            # Number formatting
            'formatting': {
                'unit': 'K',
                'separator': ',',
                'digits': 0,
                'prefix': '',
                'scientific': False
            },

            # Hartigan's rule
            'hartigan': {
                'max-clusters': 12,
                'restarts': 1,
                'max-iterations': 10,
                'algorithm': 'Hartigan-Wong',
                'seed': None,
                'zero-division': 'inf'
            },

            # Plotting
            'plotting': {
                'line-color': 'grey',
                'line-style': '--',
                'line-width': 1.0
            },

            # Logging
            'logging': {
                'level': 'warn'
            }
        }

    def _apply_env_vars(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variables to configuration.

        Args:
            config: Current configuration

        Returns:
            Updated configuration
        """
        # Make a copy
        config = deepcopy(config)

        # Formatting
        formatting = config['formatting']
        formatting['unit'] = os.environ.get('USEFUL_FORMAT_UNIT', formatting['unit'])
        formatting['separator'] = os.environ.get('USEFUL_FORMAT_SEPARATOR', formatting['separator'])
        formatting['prefix'] = os.environ.get('USEFUL_FORMAT_PREFIX', formatting['prefix'])
        formatting['digits'] = to_int(os.environ.get('USEFUL_FORMAT_DIGITS', formatting['digits']))
        formatting['scientific'] = to_bool(os.environ.get('USEFUL_FORMAT_SCIENTIFIC', formatting['scientific']))

        # Hartigan's rule
        hartigan = config['hartigan']
        hartigan['max-clusters'] = to_int(os.environ.get('USEFUL_MAX_CLUSTERS', hartigan['max-clusters']))
        hartigan['restarts'] = to_int(os.environ.get('USEFUL_RESTARTS', hartigan['restarts']))
        hartigan['max-iterations'] = to_int(os.environ.get('USEFUL_MAX_ITERATIONS', hartigan['max-iterations']))
        hartigan['algorithm'] = os.environ.get('USEFUL_ALGORITHM', hartigan['algorithm'])
        hartigan['seed'] = to_int(os.environ.get('USEFUL_SEED', hartigan['seed']))
        hartigan['zero-division'] = os.environ.get('USEFUL_ZERO_DIVISION', hartigan['zero-division']).lower()

        # Logging
        config['logging']['level'] = os.environ.get('LOG_LEVEL', config['logging']['level']).lower()

        return config

    def _apply_overrides(self, config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply configuration overrides.

        Args:
            config: Current configuration
            overrides: Configuration overrides

        Returns:
            Updated configuration
        """
        # Make a copy
        config = deepcopy(config)

        # Helper function for deep update
        def deep_update(d, u):
            for k, v in u.items():
                if isinstance(v, dict) and k in d and isinstance(d[k], dict):
                    d[k] = deep_update(d[k], v)
                else:
                    d[k] = v
            return d

        # Apply overrides
        return deep_update(config, overrides)

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            path: Configuration path (dot-separated)
            default: Default value if not found

        Returns:
            Configuration value, or default if not found
        """
        if not self._initialized:
            self.load_config()

        value = self._config
        for component in path.split('.'):
            if isinstance(value, dict) and component in value:
                value = value[component]
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            path: Configuration path (dot-separated)
            value: Configuration value
        """
        with self._lock:
            if not self._initialized:
                self.load_config()

            components = path.split('.')
            config = self._config
            for component in components[:-1]:
                if component not in config:
                    config[component] = {}
                config = config[component]

            config[components[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to a dictionary.

        Returns:
            Configuration dictionary
        """
        if not self._initialized:
            self.load_config()

        return deepcopy(self._config)

    def save_to_file(self, filepath: str) -> None:
        """
        Save configuration to a file.

        Args:
            filepath: Path to save configuration
        """
        if not self._initialized:
            self.load_config()

        # Determine file format from extension
        if filepath.endswith('.json'):
            with open(filepath, 'w') as f:
                json.dump(self._config, f, indent=2)
        elif filepath.endswith('.yaml') or filepath.endswith('.yml'):
            with open(filepath, 'w') as f:
                yaml.dump(self._config, f, default_flow_style=False)
        else:
            raise ValueError(f"Unsupported file format: {filepath}")

    def load_from_file(self, filepath: str) -> None:
        """
        Load configuration from a file.

        Args:
            filepath: Path to load configuration from
        """
        self.load_config(read_config_file(filepath))


class ConfigManager:
    """
    Singleton manager for configuration.
    """

    _instance = None
    _lock = threading.RLock()

    @classmethod
    def get_config(cls, overrides: Optional[Dict[str, Any]] = None) -> Config:
        """
        Get the configuration instance.

        Args:
            overrides: Optional configuration overrides

        Returns:
            Config instance
        """
        with cls._lock:
            if cls._instance is None:
                cls._instance = Config(overrides)
            elif overrides:
                cls._instance.load_config(overrides)

            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared configuration instance."""
        with cls._lock:
            cls._instance = None
