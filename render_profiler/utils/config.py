# render_profiler/utils/config.py - Configuration management
"""
Configuration management for the profiler.
Loads report and output settings from YAML files.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging


class Config:
    """
    Configuration manager for the profiler.

    Severity thresholds are fixed and not part of the configuration; only
    report sizes and output settings can be changed.
    """

    DEFAULT_CONFIG = {
        'report': {
            'top_components': 10,
            'slowest_renders': 15,
            'top_pages': 10,
        },
        'output': {
            'format': 'stdout',
            'use_colors': True,
            'directory': '.',
        },
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML configuration file
        """
        self.logger = logging.getLogger(__name__)
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str):
        """
        Load configuration from YAML file.

        Args:
            config_file: Path to YAML file

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If the top level is not a mapping
        """
        config_path = Path(config_file)

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_file}, using defaults")
            return

        try:
            with open(config_path, 'r') as f:
                loaded_config = yaml.safe_load(f) or {}

            if not isinstance(loaded_config, dict):
                raise ValueError(f"Config file {config_file} must contain a mapping")

            self._merge_config(self.config, loaded_config)
            self.logger.info(f"Loaded configuration from {config_file}")

        except Exception as e:
            self.logger.error(f"Failed to load config: {e}")
            raise

    def _merge_config(self, base: Dict, override: Dict):
        """
        Recursively merge configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'report.top_components')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'output.format')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            config = config.setdefault(k, {})

        config[keys[-1]] = value

    def to_dict(self) -> Dict:
        """
        Get full configuration as dictionary.

        Returns:
            Copy of the configuration dictionary
        """
        return copy.deepcopy(self.config)

    def save_to_file(self, config_file: str):
        """
        Save current configuration to YAML file.

        Args:
            config_file: Path to output YAML file
        """
        try:
            with open(Path(config_file), 'w') as f:
                yaml.safe_dump(self.config, f, default_flow_style=False)

            self.logger.info(f"Saved configuration to {config_file}")

        except Exception as e:
            self.logger.error(f"Failed to save config: {e}")
            raise
