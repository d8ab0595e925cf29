"""
Main configuration manager for metadata-gen.

This module provides the ConfigManager class that loads the JSON
configuration file, merges it over the built-in defaults, applies
environment overrides and validates the result against the bundled
schema.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
)
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "validation": {},
    "keywords": {
        "fields": ["keywords"],
    },
    "metatags": {
        "separator": ", ",
        "fields": [
            {"key": "description", "attribute": "description", "kind": "name"},
            {"key": "keywords", "attribute": "keywords", "kind": "name"},
            {"key": "author", "attribute": "author", "kind": "name"},
            {"key": "title", "attribute": "og:title", "kind": "property"},
            {"key": "description", "attribute": "og:description", "kind": "property"},
        ],
    },
    "logging": {
        "level": "warning",
        "format": "standard",
    },
}


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge configuration dictionaries.

    Later configs override earlier ones; nested dictionaries are merged,
    every other value (lists included) is replaced.
    """
    result: Dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = merge_configs(result[key], value)
            else:
                result[key] = deepcopy(value)
    return result


class ConfigManager:
    """
    Configuration manager for metadata-gen.

    Handles loading, validation, and merging of configuration from multiple sources:
    - Built-in defaults
    - The user configuration file (optional)
    - Environment variables, including those from a .env file
    """

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
        environ: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to the configuration file. An explicit path
                must exist; the default metadatagen.config.json is optional.
            project_root: Directory for relative paths (default: current working directory)
            load_env: Whether to load environment variables from .env file
            environ: Environment mapping for overrides (default: os.environ)
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_config_file = config_file is not None
        self.config_file = str(config_file or self.paths.DEFAULT_CONFIG_FILE)

        self._config: Dict[str, Any] = {}
        self._loaded = False

        self.logger = logger

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator(self.file_ops, self.paths)
        self.env_handler = EnvironmentHandler(environ)

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load_config(self, force_reload: bool = False, validate: bool = True) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded
            validate: Whether to validate configuration against the schema

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicit config file is missing
            ConfigurationError: If the file is unreadable or invalid JSON
            ConfigurationValidationError: If validation fails
            EnvironmentVariableError: If an environment override is unusable
        """
        if self._loaded and not force_reload:
            self.logger.debug("Configuration already loaded, returning cached version")
            return deepcopy(self._config)

        config_path = self.file_ops.resolve_path(self.config_file)
        file_config: Dict[str, Any] = {}
        if config_path.exists():
            file_config = self.file_ops.load_json_file(config_path)
        elif self.explicit_config_file:
            raise ConfigurationFileNotFoundError(
                f"Configuration file not found: {config_path}",
                str(config_path),
                searched_paths=[str(self.project_root)]
            )
        else:
            self.logger.debug(f"No configuration file at {config_path}, using defaults")

        merged_config = merge_configs(DEFAULT_CONFIG, file_config)
        final_config = self.env_handler.apply_environment_overrides(merged_config)

        if validate:
            self.schema_validator.validate_config(final_config, config_file=str(config_path))

        self._config = final_config
        self._loaded = True
        self.logger.debug("Configuration loaded successfully")
        return deepcopy(self._config)

    def reload_config(self) -> Dict[str, Any]:
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (supports dot notation like 'metatags.separator')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        config = self.config

        try:
            for k in key.split('.'):
                config = config[k]
            return config
        except (KeyError, TypeError):
            return default

    def has(self, key: str) -> bool:
        """Check if a configuration key exists (supports dot notation)."""
        missing = object()
        return self.get(key, missing) is not missing

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value in memory using dot notation.

        Raises:
            ConfigurationError: If an intermediate key holds a non-mapping value
        """
        if not self._loaded:
            self.load_config()

        keys = key.split('.')
        config = self._config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
            if not isinstance(config, dict):
                raise ConfigurationError(f"Cannot set '{key}': '{k}' is not a section")
        config[keys[-1]] = value

    def reset(self) -> None:
        """Reset configuration state, forcing reload on next access."""
        self._config = {}
        self._loaded = False

    def validate_config(self, config: Optional[Dict[str, Any]] = None) -> bool:
        """Validate a configuration (the loaded one by default) against the schema."""
        if config is None:
            config = self.config
        return self.schema_validator.validate_config(config, config_file=self.config_file)
