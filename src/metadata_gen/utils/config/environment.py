"""
Environment variable handling for configuration management.

Maps ``METADATA_GEN_*`` environment variables onto configuration keys
and converts their string values to the types the schema expects.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None) -> None:
        """
        Args:
            environ: Environment to read (default: os.environ)
        """
        self.environ = environ if environ is not None else os.environ
        self.logger = logger

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """Map environment variable names to (config key, target type)."""
        return {
            'METADATA_GEN_SEPARATOR': ('metatags.separator', 'string'),
            'METADATA_GEN_KEYWORD_FIELDS': ('keywords.fields', 'list'),
            'METADATA_GEN_LOG_LEVEL': ('logging.level', 'string'),
        }

    def convert_env_value(self, value: str, target_type: str = 'string', var_name: Optional[str] = None) -> Any:
        """
        Convert an environment variable string to the target type.

        Args:
            value: Environment variable value
            target_type: 'string' or 'list' (comma separated)
            var_name: Variable name for error reporting

        Raises:
            EnvironmentVariableError: If the value is unusable
        """
        if target_type == 'list':
            items = [item.strip() for item in value.split(',') if item.strip()]
            if not items:
                raise EnvironmentVariableError(
                    f"Environment variable {var_name} must list at least one value",
                    var_name
                )
            return items
        if target_type == 'string':
            return value
        raise EnvironmentVariableError(f"Unsupported target type '{target_type}'", var_name)

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Base configuration dictionary (not modified)

        Returns:
            Configuration with environment overrides applied
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.get_env_mapping().items():
            env_value = self.environ.get(env_var)
            if env_value is None:
                continue
            converted_value = self.convert_env_value(env_value, target_type, env_var)
            self._set_nested_value(result, config_key, converted_value)
            self.logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
