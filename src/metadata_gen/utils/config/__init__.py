"""Configuration management package.

This package provides the configuration system with support for:
- JSON schema validation
- Environment variable overrides (including a .env file)
- Built-in default values

Usage:
    from metadata_gen.utils.config import ConfigManager

    config = ConfigManager()
    separator = config.get("metatags.separator", ", ")
"""

from .manager import DEFAULT_CONFIG, ConfigManager, merge_configs
from .paths import ConfigPaths
from .file_operations import FileOperations
from .schema_validation import SchemaValidator
from .environment import EnvironmentHandler

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'DEFAULT_CONFIG',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
    'merge_configs',
]
